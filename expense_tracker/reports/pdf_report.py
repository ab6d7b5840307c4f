"""
PDF Expense Report

Renders the stored expenses, in store order, as a simple document:
a centred "Monthly Expenses Report" title followed by one line per
expense in the form ``[date] category: $amount currency``.

reportlab's platypus layout flows the lines onto as many pages as needed.
"""

from pathlib import Path
from typing import Sequence
from xml.sax.saxutils import escape

from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer

from expense_tracker.models.expense import ExpenseRecord
from expense_tracker.reports.errors import ReportError


REPORT_TITLE = "Monthly Expenses Report"


class PdfReportRenderer:
    """Writes the expense listing to a PDF file."""

    def __init__(self, title: str = REPORT_TITLE):
        self._title = title

    def build_story(self, records: Sequence[ExpenseRecord]) -> list:
        """Build the platypus flowables for ``records``."""
        styles = getSampleStyleSheet()
        story = [
            Paragraph(escape(self._title), styles["Title"]),
            Spacer(1, 0.2 * inch),
        ]
        # Paragraph parses inline markup, so user text is escaped
        for record in records:
            story.append(Paragraph(escape(record.describe()), styles["Normal"]))
        return story

    def render(self, records: Sequence[ExpenseRecord], path: Path) -> Path:
        """
        Render ``records`` to ``path``.

        An empty store still produces a report holding just the title.

        Raises:
            ReportError: If the document cannot be built or written
        """
        path = Path(path)
        doc = SimpleDocTemplate(
            str(path),
            pagesize=letter,
            title=self._title,
            leftMargin=0.75 * inch,
            rightMargin=0.75 * inch,
            topMargin=0.75 * inch,
            bottomMargin=0.75 * inch,
        )
        try:
            doc.build(self.build_story(records))
        except OSError as e:
            raise ReportError(f"Failed to write PDF report to {path}: {e}") from e
        except Exception as e:
            raise ReportError(f"Failed to build PDF report: {e}") from e
        return path
