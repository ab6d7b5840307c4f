"""Report rendering package."""

from expense_tracker.reports.chart import ExpenseChartRenderer
from expense_tracker.reports.errors import ReportError
from expense_tracker.reports.pdf_report import PdfReportRenderer

__all__ = [
    "ExpenseChartRenderer",
    "PdfReportRenderer",
    "ReportError",
]
