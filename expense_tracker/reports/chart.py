"""
Spending Pie Chart

Draws one wedge per category, sized by the category total, into a
fixed-size PNG. Uses the non-interactive Agg backend so it works in a
plain terminal session without a display.
"""

from pathlib import Path
from typing import Optional

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from expense_tracker.config import get_settings
from expense_tracker.queries.aggregator import CategoryTotals
from expense_tracker.reports.errors import ReportError


CHART_TITLE = "Expenses by Category"
PALETTE = ["#FF6384", "#36A2EB", "#FFCE56", "#4BC0C0", "#9966FF"]
DPI = 100


class ExpenseChartRenderer:
    """Renders per-category totals as a pie chart image."""

    def __init__(
        self,
        width: Optional[int] = None,
        height: Optional[int] = None,
    ):
        settings = get_settings().reports
        self._width = width or settings.chart_width
        self._height = height or settings.chart_height

    def render(self, totals: CategoryTotals, path: Path) -> Path:
        """
        Render ``totals`` to a PNG at ``path``.

        Zero-valued categories stay in the legend even though their
        wedge has no area.

        Raises:
            ReportError: If there is nothing to draw, a total is negative,
                or the image cannot be written
        """
        path = Path(path)
        labels, values = totals.labels, totals.values

        if not labels:
            raise ReportError("No expenses to chart")
        negative = [label for label, value in zip(labels, values) if value < 0]
        if negative:
            raise ReportError(
                f"Cannot chart negative totals: {', '.join(negative)}"
            )
        if sum(values) == 0:
            raise ReportError("All category totals are zero; nothing to chart")

        colors = [PALETTE[i % len(PALETTE)] for i in range(len(labels))]

        fig = plt.figure(figsize=(self._width / DPI, self._height / DPI), dpi=DPI)
        try:
            ax = fig.add_subplot(1, 1, 1)
            wedges, _ = ax.pie(values, colors=colors, startangle=90, counterclock=False)
            ax.set_title(CHART_TITLE)
            ax.axis("equal")
            ax.legend(wedges, labels, loc="center left", bbox_to_anchor=(1.0, 0.5))
            fig.savefig(path, dpi=DPI, format="png")
        except (OSError, ValueError) as e:
            raise ReportError(f"Failed to render chart to {path}: {e}") from e
        finally:
            plt.close(fig)

        return path
