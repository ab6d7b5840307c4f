"""Aggregation package."""

from expense_tracker.queries.aggregator import CategoryTotals, totals_by_category

__all__ = ["CategoryTotals", "totals_by_category"]
