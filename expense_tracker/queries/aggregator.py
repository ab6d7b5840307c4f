"""
Expense Aggregation

DESIGN DECISION: Aggregation is a pure function over the loaded records.
It never touches storage, so the chart and any future summary read
exactly what the store returned.

KNOWN LIMITATION: amounts are summed with plain float addition
regardless of currency. A category holding both USD and EUR expenses
adds incompatible units. CategoryTotals.mixed_currency_categories()
exposes those categories so callers can warn about them.
"""

from typing import Iterable

from expense_tracker.models.expense import ExpenseRecord


def totals_by_category(records: Iterable[ExpenseRecord]) -> dict[str, float]:
    """
    Sum amounts per category in a single pass.

    Categories are grouped by exact string equality and keep the order
    in which they were first seen. Empty input gives an empty dict.
    """
    totals: dict[str, float] = {}
    for record in records:
        totals[record.category] = totals.get(record.category, 0.0) + record.amount
    return totals


class CategoryTotals:
    """
    Per-category totals in first-seen order, shaped for charting.

    labels and values are parallel lists.
    """

    def __init__(self, records: Iterable[ExpenseRecord]):
        records = list(records)
        self._totals = totals_by_category(records)
        self._currencies: dict[str, list[str]] = {}
        for record in records:
            seen = self._currencies.setdefault(record.category, [])
            if record.currency not in seen:
                seen.append(record.currency)

    @property
    def labels(self) -> list[str]:
        return list(self._totals.keys())

    @property
    def values(self) -> list[float]:
        return list(self._totals.values())

    def as_dict(self) -> dict[str, float]:
        return dict(self._totals)

    def currencies_by_category(self) -> dict[str, list[str]]:
        return {category: list(codes) for category, codes in self._currencies.items()}

    def mixed_currency_categories(self) -> dict[str, list[str]]:
        """Categories whose total adds more than one currency."""
        return {
            category: list(codes)
            for category, codes in self._currencies.items()
            if len(codes) > 1
        }

    def __len__(self) -> int:
        return len(self._totals)

    def __bool__(self) -> bool:
        return bool(self._totals)
