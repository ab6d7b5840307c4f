"""In-memory expense store, used by tests and dry runs."""

from typing import Optional, Sequence

from expense_tracker.models.expense import ExpenseRecord
from expense_tracker.services.storage.interface import ExpenseStoreInterface


class InMemoryExpenseStore(ExpenseStoreInterface):
    """Keeps the sequence in a list; load() hands out copies."""

    def __init__(self, records: Optional[Sequence[ExpenseRecord]] = None):
        self._records = list(records or [])
        self.save_count = 0

    def load(self) -> list[ExpenseRecord]:
        return list(self._records)

    def save(self, records: Sequence[ExpenseRecord]) -> None:
        self._records = list(records)
        self.save_count += 1
