"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Keep the flows free of any file path or global state
2. Use in-memory storage for testing
3. Swap the JSON file for something else without touching callers

The interface is intentionally tiny. Every save rewrites the whole
sequence; there is no partial update, edit or delete.
"""

from abc import ABC, abstractmethod
from typing import Sequence

from expense_tracker.models.expense import ExpenseRecord


class ExpenseStoreInterface(ABC):
    """
    Abstract interface for expense storage.

    The store is an ordered sequence: insertion order is display order.
    """

    @abstractmethod
    def load(self) -> list[ExpenseRecord]:
        """
        Load every stored expense, in insertion order.

        Returns:
            The stored records; an empty list if nothing was ever saved

        Raises:
            MalformedStoreError: If stored data exists but cannot be parsed
            StorageError: If stored data exists but cannot be read
        """
        pass

    @abstractmethod
    def save(self, records: Sequence[ExpenseRecord]) -> None:
        """
        Replace the stored sequence with ``records``.

        Readers never observe a partially written store. On failure
        the previous contents are left unchanged.

        Raises:
            StoreWriteError: If the new contents could not be written
        """
        pass

    def append(self, record: ExpenseRecord) -> list[ExpenseRecord]:
        """
        Add one record to the end of the store and persist immediately.

        Returns:
            The full sequence after the append
        """
        records = self.load()
        records.append(record)
        self.save(records)
        return records


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class MalformedStoreError(StorageError):
    """Stored data exists but is not a valid list of expenses."""
    pass


class StoreWriteError(StorageError):
    """Could not write the store; previous contents are intact."""
    pass
