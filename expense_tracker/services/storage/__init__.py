"""
Storage Services Package

Provides the abstract store interface and its implementations.
The JSON file is the real backend; the in-memory store backs tests.
"""

from expense_tracker.services.storage.interface import (
    ExpenseStoreInterface,
    MalformedStoreError,
    StorageError,
    StoreWriteError,
)
from expense_tracker.services.storage.json_file import JsonFileExpenseStore
from expense_tracker.services.storage.memory import InMemoryExpenseStore

__all__ = [
    # Interface
    "ExpenseStoreInterface",
    # Exceptions
    "MalformedStoreError",
    "StorageError",
    "StoreWriteError",
    # Implementations
    "InMemoryExpenseStore",
    "JsonFileExpenseStore",
]
