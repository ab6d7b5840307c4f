"""Services package."""

from expense_tracker.services.rates import (
    ConversionError,
    CurrencyConverter,
    ExchangeRateClient,
    MalformedRateResponseError,
    MissingRateError,
    RateServiceError,
)
from expense_tracker.services.storage import (
    ExpenseStoreInterface,
    InMemoryExpenseStore,
    JsonFileExpenseStore,
    MalformedStoreError,
    StorageError,
    StoreWriteError,
)

__all__ = [
    # Currency conversion
    "ConversionError",
    "CurrencyConverter",
    "ExchangeRateClient",
    "MalformedRateResponseError",
    "MissingRateError",
    "RateServiceError",
    # Storage services
    "ExpenseStoreInterface",
    "InMemoryExpenseStore",
    "JsonFileExpenseStore",
    "MalformedStoreError",
    "StorageError",
    "StoreWriteError",
]
