"""Currency conversion services package."""

from expense_tracker.services.rates.exchange_rate_service import (
    ConversionError,
    CurrencyConverter,
    ExchangeRateClient,
    MalformedRateResponseError,
    MissingRateError,
    RateServiceError,
)

__all__ = [
    "ConversionError",
    "CurrencyConverter",
    "ExchangeRateClient",
    "MalformedRateResponseError",
    "MissingRateError",
    "RateServiceError",
]
