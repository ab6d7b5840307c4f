"""
Currency Conversion using a public exchange-rate API

DESIGN DECISION: Rates come from api.exchangerate-api.com because:
1. No API key is needed
2. One GET returns every rate for a base currency
3. The response shape is a plain {"rates": {CODE: number}} mapping

This service handles:
1. Fetching the rate table for the source currency
2. Looking up the target currency in that table
3. Rounding the converted amount for display
4. Converting a whole list of expenses, one record at a time

CRITICAL: A missing rate is an error. We never convert to zero or NaN.
There is no caching and no retry; every conversion is one fresh request,
bounded by the configured timeout.
"""

import numbers
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

import requests
import structlog

from expense_tracker.config import get_settings
from expense_tracker.models.expense import ConversionOutcome, ExpenseRecord


TWO_PLACES = Decimal("0.01")


class ConversionError(Exception):
    """Base exception for currency conversion errors."""
    pass


class RateServiceError(ConversionError):
    """The rate service could not be reached or answered with an error."""
    pass


class MalformedRateResponseError(ConversionError):
    """The rate service answered with something other than a rate table."""
    pass


class MissingRateError(ConversionError):
    """The rate table has no entry for the requested target currency."""

    def __init__(self, from_currency: str, to_currency: str):
        self.from_currency = from_currency
        self.to_currency = to_currency
        super().__init__(f"No {from_currency} -> {to_currency} rate available")


class ExchangeRateClient:
    """
    Thin HTTP client for the rate service.

    The session is injectable so tests never touch the network.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        settings = get_settings().rates
        self._session = session or requests.Session()
        self._base_url = (base_url or settings.base_url).rstrip("/")
        self._timeout = timeout if timeout is not None else settings.timeout_seconds
        self._logger = structlog.get_logger(__name__)

    def fetch_rates(self, base_currency: str) -> dict[str, float]:
        """
        Fetch the rate table for ``base_currency``.

        Returns:
            Mapping of currency code to units of that currency per one base unit

        Raises:
            RateServiceError: If the request fails or returns an HTTP error
            MalformedRateResponseError: If the body is not a usable rate table
        """
        url = f"{self._base_url}/{base_currency}"
        self._logger.debug("rate_request", url=url)

        try:
            response = self._session.get(url, timeout=self._timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise RateServiceError(f"Rate lookup for {base_currency} failed: {e}") from e

        try:
            body = response.json()
        except ValueError as e:
            raise MalformedRateResponseError(
                f"Rate service returned non-JSON for {base_currency}"
            ) from e

        rates = body.get("rates") if isinstance(body, dict) else None
        if not isinstance(rates, dict):
            raise MalformedRateResponseError(
                f"Rate service response for {base_currency} has no 'rates' table"
            )

        # Non-numeric entries are dropped so a lookup on them reads as missing
        return {
            str(code).upper(): float(value)
            for code, value in rates.items()
            if isinstance(value, numbers.Real) and not isinstance(value, bool)
        }


class CurrencyConverter:
    """
    Converts amounts between currencies using live rates.

    IMPORTANT BOUNDARIES:
    1. One request per conversion, nothing is cached
    2. Results are rounded half-up to two decimal places
    3. convert_all() isolates failures per record
    """

    def __init__(self, client: Optional[ExchangeRateClient] = None):
        self._client = client or ExchangeRateClient()
        self._logger = structlog.get_logger(__name__)

    def convert(self, amount: float, from_currency: str, to_currency: str) -> Decimal:
        """
        Convert ``amount`` from one currency to another.

        Raises:
            ConversionError: If the rate cannot be fetched or is missing
        """
        from_code = from_currency.strip().upper()
        to_code = to_currency.strip().upper()

        rates = self._client.fetch_rates(from_code)
        if to_code not in rates:
            raise MissingRateError(from_code, to_code)

        # Decimal arithmetic on the decimal strings so 10 * 0.9235 is exactly 9.235
        converted = Decimal(str(amount)) * Decimal(str(rates[to_code]))
        return converted.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)

    def convert_all(
        self,
        records: Iterable[ExpenseRecord],
        to_currency: str,
    ) -> list[ConversionOutcome]:
        """
        Convert every record to ``to_currency``.

        A failure for one record is captured in its outcome and logged;
        the remaining records are still converted.
        """
        to_code = to_currency.strip().upper()
        outcomes = []

        for record in records:
            try:
                converted = self.convert(record.amount, record.currency, to_code)
            except ConversionError as e:
                self._logger.warning(
                    "conversion_skipped",
                    category=record.category,
                    from_currency=record.currency,
                    to_currency=to_code,
                    error=str(e),
                )
                outcomes.append(ConversionOutcome(
                    record=record,
                    target_currency=to_code,
                    error=str(e),
                ))
                continue

            outcomes.append(ConversionOutcome(
                record=record,
                target_currency=to_code,
                converted_amount=converted,
            ))

        return outcomes
