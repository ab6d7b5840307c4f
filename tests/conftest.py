"""
Shared fixtures for Expense Tracker tests

No test touches the network: rate lookups go through FakeSession.
Every test runs inside its own temporary working directory.
"""

from datetime import date

import pytest
import requests

from expense_tracker.config import get_settings
from expense_tracker.models.expense import ExpenseRecord


_NOT_JSON = object()


class FakeResponse:
    """Just enough of requests.Response for ExchangeRateClient."""

    def __init__(self, payload=None, status_code: int = 200):
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def json(self):
        if self._payload is _NOT_JSON:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


class FakeSession:
    """
    Stands in for requests.Session.

    ``responses`` maps a base currency code to a FakeResponse or to an
    exception to raise. Unknown bases raise ConnectionError.
    """

    def __init__(self, responses: dict):
        self._responses = responses
        self.calls: list[tuple[str, float]] = []

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        base = url.rsplit("/", 1)[-1]
        response = self._responses.get(base)
        if response is None:
            raise requests.ConnectionError(f"Failed to establish a connection to {url}")
        if isinstance(response, Exception):
            raise response
        return response


def rates_response(rates: dict, base: str = "USD") -> FakeResponse:
    return FakeResponse({"base": base, "date": "2024-12-01", "rates": rates})


def not_json_response() -> FakeResponse:
    return FakeResponse(_NOT_JSON)


@pytest.fixture(autouse=True)
def isolated_workdir(tmp_path, monkeypatch):
    """Run each test in a fresh directory with fresh settings."""
    monkeypatch.chdir(tmp_path)
    for var in ("EXPENSES_DATA_FILE", "RATES_BASE_URL", "RATES_TIMEOUT_SECONDS",
                "REPORT_PDF_PATH", "REPORT_CHART_PATH", "LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield tmp_path
    get_settings.cache_clear()


@pytest.fixture
def sample_records() -> list[ExpenseRecord]:
    return [
        ExpenseRecord(category="Food", amount=10, currency="USD", date=date(2024, 12, 1)),
        ExpenseRecord(category="Food", amount=5, currency="USD", date=date(2024, 12, 2)),
        ExpenseRecord(category="Transport", amount=3, currency="USD", date=date(2024, 12, 3)),
    ]
