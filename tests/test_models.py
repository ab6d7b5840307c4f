"""
Tests for Expense Tracker models

Test strategy:
1. Unit tests for individual components (models, store, aggregator, converter)
2. Flow tests for the orchestrator and menu (with fake HTTP sessions)
3. No real API calls in tests
"""

import json
from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest
from pydantic import ValidationError

from expense_tracker.models.expense import (
    ConversionOutcome,
    ExpenseRecord,
    format_amount,
)
from expense_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)


class TestExpenseRecord:
    """Tests for the ExpenseRecord model."""

    def test_expense_record_creation(self):
        """Test ExpenseRecord model creation."""
        record = ExpenseRecord(
            category="Food",
            amount=12.5,
            currency="USD",
            date=date(2024, 12, 15),
        )
        assert record.category == "Food"
        assert record.amount == 12.5
        assert record.date == date(2024, 12, 15)

    def test_date_defaults_to_today(self):
        record = ExpenseRecord(category="Food", amount=1, currency="USD")
        assert record.date == date.today()

    def test_strips_whitespace_and_uppercases_currency(self):
        """Test that whitespace is stripped and currency codes are normalized."""
        record = ExpenseRecord(category="  Food  ", amount=1, currency=" usd ")
        assert record.category == "Food"
        assert record.currency == "USD"

    def test_negative_amount_is_allowed(self):
        record = ExpenseRecord(category="Refund", amount=-20, currency="EUR")
        assert record.amount == -20

    def test_zero_amount_is_allowed(self):
        record = ExpenseRecord(category="Free", amount=0, currency="EUR")
        assert record.amount == 0

    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), "abc"])
    def test_rejects_non_numeric_amount(self, bad):
        """Test that NaN, infinity and text never make it into a record."""
        with pytest.raises(ValidationError):
            ExpenseRecord(category="Food", amount=bad, currency="USD")

    def test_rejects_empty_category(self):
        with pytest.raises(ValidationError):
            ExpenseRecord(category="   ", amount=1, currency="USD")

    def test_rejects_empty_currency(self):
        with pytest.raises(ValidationError):
            ExpenseRecord(category="Food", amount=1, currency="")

    def test_record_is_immutable(self):
        record = ExpenseRecord(category="Food", amount=1, currency="USD")
        with pytest.raises(ValidationError):
            record.amount = 2

    def test_serializes_date_as_iso_string(self):
        record = ExpenseRecord(
            category="Food", amount=10, currency="USD", date=date(2024, 1, 5)
        )
        data = json.loads(record.model_dump_json())
        assert data == {
            "category": "Food",
            "amount": 10.0,
            "currency": "USD",
            "date": "2024-01-05",
        }

    def test_describe_matches_report_line(self):
        record = ExpenseRecord(
            category="Food", amount=12.5, currency="USD", date=date(2024, 12, 1)
        )
        assert record.describe() == "[2024-12-01] Food: $12.5 USD"

    def test_format_amount(self):
        assert format_amount(12.0) == "12"
        assert format_amount(0.0) == "0"
        assert format_amount(-3.0) == "-3"
        assert format_amount(12.5) == "12.5"


class TestConversionOutcome:
    """Tests for ConversionOutcome."""

    def _record(self):
        return ExpenseRecord(category="Food", amount=10, currency="USD")

    def test_success_outcome(self):
        outcome = ConversionOutcome(
            record=self._record(),
            target_currency="EUR",
            converted_amount=Decimal("9.24"),
        )
        assert outcome.succeeded is True

    def test_failure_outcome(self):
        outcome = ConversionOutcome(
            record=self._record(),
            target_currency="EUR",
            error="No USD -> EUR rate available",
        )
        assert outcome.succeeded is False

    def test_requires_exactly_one_result(self):
        with pytest.raises(ValueError, match="exactly one"):
            ConversionOutcome(record=self._record(), target_currency="EUR")
        with pytest.raises(ValueError, match="exactly one"):
            ConversionOutcome(
                record=self._record(),
                target_currency="EUR",
                converted_amount=Decimal("1.00"),
                error="boom",
            )


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            description="Test expense added",
        )
        assert event.event_type == AuditEventType.EXPENSE_ADDED
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEvent(
            event_type=AuditEventType.REPORT_GENERATED,
            description="PDF written",
            details={"path": "expenses_report.pdf", "item_count": 3},
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "report_generated"
        assert log_dict["details"]["item_count"] == 3

    def test_audit_event_builder_expense_added(self):
        """Test AuditEventBuilder.expense_added."""
        correlation_id = uuid4()

        event = AuditEventBuilder.expense_added(
            category="Food",
            amount=12.5,
            currency="USD",
            store_size=4,
            correlation_id=correlation_id,
        )

        assert event.event_type == AuditEventType.EXPENSE_ADDED
        assert event.correlation_id == correlation_id
        assert event.details["store_size"] == 4
        assert event.is_user_action is True

    def test_audit_event_builder_report_kinds(self):
        pdf = AuditEventBuilder.report_generated("pdf", "r.pdf", 2)
        chart = AuditEventBuilder.report_generated("chart", "c.png", 2)
        assert pdf.event_type == AuditEventType.REPORT_GENERATED
        assert chart.event_type == AuditEventType.CHART_GENERATED

    def test_conversion_completed_severity(self):
        clean = AuditEventBuilder.conversion_completed("EUR", succeeded=2, failed=0)
        partial = AuditEventBuilder.conversion_completed("EUR", succeeded=1, failed=1)
        assert clean.severity == AuditSeverity.INFO
        assert partial.severity == AuditSeverity.WARNING


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
