"""
Audit Models for Expense Tracker

Every menu action produces audit events describing what happened.
This provides:
1. Traceability of every add, report and conversion
2. Debugging information when a file or the rate service misbehaves
3. A single place where event wording is defined

DESIGN DECISION: Audit events are emitted to the structured log only.
The expenses file is the one and only thing this tool persists.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """
    Types of events we audit.

    Each menu action has its own success and failure event types.
    """
    # Recording
    EXPENSE_ADDED = "expense_added"
    EXPENSES_LISTED = "expenses_listed"

    # Storage
    STORE_LOAD_FAILED = "store_load_failed"
    STORE_SAVE_FAILED = "store_save_failed"

    # Reports
    REPORT_GENERATED = "report_generated"
    CHART_GENERATED = "chart_generated"
    REPORT_FAILED = "report_failed"
    MIXED_CURRENCY_CATEGORY = "mixed_currency_category"

    # Currency conversion
    CONVERSION_FAILED = "conversion_failed"
    CONVERSION_COMPLETED = "conversion_completed"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    Every menu action creates at least one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'expense', 'store', 'report')"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID shared by all events of one menu action"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered directly by a user choice?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.expense_added("Food", 12.5, "USD", correlation_id)
        event = AuditEventBuilder.conversion_failed("EUR", "JPY", str(e), correlation_id)
    """

    @staticmethod
    def expense_added(
        category: str,
        amount: float,
        currency: str,
        store_size: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            entity_type="expense",
            correlation_id=correlation_id,
            description=f"Expense added: {category} {amount} {currency}",
            details={
                "category": category,
                "amount": amount,
                "currency": currency,
                "store_size": store_size,
            },
            is_user_action=True,
        )

    @staticmethod
    def expenses_listed(
        count: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSES_LISTED,
            severity=AuditSeverity.DEBUG,
            entity_type="store",
            correlation_id=correlation_id,
            description=f"Listed {count} expenses",
            details={"count": count},
            is_user_action=True,
        )

    @staticmethod
    def store_load_failed(
        path: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORE_LOAD_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="store",
            correlation_id=correlation_id,
            description=f"Could not load expenses from {path}",
            details={"path": path},
            error_message=error_message,
        )

    @staticmethod
    def store_save_failed(
        path: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORE_SAVE_FAILED,
            severity=AuditSeverity.CRITICAL,
            entity_type="store",
            correlation_id=correlation_id,
            description=f"Could not save expenses to {path}",
            details={"path": path},
            error_message=error_message,
        )

    @staticmethod
    def report_generated(
        kind: str,
        path: str,
        item_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        event_type = (
            AuditEventType.CHART_GENERATED if kind == "chart"
            else AuditEventType.REPORT_GENERATED
        )
        return AuditEvent(
            event_type=event_type,
            entity_type="report",
            correlation_id=correlation_id,
            description=f"{kind.upper()} written to {path}",
            details={"kind": kind, "path": path, "item_count": item_count},
            is_user_action=True,
        )

    @staticmethod
    def report_failed(
        kind: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REPORT_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="report",
            correlation_id=correlation_id,
            description=f"{kind.upper()} generation failed",
            details={"kind": kind},
            error_message=error_message,
        )

    @staticmethod
    def mixed_currency_category(
        category: str,
        currencies: list[str],
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.MIXED_CURRENCY_CATEGORY,
            severity=AuditSeverity.WARNING,
            entity_type="report",
            correlation_id=correlation_id,
            description=f"Category {category} sums amounts in {len(currencies)} currencies",
            details={"category": category, "currencies": currencies},
        )

    @staticmethod
    def conversion_failed(
        from_currency: str,
        to_currency: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CONVERSION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="conversion",
            correlation_id=correlation_id,
            description=f"Conversion {from_currency} -> {to_currency} failed",
            details={"from": from_currency, "to": to_currency},
            error_message=error_message,
        )

    @staticmethod
    def conversion_completed(
        to_currency: str,
        succeeded: int,
        failed: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CONVERSION_COMPLETED,
            severity=AuditSeverity.WARNING if failed else AuditSeverity.INFO,
            entity_type="conversion",
            correlation_id=correlation_id,
            description=f"Listed expenses in {to_currency}: {succeeded} converted, {failed} failed",
            details={"to": to_currency, "succeeded": succeeded, "failed": failed},
            is_user_action=True,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            correlation_id=correlation_id,
            description=f"System error: {error_type}",
            details=details or {},
            error_message=error_message,
        )
