"""
Audit Logger

DESIGN DECISION: Every menu action is logged as a structured event.
This provides:
1. Traceability of adds, reports and conversions
2. Debugging capability when the file or rate service misbehaves
3. Correlation of all events belonging to one menu action

The audit logger:
- Writes JSON lines through structlog on top of stdlib logging
- Never raises; a logging failure must not break a menu action
- Supports correlation IDs to trace related events
"""

import logging
import sys
from collections import deque
from typing import Optional
from uuid import UUID, uuid4

import structlog

from expense_tracker.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "WARNING") -> None:
    """
    Route structured logs to stderr at ``level``.

    Called once by the CLI; the default keeps the interactive menu clean.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.WARNING),
    )


_LEVEL_METHODS = {
    AuditSeverity.DEBUG: "debug",
    AuditSeverity.INFO: "info",
    AuditSeverity.WARNING: "warning",
    AuditSeverity.ERROR: "error",
    AuditSeverity.CRITICAL: "critical",
}


class AuditLogger:
    """
    Central audit logging service.

    Events go to the structured local log only; the expenses file is
    the only thing this tool persists.
    """

    def __init__(self, max_events: int = 500):
        self._logger = structlog.get_logger("expense_tracker.audit")
        # Most recent events only; older ones live in the log stream
        self.events: deque[AuditEvent] = deque(maxlen=max_events)

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Returns True if the event was written to the log.
        """
        self.events.append(event)
        method = getattr(self._logger, _LEVEL_METHODS[event.severity])
        try:
            method("audit_event", **event.to_log_dict())
        except Exception as e:
            # Log failure but don't raise
            self._logger.error(
                "audit_log_failed",
                error=str(e),
                event_id=str(event.event_id),
            )
            return False
        return True

    def log_expense_added(
        self,
        category: str,
        amount: float,
        currency: str,
        store_size: int,
        correlation_id: UUID,
    ) -> None:
        """Log a newly recorded expense."""
        self.log(AuditEventBuilder.expense_added(
            category=category,
            amount=amount,
            currency=currency,
            store_size=store_size,
            correlation_id=correlation_id,
        ))

    def log_expenses_listed(self, count: int, correlation_id: UUID) -> None:
        self.log(AuditEventBuilder.expenses_listed(count, correlation_id))

    def log_store_load_failed(
        self,
        path: str,
        error_message: str,
        correlation_id: UUID,
    ) -> None:
        """Log a store that exists but could not be read or parsed."""
        self.log(AuditEventBuilder.store_load_failed(
            path=path,
            error_message=error_message,
            correlation_id=correlation_id,
        ))

    def log_store_save_failed(
        self,
        path: str,
        error_message: str,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.store_save_failed(
            path=path,
            error_message=error_message,
            correlation_id=correlation_id,
        ))

    def log_report_generated(
        self,
        kind: str,
        path: str,
        item_count: int,
        correlation_id: UUID,
    ) -> None:
        """Log a PDF or chart written to disk."""
        self.log(AuditEventBuilder.report_generated(
            kind=kind,
            path=path,
            item_count=item_count,
            correlation_id=correlation_id,
        ))

    def log_report_failed(
        self,
        kind: str,
        error_message: str,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.report_failed(
            kind=kind,
            error_message=error_message,
            correlation_id=correlation_id,
        ))

    def log_mixed_currency_category(
        self,
        category: str,
        currencies: list[str],
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.mixed_currency_category(
            category=category,
            currencies=currencies,
            correlation_id=correlation_id,
        ))

    def log_conversion_failed(
        self,
        from_currency: str,
        to_currency: str,
        error_message: str,
        correlation_id: UUID,
    ) -> None:
        """Log one record that could not be converted."""
        self.log(AuditEventBuilder.conversion_failed(
            from_currency=from_currency,
            to_currency=to_currency,
            error_message=error_message,
            correlation_id=correlation_id,
        ))

    def log_conversion_completed(
        self,
        to_currency: str,
        succeeded: int,
        failed: int,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.conversion_completed(
            to_currency=to_currency,
            succeeded=succeeded,
            failed=failed,
            correlation_id=correlation_id,
        ))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an unexpected error."""
        self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of each menu action and pass it through
    all subsequent operations.
    """
    return uuid4()
