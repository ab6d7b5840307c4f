"""
Data Models Package

This package contains all Pydantic models used in the Expense Tracker.
Everything read from or written to the expenses file goes through these schemas.
"""

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

__all__ = [
    # Expense models
    "ConversionOutcome",
    "ExpenseRecord",
    "format_amount",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
