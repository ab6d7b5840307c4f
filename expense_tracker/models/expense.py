"""
Core Data Models for Expense Tracker

These models define the schemas for all data flowing through the system.
They are designed to:
1. Enforce type safety at runtime
2. Be serializable to the backing JSON file without custom encoders
3. Stay immutable once created (records are never edited)

DESIGN DECISION: We use Pydantic v2 so that a hand-edited or truncated
expenses file fails loudly at load time instead of producing half-built
records further down the line.
"""

import datetime as dt
from decimal import Decimal
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)


def format_amount(amount: float) -> str:
    """
    Format an amount the way it was typed: 12 stays "12", 12.5 stays "12.5".

    Whole numbers lose the trailing ".0" so reports do not show "$12.0".
    """
    if amount == int(amount):
        return str(int(amount))
    return repr(amount)


# =============================================================================
# CORE EXPENSE MODEL
# =============================================================================

class ExpenseRecord(BaseModel):
    """
    A single logged expense.

    Records are created only by the "add" action and are never mutated
    afterwards, hence frozen. Currencies are mixed freely; nothing here
    converts between them.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    category: str = Field(
        ...,
        min_length=1,
        description="Free-text category label (e.g., Food, Transport)"
    )
    amount: float = Field(
        ...,
        allow_inf_nan=False,
        description="Signed amount in the record's own currency"
    )
    currency: str = Field(
        ...,
        min_length=1,
        description="Currency code (e.g., USD, EUR); not checked against ISO 4217"
    )
    date: dt.date = Field(
        default_factory=dt.date.today,
        description="Day the expense was recorded, serialized as YYYY-MM-DD"
    )

    @field_validator('currency')
    @classmethod
    def normalize_currency(cls, v: str) -> str:
        """Rate tables are keyed by upper-case codes."""
        return v.upper()

    @property
    def display_amount(self) -> str:
        return format_amount(self.amount)

    def describe(self) -> str:
        """Single report line: ``[date] category: $amount currency``."""
        return f"[{self.date.isoformat()}] {self.category}: ${self.display_amount} {self.currency}"


# =============================================================================
# CONVERSION MODELS
# =============================================================================

class ConversionOutcome(BaseModel):
    """
    Result of converting one record during a bulk listing.

    Exactly one of converted_amount and error is set. A failed outcome
    is reported inline; it never stops the remaining records.
    """

    record: ExpenseRecord
    target_currency: str
    converted_amount: Optional[Decimal] = Field(
        default=None,
        description="Amount in the target currency, rounded half-up to 2 places"
    )
    error: Optional[str] = Field(
        default=None,
        description="Why the conversion failed"
    )

    @model_validator(mode='after')
    def exactly_one_result(self) -> 'ConversionOutcome':
        if (self.converted_amount is None) == (self.error is None):
            raise ValueError("Set exactly one of converted_amount or error")
        return self

    @property
    def succeeded(self) -> bool:
        return self.converted_amount is not None
