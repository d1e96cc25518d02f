"""
Pydantic schemas shared by every ledger entity kind.

History events and payments have the same shape whichever kind
of entity owns them; only the set of event type names differs.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import Field, field_validator

from shop_ledger.models.enums import PaymentMethod
from shop_ledger.schemas.base import UIModel


# --- Records ---

class HistoryEvent(UIModel):
    """
    One balance-changing action.

    amount is the signed delta applied to the owner's balance;
    for inventory items it is a whole number of units.
    """
    id: str
    entity_id: str
    date: datetime | None = None
    type: str
    amount: int | Decimal = 0
    notes: str | None = None
    related_id: str | None = None
    changed_by: str | None = None


class Payment(UIModel):
    id: str
    entity_id: str
    amount: Decimal
    method: PaymentMethod
    date: datetime | None = None
    notes: str | None = None
    session_id: str | None = None
    received_by: str | None = None


# --- Request Schemas ---

class PaymentCreate(UIModel):
    """Request to record a payment against a client or supplier."""
    amount: Decimal = Field(gt=0)
    method: PaymentMethod
    notes: str | None = Field(default=None, max_length=500)
    session_id: str | None = None
    received_by: str | None = Field(default=None, max_length=100)


class BalanceAdjustment(UIModel):
    """Request to move a balance by a signed delta."""
    delta: Decimal
    reason: str | None = Field(default=None, max_length=500)
    related_id: str | None = None
    event_type: str | None = None

    @field_validator("delta")
    @classmethod
    def delta_must_be_nonzero(cls, v: Decimal) -> Decimal:
        if v == 0:
            raise ValueError("delta must not be zero")
        return v


# --- Response Schemas ---

class LedgerSummary(UIModel):
    entity_id: str
    balance: int | Decimal
    total_paid: Decimal
    last_activity_date: datetime | None
    is_overdue: bool
    event_count: int


class ReconciliationReport(UIModel):
    """Stored balance compared with the sum of the history log."""
    entity_id: str
    balance: int | Decimal
    history_total: int | Decimal
    difference: int | Decimal
    is_consistent: bool
