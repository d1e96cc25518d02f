"""
Pydantic schemas for suppliers.
"""

import re
from datetime import datetime
from decimal import Decimal

from pydantic import Field, field_validator

from shop_ledger.models.enums import EntityStatus, PaymentMethod
from shop_ledger.schemas.base import UIModel
from shop_ledger.schemas.ledger import HistoryEvent

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def _check_email(v: str | None) -> str | None:
    # Blank means "no e-mail on file"
    if v is None or v == "":
        return v
    if not EMAIL_PATTERN.match(v):
        raise ValueError("Invalid email address")
    return v


class SupplierCreate(UIModel):
    name: str = Field(min_length=2, max_length=200)
    contact_name: str | None = Field(default=None, max_length=200)
    email: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=50)
    address: str | None = Field(default=None, max_length=255)
    notes: str | None = None
    preferred_payment_method: PaymentMethod | None = None
    status: EntityStatus = EntityStatus.ACTIVE
    outstanding_balance: Decimal = Decimal("0")

    @field_validator("email")
    @classmethod
    def email_format(cls, v: str | None) -> str | None:
        return _check_email(v)


class SupplierUpdate(UIModel):
    name: str | None = Field(default=None, min_length=2, max_length=200)
    contact_name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    notes: str | None = None
    preferred_payment_method: PaymentMethod | None = None
    status: EntityStatus | None = None

    @field_validator("email")
    @classmethod
    def email_format(cls, v: str | None) -> str | None:
        return _check_email(v)


class Supplier(UIModel):
    id: str
    name: str
    contact_name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    notes: str | None = None
    preferred_payment_method: PaymentMethod | None = None
    outstanding_balance: Decimal = Decimal("0")
    status: EntityStatus = EntityStatus.ACTIVE
    created_at: datetime | None = None
    updated_at: datetime | None = None
    history: list[HistoryEvent] = []

    @property
    def balance(self) -> Decimal:
        return self.outstanding_balance


class SupplierStats(UIModel):
    total: int
    active: int
    inactive: int
    with_balance: int
    total_outstanding: Decimal
    average_balance: Decimal
    by_payment_method: dict[str, int]
