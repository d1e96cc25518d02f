"""
Pydantic schemas for clients.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import Field

from shop_ledger.models.enums import EntityStatus
from shop_ledger.schemas.base import UIModel
from shop_ledger.schemas.ledger import HistoryEvent


class ClientCreate(UIModel):
    name: str = Field(min_length=2, max_length=200)
    contact_name: str | None = Field(default=None, max_length=200)
    email: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=50)
    address: str | None = Field(default=None, max_length=255)
    notes: str | None = None
    status: EntityStatus = EntityStatus.ACTIVE
    # Opening balance, recorded on the creation history event
    outstanding_balance: Decimal = Decimal("0")


class ClientUpdate(UIModel):
    name: str | None = Field(default=None, min_length=2, max_length=200)
    contact_name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    notes: str | None = None
    status: EntityStatus | None = None


class Client(UIModel):
    id: str
    name: str
    contact_name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    notes: str | None = None
    outstanding_balance: Decimal = Decimal("0")
    status: EntityStatus = EntityStatus.ACTIVE
    created_at: datetime | None = None
    updated_at: datetime | None = None
    history: list[HistoryEvent] = []

    @property
    def balance(self) -> Decimal:
        return self.outstanding_balance
