"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from shop_ledger.models.base import Base
from shop_ledger.models.enums import (
    EntityKind,
    EntityStatus,
    PaymentMethod,
    ClientHistoryType,
    SupplierHistoryType,
    InventoryHistoryType,
    PhoneBrand,
    ItemType,
)
from shop_ledger.models.client import Client, ClientPayment, ClientHistory
from shop_ledger.models.supplier import (
    Supplier,
    SupplierPayment,
    SupplierHistory,
)
from shop_ledger.models.inventory import InventoryItem, InventoryHistory

__all__ = [
    "Base",
    "EntityKind",
    "EntityStatus",
    "PaymentMethod",
    "ClientHistoryType",
    "SupplierHistoryType",
    "InventoryHistoryType",
    "PhoneBrand",
    "ItemType",
    "Client",
    "ClientPayment",
    "ClientHistory",
    "Supplier",
    "SupplierPayment",
    "SupplierHistory",
    "InventoryItem",
    "InventoryHistory",
]
