from shop_ledger.schemas.base import UIModel
from shop_ledger.schemas.ledger import (
    HistoryEvent,
    Payment,
    PaymentCreate,
    BalanceAdjustment,
    LedgerSummary,
    ReconciliationReport,
)
from shop_ledger.schemas.client import Client, ClientCreate, ClientUpdate
from shop_ledger.schemas.supplier import (
    Supplier,
    SupplierCreate,
    SupplierUpdate,
    SupplierStats,
)
from shop_ledger.schemas.inventory import (
    InventoryItem,
    InventoryItemCreate,
    InventoryItemUpdate,
)

__all__ = [
    "UIModel",
    "HistoryEvent",
    "Payment",
    "PaymentCreate",
    "BalanceAdjustment",
    "LedgerSummary",
    "ReconciliationReport",
    "Client",
    "ClientCreate",
    "ClientUpdate",
    "Supplier",
    "SupplierCreate",
    "SupplierUpdate",
    "SupplierStats",
    "InventoryItem",
    "InventoryItemCreate",
    "InventoryItemUpdate",
]
