"""Business logic services."""

from shop_ledger.services.ledger_service import LedgerService
from shop_ledger.services.entity_service import EntityService, InventoryService
from shop_ledger.services.events import EventBus, Notifier, financial_events
from shop_ledger.services.collection import (
    CollectionStatus,
    ClientCollection,
    SupplierCollection,
    InventoryCollection,
)

__all__ = [
    "LedgerService",
    "EntityService",
    "InventoryService",
    "EventBus",
    "Notifier",
    "financial_events",
    "CollectionStatus",
    "ClientCollection",
    "SupplierCollection",
    "InventoryCollection",
]
