"""Named-command store over the ledger tables."""

from shop_ledger.models.enums import EntityKind
from shop_ledger.store.base import EntityStore, Record
from shop_ledger.store.parties import ClientStore, SupplierStore
from shop_ledger.store.inventory import InventoryStore

STORES: dict[EntityKind, type[EntityStore]] = {
    EntityKind.CLIENT: ClientStore,
    EntityKind.SUPPLIER: SupplierStore,
    EntityKind.INVENTORY: InventoryStore,
}

__all__ = [
    "EntityStore",
    "Record",
    "ClientStore",
    "SupplierStore",
    "InventoryStore",
    "STORES",
]
