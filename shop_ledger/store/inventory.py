"""
Inventory store.

The running balance is quantity_in_stock. Inventory items take
no payments; add_payment on this store raises StoreError.
"""

from sqlalchemy import select, or_

from shop_ledger.models.enums import EntityKind
from shop_ledger.models.inventory import InventoryItem, InventoryHistory
from shop_ledger.store.base import EntityStore, Record


class InventoryStore(EntityStore):
    kind = EntityKind.INVENTORY
    entity_model = InventoryItem
    history_model = InventoryHistory

    owner_field = "item_id"
    balance_field = "quantity_in_stock"
    history_type_field = "event_type"
    history_amount_field = "quantity_change"

    COMMANDS = {
        "insert": "insert_item",
        "update": "update_item",
        "delete": "delete_item",
        "list": "get_items",
        "get_by_id": "get_item_by_id",
        "adjust_balance": "adjust_item_quantity",
        "insert_history": "insert_history_event",
        "get_history": "get_history_for_item",
        "low_stock": "get_low_stock_items",
        "search": "search_items",
    }

    def get_low_stock(self) -> list[Record]:
        """Items at or below their own low-stock threshold."""
        with self._command("low_stock"):
            rows = self.db.execute(
                select(InventoryItem).where(
                    InventoryItem.quantity_in_stock.is_not(None),
                    InventoryItem.low_stock_threshold.is_not(None),
                    InventoryItem.quantity_in_stock
                    <= InventoryItem.low_stock_threshold,
                ).order_by(InventoryItem.item_name)
            ).scalars().all()
            return [self._record(r) for r in rows]

    def search(self, query: str) -> list[Record]:
        """Substring match on name, brand, type and barcode."""
        pattern = f"%{query.strip()}%"
        with self._command("search"):
            rows = self.db.execute(
                select(InventoryItem).where(or_(
                    InventoryItem.item_name.ilike(pattern),
                    InventoryItem.phone_brand.ilike(pattern),
                    InventoryItem.item_type.ilike(pattern),
                    InventoryItem.barcode.ilike(pattern),
                )).order_by(InventoryItem.item_name)
            ).scalars().all()
            return [self._record(r) for r in rows]
