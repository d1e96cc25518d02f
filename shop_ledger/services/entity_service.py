"""
Entity service — create, read, update, and delete ledger entities.

Creating an entity writes its row and a creation event carrying
the opening balance (or opening stock) in one unit of work, so a
new entity already satisfies sum(history) == balance.

Updates only touch descriptive fields. Balances move through
LedgerService and nowhere else.
"""

import enum
import logging
import uuid

from pydantic import BaseModel
from sqlalchemy.orm import Session

from shop_ledger.errors import EntityNotFoundError, LedgerValidationError
from shop_ledger.mappers import history_to_record, to_ui
from shop_ledger.models.enums import (
    EntityKind,
    EntityStatus,
    ClientHistoryType,
    SupplierHistoryType,
    InventoryHistoryType,
)
from shop_ledger.schemas.ledger import HistoryEvent
from shop_ledger.services import aggregation
from shop_ledger.store import STORES, EntityStore, Record
from shop_ledger.time_utils import utcnow

logger = logging.getLogger(__name__)


CREATED_EVENTS = {
    EntityKind.CLIENT: (ClientHistoryType.CLIENT_CREATED, "Client account created"),
    EntityKind.SUPPLIER: (SupplierHistoryType.SUPPLIER_CREATED, "Supplier account created"),
    EntityKind.INVENTORY: (InventoryHistoryType.ITEM_CREATED, "Item added to inventory"),
}

# Inventory has no dedicated "updated" event type
UPDATED_EVENTS = {
    EntityKind.CLIENT: (ClientHistoryType.CLIENT_UPDATED, "Client information updated"),
    EntityKind.SUPPLIER: (SupplierHistoryType.SUPPLIER_UPDATED, "Supplier information updated"),
    EntityKind.INVENTORY: (InventoryHistoryType.OTHER, "Item details updated"),
}


def storage_fields(values: dict) -> Record:
    """
    Translate form field names and values to column names.

    status becomes the active flag, outstanding_balance becomes
    credit_balance, and enum members become their stored strings.
    """
    record = {}
    for key, value in values.items():
        if isinstance(value, enum.Enum):
            value = value.value
        if key == "status":
            record["active"] = value == EntityStatus.ACTIVE.value
        elif key == "outstanding_balance":
            record["credit_balance"] = value
        else:
            record[key] = value
    return record


class EntityService:

    def __init__(
        self,
        db: Session,
        kind: EntityKind,
        store: EntityStore | None = None,
    ):
        self.db = db
        self.kind = EntityKind(kind)
        self.store = store if store is not None else STORES[self.kind](db)

    def _require(self, entity_id: str) -> Record:
        record = self.store.get_by_id(entity_id)
        if record is None:
            raise EntityNotFoundError(self.kind.value, entity_id)
        return record

    def _append_event(self, entity_id: str, event_type, notes: str, amount=0):
        event = HistoryEvent(
            id=str(uuid.uuid4()),
            entity_id=entity_id,
            date=utcnow(),
            type=event_type.value,
            amount=amount,
            notes=notes,
        )
        self.store.insert_history(history_to_record(self.kind, event))

    def list_all(self) -> list:
        return [to_ui(self.kind, r) for r in self.store.list_records()]

    def get(self, entity_id: str):
        """Load one entity together with its full history."""
        record = dict(self._require(entity_id))
        record["history"] = self.store.get_history(entity_id)
        return to_ui(self.kind, record)

    def create(self, data: BaseModel):
        """
        Create an entity from a validated create schema.

        The opening balance is written with the row and mirrored on
        the creation event.
        """
        entity_id = str(uuid.uuid4())
        record = storage_fields(data.model_dump())
        record["id"] = entity_id

        stored = self.store.insert(record)
        opening = stored.get(self.store.balance_field) or 0

        event_type, notes = CREATED_EVENTS[self.kind]
        self._append_event(entity_id, event_type, notes, amount=opening)

        logger.info("Created %s %s", self.kind.value, entity_id)
        return self.get(entity_id)

    def update(self, entity_id: str, data: BaseModel):
        """
        Apply a partial update. Fields left out or set to None keep
        their current value.
        """
        record = self._require(entity_id)
        changes = storage_fields(
            data.model_dump(exclude_unset=True, exclude_none=True)
        )
        if self.store.balance_field in changes:
            raise LedgerValidationError(
                "Balances can only change through adjustments or payments"
            )
        if changes.get("active") is False and not aggregation.can_deactivate(
            to_ui(self.kind, record)
        ):
            raise LedgerValidationError(
                f"Cannot deactivate {self.kind.value} {entity_id} while a "
                f"balance is outstanding"
            )

        changes["id"] = entity_id
        self.store.update(changes)

        event_type, notes = UPDATED_EVENTS[self.kind]
        self._append_event(entity_id, event_type, notes)

        logger.info("Updated %s %s", self.kind.value, entity_id)
        return self.get(entity_id)

    def delete(self, entity_id: str) -> None:
        """Delete an entity. Its payments and history go with it."""
        self._require(entity_id)
        self.store.delete(entity_id)
        logger.info("Deleted %s %s", self.kind.value, entity_id)


class InventoryService(EntityService):

    def __init__(self, db: Session, store: EntityStore | None = None):
        super().__init__(db, EntityKind.INVENTORY, store)

    def low_stock(self) -> list:
        return [to_ui(self.kind, r) for r in self.store.get_low_stock()]

    def search(self, query: str) -> list:
        if not query or not query.strip():
            return self.list_all()
        return [to_ui(self.kind, r) for r in self.store.search(query)]


def entity_service(db: Session, kind: EntityKind, store=None) -> EntityService:
    kind = EntityKind(kind)
    if kind == EntityKind.INVENTORY:
        return InventoryService(db, store)
    return EntityService(db, kind, store)
