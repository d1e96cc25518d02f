"""
In-memory collections kept in step with the store.

A collection owns the cached list of one entity kind and is the
only thing that changes it. Every operation opens its own session,
runs one service call, and commits. After a successful mutation
the collection announces financial-data-change on the event bus
and refetches, so the cache always reflects what was committed.

Failures never escape a collection operation. They roll the
session back, set `error`, raise a user notification, and leave
the cached data as it was. Callers check the return value (None
on failure) or `error`.

    clients = ClientCollection()
    clients.initialize()
    clients.add_payment(client_id, Decimal("40.00"), "Cash")
"""

import enum
import logging
from contextlib import contextmanager
from decimal import Decimal, InvalidOperation
from typing import Any, Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shop_ledger.config import Settings, get_settings
from shop_ledger.errors import (
    LedgerError,
    LedgerValidationError,
    StoreError,
)
from shop_ledger.models.base import SessionLocal
from shop_ledger.models.enums import EntityKind
from shop_ledger.schemas.ledger import HistoryEvent, Payment, LedgerSummary
from shop_ledger.services.entity_service import entity_service
from shop_ledger.services.events import (
    EventBus,
    Notifier,
    FINANCIAL_DATA_CHANGE,
    financial_events,
)
from shop_ledger.services.ledger_service import LedgerService
from shop_ledger.store import STORES

logger = logging.getLogger(__name__)


class CollectionStatus(str, enum.Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"


class LedgerCollection:
    """
    Cached view of every entity of one kind.

    Subclasses set `kind` and `label`. The session factory, store
    factory, event bus, and notifier can all be swapped out, which
    is how the tests observe store traffic.
    """

    kind: EntityKind
    label: str

    def __init__(
        self,
        session_factory: Callable[[], Session] | None = None,
        store_factory: Callable | None = None,
        bus: EventBus | None = None,
        notifier: Notifier | None = None,
        settings: Settings | None = None,
    ):
        self.session_factory = session_factory or SessionLocal
        self.store_factory = store_factory or STORES[self.kind]
        self.bus = bus or financial_events
        self.settings = settings or get_settings()
        self.notifier = notifier or Notifier(self.settings.NOTIFICATION_HISTORY)

        self.items: list = []
        self.selected = None
        self.status = CollectionStatus.UNINITIALIZED
        self.error: str | None = None
        self.loading = False
        self.initialized = False

    # --- plumbing ---

    @contextmanager
    def _unit_of_work(self):
        """Session and store for one operation, committed on success."""
        db = self.session_factory()
        try:
            yield db, self.store_factory(db)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise StoreError("commit", str(e)) from e
        except BaseException:
            db.rollback()
            raise
        finally:
            db.close()

    def _entities(self, db, store):
        return entity_service(db, self.kind, store)

    def _ledger(self, db, store) -> LedgerService:
        return LedgerService(db, self.kind, store, self.settings)

    def _run(self, action: str, operation: Callable[[Session, Any], Any]):
        """
        Run one operation in its own unit of work.

        Returns the operation's result, or None after a ledger
        failure has been recorded and reported.
        """
        self.loading = True
        self.error = None
        try:
            with self._unit_of_work() as (db, store):
                return operation(db, store)
        except LedgerError as e:
            self._fail(action, e)
            return None
        finally:
            self.loading = False

    def _fail(self, action: str, error: LedgerError) -> None:
        if isinstance(error, LedgerValidationError):
            logger.warning("%s: could not %s: %s", self.label, action, error)
        self.error = str(error)
        self.notifier.error(f"Failed to {action}: {error}")

    def _changed(self, entity_id: str | None = None, refetch_entity=False):
        self.bus.emit(FINANCIAL_DATA_CHANGE, {
            "kind": self.kind.value,
            "entity_id": entity_id,
        })
        self.fetch_all()
        if refetch_entity and entity_id is not None:
            self.fetch_by_id(entity_id)

    def _replace(self, entity) -> None:
        self.items = [entity if e.id == entity.id else e for e in self.items]

    # --- loading ---

    def initialize(self) -> None:
        """Load the collection once. Later calls do nothing."""
        if self.initialized:
            return
        self.fetch_all()
        self.initialized = self.status == CollectionStatus.READY

    def fetch_all(self) -> list:
        """
        Reload every entity from the store.

        On failure the previous items stay in place so readers keep
        the last good view.
        """
        previous = self.status
        self.status = CollectionStatus.LOADING
        items = self._run(
            f"load {self.label.lower()}s",
            lambda db, store: self._entities(db, store).list_all(),
        )
        if items is None:
            self.status = previous
        else:
            self.items = items
            self.status = CollectionStatus.READY
            logger.debug("Loaded %d %s(s)", len(items), self.kind.value)
        return self.items

    def fetch_by_id(self, entity_id: str):
        """
        Load one entity with its history into `selected` and into
        the matching slot of `items`.
        """
        def load(db, store):
            entity = self._entities(db, store).get(entity_id)
            if self.settings.RECONCILE_ON_LOAD:
                self._ledger(db, store).reconcile(entity_id)
            return entity

        entity = self._run(f"load {self.label.lower()}", load)
        if entity is not None:
            self.selected = entity
            self._replace(entity)
        return entity

    def get(self, entity_id: str):
        """Look up a cached entity without touching the store."""
        for entity in self.items:
            if entity.id == entity_id:
                return entity
        return None

    # --- entity changes ---

    def create(self, data):
        entity = self._run(
            f"create {self.label.lower()}",
            lambda db, store: self._entities(db, store).create(data),
        )
        if entity is not None:
            self.notifier.success(f"{self.label} created successfully")
            self._changed(entity.id)
        return entity

    def update(self, entity_id: str, data):
        entity = self._run(
            f"update {self.label.lower()}",
            lambda db, store: self._entities(db, store).update(entity_id, data),
        )
        if entity is not None:
            self.notifier.success(f"{self.label} updated successfully")
            if self.selected is not None and self.selected.id == entity_id:
                self.selected = entity
            self._changed(entity_id)
        return entity

    def delete(self, entity_id: str) -> bool:
        def remove(db, store):
            self._entities(db, store).delete(entity_id)
            return True

        deleted = self._run(f"delete {self.label.lower()}", remove)
        if not deleted:
            return False
        self.notifier.success(f"{self.label} deleted successfully")
        if self.selected is not None and self.selected.id == entity_id:
            self.selected = None
        self._changed(entity_id)
        return True

    # --- ledger ---

    def adjust_balance(
        self,
        entity_id: str,
        delta,
        reason: str | None = None,
        related_id: str | None = None,
        event_type: str | None = None,
    ) -> HistoryEvent | None:
        event = self._run(
            "adjust balance",
            lambda db, store: self._ledger(db, store).adjust_balance(
                entity_id,
                delta,
                reason=reason,
                related_id=related_id,
                event_type=event_type,
            ),
        )
        if event is not None:
            self.notifier.success("Balance adjusted successfully")
            self._changed(entity_id, refetch_entity=True)
        return event

    def get_history(self, entity_id: str) -> list[HistoryEvent] | None:
        history = self._run(
            "load history",
            lambda db, store: self._ledger(db, store).get_history(entity_id),
        )
        if history is None:
            return None
        if self.selected is not None and self.selected.id == entity_id:
            self.selected = self.selected.model_copy(update={"history": history})
        cached = self.get(entity_id)
        if cached is not None:
            self._replace(cached.model_copy(update={"history": history}))
        return history

    def summarize(self, entity_id: str, now=None) -> LedgerSummary | None:
        return self._run(
            "summarize ledger",
            lambda db, store: self._ledger(db, store).summarize(entity_id, now),
        )


class _PartyCollection(LedgerCollection):
    """Clients and suppliers: money balances that take payments."""

    def add_payment(
        self,
        entity_id: str,
        amount,
        method,
        notes: str | None = None,
        session_id: str | None = None,
        received_by: str | None = None,
    ) -> Payment | None:
        payment = self._run(
            "record payment",
            lambda db, store: self._ledger(db, store).record_payment(
                entity_id,
                amount,
                method,
                notes=notes,
                session_id=session_id,
                received_by=received_by,
            ),
        )
        if payment is not None:
            self.notifier.success("Payment recorded successfully")
            self._changed(entity_id, refetch_entity=True)
        return payment

    def get_payments(self, entity_id: str) -> list[Payment] | None:
        return self._run(
            "load payments",
            lambda db, store: self._ledger(db, store).get_payments(entity_id),
        )


class ClientCollection(_PartyCollection):
    kind = EntityKind.CLIENT
    label = "Client"


class SupplierCollection(_PartyCollection):
    kind = EntityKind.SUPPLIER
    label = "Supplier"


def _units(delta) -> Decimal | None:
    """The delta as a finite number, or None to leave it to the service."""
    try:
        value = Decimal(str(delta))
    except InvalidOperation:
        return None
    return value if value.is_finite() else None


class InventoryCollection(LedgerCollection):
    kind = EntityKind.INVENTORY
    label = "Item"

    def adjust_balance(
        self,
        entity_id: str,
        delta,
        reason: str | None = None,
        related_id: str | None = None,
        event_type: str | None = None,
    ) -> HistoryEvent | None:
        """
        Change stock by a signed number of units.

        The stock check runs against the cache, so the collection is
        loaded first if it has not been. A change that would take an
        item below zero is turned away before any write is issued.
        """
        if not self.initialized:
            self.initialize()
        cached = self.get(entity_id)
        units = _units(delta)
        if (
            cached is not None
            and units is not None
            and cached.quantity_in_stock + units < 0
        ):
            self._fail("adjust stock", LedgerValidationError(
                f"Only {cached.quantity_in_stock} unit(s) of "
                f"{cached.item_name} in stock"
            ))
            return None
        return super().adjust_balance(
            entity_id,
            delta,
            reason=reason,
            related_id=related_id,
            event_type=event_type,
        )

    def low_stock(self) -> list | None:
        return self._run(
            "load low-stock items",
            lambda db, store: self._entities(db, store).low_stock(),
        )

    def search(self, query: str) -> list | None:
        return self._run(
            "search inventory",
            lambda db, store: self._entities(db, store).search(query),
        )
