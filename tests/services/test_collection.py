"""
Tests for the in-memory collections.

Store traffic is observed through a recording wrapper passed in
as the store factory, so tests can assert exactly which store
commands an operation issued (or that it issued none).
"""

import logging
from decimal import Decimal

from shop_ledger.config import Settings
from shop_ledger.errors import StoreError
from shop_ledger.models.enums import EntityKind, ItemType, PhoneBrand
from shop_ledger.schemas.client import ClientCreate, ClientUpdate
from shop_ledger.schemas.inventory import InventoryItemCreate
from shop_ledger.services.collection import (
    ClientCollection,
    InventoryCollection,
    CollectionStatus,
)
from shop_ledger.services.entity_service import EntityService
from shop_ledger.services.events import (
    EventBus,
    Notifier,
    FINANCIAL_DATA_CHANGE,
)
from shop_ledger.services.ledger_service import LedgerService
from shop_ledger.store import ClientStore, InventoryStore


# --- Helpers ---

class RecordingStore:
    """Wraps a real store and records the name of every command called."""

    def __init__(self, store, calls):
        self._store = store
        self._calls = calls

    def __getattr__(self, name):
        attr = getattr(self._store, name)
        if not callable(attr):
            return attr

        def command(*args, **kwargs):
            self._calls.append(name)
            return attr(*args, **kwargs)

        return command


def recording_factory(store_cls, calls):
    def factory(db):
        return RecordingStore(store_cls(db), calls)
    return factory


class BrokenListStore(ClientStore):

    def list_records(self):
        raise StoreError("get_clients", "database is locked")


def seed_clients(db, count, balance="0.00"):
    service = EntityService(db, EntityKind.CLIENT)
    ids = [
        service.create(ClientCreate(
            name=f"Client {i}",
            outstanding_balance=Decimal(balance),
        )).id
        for i in range(count)
    ]
    db.commit()
    return ids


def seed_item(db, quantity):
    item = EntityService(db, EntityKind.INVENTORY).create(InventoryItemCreate(
        item_name="Pixel 6 Battery",
        phone_brand=PhoneBrand.GOOGLE,
        item_type=ItemType.BATTERY,
        buying_price=15.0,
        selling_price=35.0,
        quantity_in_stock=quantity,
    ))
    db.commit()
    return item


def make_settings(reconcile=True):
    settings = Settings()
    settings.RECONCILE_ON_LOAD = reconcile
    settings.OVERDUE_DAYS = 30
    return settings


def client_collection(session_factory, calls=None, bus=None, **kwargs):
    calls = calls if calls is not None else []
    return ClientCollection(
        session_factory=session_factory,
        store_factory=recording_factory(ClientStore, calls),
        bus=bus or EventBus(),
        notifier=Notifier(),
        settings=make_settings(),
        **kwargs,
    )


# --- Initialization Tests ---

class TestInitialize:

    def test_initialize_loads_items(self, db_session, session_factory):
        seed_clients(db_session, 2)
        clients = client_collection(session_factory)

        assert clients.status == CollectionStatus.UNINITIALIZED
        clients.initialize()

        assert clients.status == CollectionStatus.READY
        assert clients.initialized is True
        assert len(clients.items) == 2
        assert clients.loading is False

    def test_second_initialize_issues_no_fetch(self, db_session, session_factory):
        seed_clients(db_session, 2)
        calls = []
        clients = client_collection(session_factory, calls)

        clients.initialize()
        fetches = calls.count("list_records")
        clients.initialize()

        assert fetches == 1
        assert calls.count("list_records") == 1

    def test_failed_initialize_can_be_retried(self, session_factory):
        clients = ClientCollection(
            session_factory=session_factory,
            store_factory=BrokenListStore,
            bus=EventBus(),
            notifier=Notifier(),
            settings=make_settings(),
        )
        clients.initialize()

        assert clients.initialized is False
        assert clients.status == CollectionStatus.UNINITIALIZED
        assert clients.error is not None


# --- Fetch Tests ---

class TestFetch:

    def test_failed_fetch_keeps_cached_items(self, db_session, session_factory):
        seed_clients(db_session, 5)
        clients = client_collection(session_factory)
        clients.initialize()
        cached = list(clients.items)

        clients.store_factory = BrokenListStore
        result = clients.fetch_all()

        assert result == cached
        assert clients.items == cached
        assert len(clients.items) == 5
        assert "database is locked" in clients.error
        assert clients.status == CollectionStatus.READY
        assert clients.notifier.last.level == "error"

    def test_fetch_by_id_fills_selected_and_item(
        self, db_session, session_factory
    ):
        (client_id,) = seed_clients(db_session, 1, "20.00")
        clients = client_collection(session_factory)
        clients.initialize()

        entity = clients.fetch_by_id(client_id)

        assert clients.selected == entity
        assert len(entity.history) == 1
        assert clients.get(client_id).history == entity.history

    def test_fetch_by_id_reports_divergence(
        self, db_session, session_factory, caplog
    ):
        (client_id,) = seed_clients(db_session, 1, "20.00")
        ClientStore(db_session).adjust_balance(client_id, Decimal("5.00"))
        db_session.commit()

        clients = client_collection(session_factory)
        with caplog.at_level(logging.WARNING, logger="shop_ledger"):
            clients.fetch_by_id(client_id)

        assert "does not match history total" in caplog.text

    def test_get_is_local(self, db_session, session_factory):
        (client_id,) = seed_clients(db_session, 1)
        calls = []
        clients = client_collection(session_factory, calls)
        clients.initialize()
        calls.clear()

        assert clients.get(client_id).id == client_id
        assert clients.get("missing") is None
        assert calls == []


# --- Mutation Tests ---

class TestMutations:

    def test_create_emits_and_refetches(self, session_factory):
        bus = EventBus()
        events = []
        bus.subscribe(FINANCIAL_DATA_CHANGE, events.append)
        clients = client_collection(session_factory, bus=bus)
        clients.initialize()

        created = clients.create(ClientCreate(name="New Client"))

        assert created is not None
        assert [c.id for c in clients.items] == [created.id]
        assert created.history[0].type == "Client Created"
        assert events == [{"kind": "client", "entity_id": created.id}]
        assert clients.notifier.last.message == "Client created successfully"

    def test_update_appends_event(self, db_session, session_factory):
        (client_id,) = seed_clients(db_session, 1)
        clients = client_collection(session_factory)
        clients.initialize()

        updated = clients.update(client_id, ClientUpdate(phone="555-0199"))

        assert updated.phone == "555-0199"
        assert updated.history[-1].type == "Client Updated"
        assert clients.get(client_id).phone == "555-0199"

    def test_delete_removes_item_and_selection(
        self, db_session, session_factory
    ):
        (client_id,) = seed_clients(db_session, 1)
        clients = client_collection(session_factory)
        clients.initialize()
        clients.fetch_by_id(client_id)

        assert clients.delete(client_id) is True
        assert clients.items == []
        assert clients.selected is None

    def test_payment_refreshes_collection_and_selection(
        self, db_session, session_factory
    ):
        (client_id,) = seed_clients(db_session, 1, "100.00")
        clients = client_collection(session_factory)
        clients.initialize()

        payment = clients.add_payment(client_id, Decimal("40.00"), "Cash")

        assert payment is not None
        assert clients.get(client_id).outstanding_balance == Decimal("60.00")
        assert clients.selected.outstanding_balance == Decimal("60.00")
        last = clients.selected.history[-1]
        assert last.type == "Payment Made"
        assert last.amount == Decimal("-40.00")

    def test_failed_mutation_is_reported_not_raised(
        self, db_session, session_factory
    ):
        (client_id,) = seed_clients(db_session, 1, "100.00")
        bus = EventBus()
        events = []
        bus.subscribe(FINANCIAL_DATA_CHANGE, events.append)
        clients = client_collection(session_factory, bus=bus)
        clients.initialize()

        result = clients.add_payment(client_id, Decimal("0"), "Cash")

        assert result is None
        assert "must be positive" in clients.error
        assert clients.notifier.last.level == "error"
        assert clients.loading is False
        assert events == []
        assert clients.get(client_id).outstanding_balance == Decimal("100.00")

    def test_non_finite_amounts_are_reported_not_raised(
        self, db_session, session_factory
    ):
        (client_id,) = seed_clients(db_session, 1, "100.00")
        clients = client_collection(session_factory)
        clients.initialize()

        assert clients.add_payment(client_id, "NaN", "Cash") is None
        assert "Invalid payment amount" in clients.error

        assert clients.adjust_balance(client_id, "Infinity") is None
        assert "Invalid amount" in clients.error

        assert clients.loading is False
        assert clients.get(client_id).outstanding_balance == Decimal("100.00")

    def test_rejection_is_logged_as_warning(
        self, db_session, session_factory, caplog
    ):
        (client_id,) = seed_clients(db_session, 1, "100.00")
        clients = client_collection(session_factory)
        clients.initialize()

        with caplog.at_level(
            logging.WARNING, logger="shop_ledger.services.collection"
        ):
            clients.add_payment(client_id, Decimal("-5"), "Cash")

        warnings = [
            r for r in caplog.records
            if r.name == "shop_ledger.services.collection"
        ]
        assert len(warnings) == 1
        assert warnings[0].levelno == logging.WARNING
        assert "must be positive" in warnings[0].getMessage()

    def test_error_cleared_by_next_success(self, db_session, session_factory):
        (client_id,) = seed_clients(db_session, 1, "100.00")
        clients = client_collection(session_factory)
        clients.initialize()

        clients.adjust_balance(client_id, Decimal("0"))
        assert clients.error is not None

        clients.adjust_balance(client_id, Decimal("5"))
        assert clients.error is None

    def test_get_history_merges_into_selection(
        self, db_session, session_factory
    ):
        (client_id,) = seed_clients(db_session, 1, "10.00")
        clients = client_collection(session_factory)
        clients.initialize()
        clients.fetch_by_id(client_id)

        with session_factory() as db:
            LedgerService(db, EntityKind.CLIENT).adjust_balance(
                client_id, Decimal("7.00")
            )
            db.commit()

        history = clients.get_history(client_id)

        assert len(history) == 2
        assert clients.selected.history == history
        assert clients.get(client_id).history == history


# --- Inventory Guard Tests ---

class TestInventoryGuard:

    def test_overdraw_rejected_before_any_store_call(
        self, db_session, session_factory
    ):
        item = seed_item(db_session, quantity=3)
        calls = []
        sessions = []

        def counting_sessions():
            sessions.append(1)
            return session_factory()

        inventory = InventoryCollection(
            session_factory=counting_sessions,
            store_factory=recording_factory(InventoryStore, calls),
            bus=EventBus(),
            notifier=Notifier(),
            settings=make_settings(),
        )
        inventory.initialize()
        calls.clear()
        sessions.clear()

        result = inventory.adjust_balance(item.id, -5)

        assert result is None
        assert calls == []
        assert sessions == []
        assert inventory.error is not None
        assert inventory.get(item.id).quantity_in_stock == 3

        db_session.expire_all()
        reloaded = EntityService(db_session, EntityKind.INVENTORY).get(item.id)
        assert reloaded.quantity_in_stock == 3

    def test_overdraw_on_unloaded_collection_issues_no_write(
        self, db_session, session_factory
    ):
        item = seed_item(db_session, quantity=3)
        calls = []
        inventory = InventoryCollection(
            session_factory=session_factory,
            store_factory=recording_factory(InventoryStore, calls),
            bus=EventBus(),
            notifier=Notifier(),
            settings=make_settings(),
        )

        result = inventory.adjust_balance(item.id, -5)

        assert result is None
        assert calls == ["list_records"]
        assert inventory.initialized is True
        assert "Only 3 unit(s)" in inventory.error

    def test_allowed_adjustment_goes_through(self, db_session, session_factory):
        item = seed_item(db_session, quantity=3)
        inventory = InventoryCollection(
            session_factory=session_factory,
            bus=EventBus(),
            notifier=Notifier(),
            settings=make_settings(),
        )
        inventory.initialize()

        event = inventory.adjust_balance(item.id, -2, event_type="Sold")

        assert event.amount == -2
        assert inventory.get(item.id).quantity_in_stock == 1
        assert inventory.selected.history[-1].type == "Sold"
