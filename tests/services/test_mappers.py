"""
Tests for the storage <-> UI record mapping.
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from shop_ledger import mappers
from shop_ledger.models.enums import EntityKind, EntityStatus, PaymentMethod


CLIENT_RECORD = {
    "id": "c-1",
    "name": "Alice Repairs",
    "contact_name": "Alice",
    "email": "alice@example.com",
    "phone": "555-0100",
    "address": "1 Main St",
    "notes": None,
    "credit_balance": Decimal("100.00"),
    "active": 1,
    "created_at": "2025-01-02T10:00:00+00:00",
    "updated_at": "2025-01-03T11:30:00+00:00",
}

SUPPLIER_RECORD = {
    "id": "s-1",
    "name": "Parts Direct",
    "preferred_payment_method": "Bank Transfer",
    "credit_balance": Decimal("250.75"),
    "active": False,
    "created_at": "2025-01-02T10:00:00Z",
    "updated_at": "2025-01-02T10:00:00Z",
    "history": [{
        "id": "h-1",
        "supplier_id": "s-1",
        "date": "2025-01-02T10:00:00+00:00",
        "type": "Supplier Created",
        "amount": Decimal("250.75"),
        "notes": "Supplier account created",
        "related_id": None,
        "changed_by": None,
    }],
}

ITEM_RECORD = {
    "id": "i-1",
    "item_name": "iPhone 12 Battery",
    "phone_brand": "Apple",
    "item_type": "Battery",
    "buying_price": 18.5,
    "selling_price": 39.0,
    "quantity_in_stock": 7,
    "low_stock_threshold": 2,
    "supplier_info": "Parts Direct",
    "barcode": "0123456789",
    "created_at": "2025-01-02T10:00:00",
    "updated_at": "2025-01-02T10:00:00",
}


class TestDefaults:

    def test_client_fields_are_renamed(self):
        client = mappers.client_from_record(CLIENT_RECORD)
        assert client.outstanding_balance == Decimal("100.00")
        assert client.status == EntityStatus.ACTIVE
        assert client.created_at == datetime(2025, 1, 2, 10, tzinfo=timezone.utc)
        assert client.history == []

    def test_minimal_record_gets_defaults(self):
        client = mappers.client_from_record({"id": "c-2", "name": "Bob"})
        assert client.outstanding_balance == 0
        assert client.status == EntityStatus.ACTIVE
        assert client.history == []
        assert client.created_at is None

    def test_inactive_flag_becomes_status(self):
        supplier = mappers.supplier_from_record(SUPPLIER_RECORD)
        assert supplier.status == EntityStatus.INACTIVE
        assert supplier.preferred_payment_method == PaymentMethod.BANK_TRANSFER

    def test_nested_history_is_mapped(self):
        supplier = mappers.supplier_from_record(SUPPLIER_RECORD)
        assert len(supplier.history) == 1
        assert supplier.history[0].entity_id == "s-1"
        assert supplier.history[0].amount == Decimal("250.75")

    def test_missing_quantity_is_zero(self):
        record = dict(ITEM_RECORD, quantity_in_stock=None)
        assert mappers.item_from_record(record).quantity_in_stock == 0

    def test_naive_timestamps_are_utc(self):
        item = mappers.item_from_record(ITEM_RECORD)
        assert item.created_at.tzinfo is not None

    def test_status_maps_back_to_active_flag(self):
        supplier = mappers.supplier_from_record(SUPPLIER_RECORD)
        record = mappers.supplier_to_record(supplier)
        assert record["active"] is False
        assert record["credit_balance"] == Decimal("250.75")
        assert record["preferred_payment_method"] == "Bank Transfer"

    def test_short_card_method_is_credit_card(self):
        payment = mappers.payment_from_record(EntityKind.CLIENT, {
            "id": "p-1",
            "client_id": "c-1",
            "amount": "12.00",
            "method": "Card",
            "date": "2025-01-02T10:00:00+00:00",
        })
        assert payment.method == PaymentMethod.CREDIT_CARD
        assert payment.entity_id == "c-1"


class TestHistoryMapping:

    def test_inventory_event_uses_quantity_fields(self):
        event = mappers.history_from_record(EntityKind.INVENTORY, {
            "id": "h-9",
            "item_id": "i-1",
            "date": "2025-01-05T09:00:00+00:00",
            "event_type": "Sold",
            "quantity_change": -2,
            "notes": "Counter sale",
            "related_id": "sale-3",
        })
        assert event.type == "Sold"
        assert event.amount == -2
        assert event.entity_id == "i-1"

        record = mappers.history_to_record(EntityKind.INVENTORY, event)
        assert record["quantity_change"] == -2
        assert record["event_type"] == "Sold"
        assert "amount" not in record


class TestRoundTrip:
    """to_ui(to_storage(to_ui(R))) == to_ui(R) for every kind."""

    @pytest.mark.parametrize("kind, record", [
        (EntityKind.CLIENT, CLIENT_RECORD),
        (EntityKind.CLIENT, {"id": "c-3", "name": "Minimal"}),
        (EntityKind.SUPPLIER, SUPPLIER_RECORD),
        (EntityKind.INVENTORY, ITEM_RECORD),
    ])
    def test_round_trip_is_stable(self, kind, record):
        first = mappers.to_ui(kind, record)
        second = mappers.to_ui(kind, mappers.to_storage(kind, first))
        assert second == first
