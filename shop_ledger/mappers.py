"""
Entity mapper — storage records to UI records and back.

Storage records are the plain dicts the store returns, keyed by
the snake_case column names. UI records are the pydantic models
in shop_ledger.schemas, which serialise to camelCase.

Mapping never validates beyond type coercion and never fails as
long as the identity fields are present (id, plus name or
item_name). Anything missing on one side gets a default:

    credit_balance     <-> outstanding_balance   (missing -> 0)
    active (bool/int)  <-> status                (missing -> active)
    quantity_in_stock                            (missing -> 0)
    ISO-8601 string    <-> datetime
    history                                      (missing -> [])
"""

from decimal import Decimal

from shop_ledger.models.enums import EntityKind, EntityStatus, PaymentMethod
from shop_ledger.schemas.client import Client
from shop_ledger.schemas.inventory import InventoryItem
from shop_ledger.schemas.ledger import HistoryEvent, Payment
from shop_ledger.schemas.supplier import Supplier
from shop_ledger.store.base import Record
from shop_ledger.time_utils import parse_iso, to_iso

OWNER_FIELDS = {
    EntityKind.CLIENT: "client_id",
    EntityKind.SUPPLIER: "supplier_id",
    EntityKind.INVENTORY: "item_id",
}

# Older rows and forms used the short name
_METHOD_ALIASES = {"Card": PaymentMethod.CREDIT_CARD}


# --- field helpers ---

def _money(value) -> Decimal:
    if value is None or value == "":
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _quantity(value) -> int:
    if value is None or value == "":
        return 0
    return int(value)


def _status(active) -> EntityStatus:
    if active is None:
        return EntityStatus.ACTIVE
    return EntityStatus.ACTIVE if bool(active) else EntityStatus.INACTIVE


def _active(status) -> bool:
    return EntityStatus(status) == EntityStatus.ACTIVE


def _method(value) -> PaymentMethod | None:
    if value is None or value == "":
        return None
    if value in _METHOD_ALIASES:
        return _METHOD_ALIASES[value]
    try:
        return PaymentMethod(value)
    except ValueError:
        return PaymentMethod.OTHER


def _history(kind: EntityKind, record: Record) -> list[HistoryEvent]:
    return [history_from_record(kind, h) for h in record.get("history") or []]


# --- history and payments ---

def history_from_record(kind: EntityKind, record: Record) -> HistoryEvent:
    kind = EntityKind(kind)
    owner_field = OWNER_FIELDS[kind]
    if kind == EntityKind.INVENTORY:
        event_type = record.get("event_type") or record.get("type")
        raw_amount = record.get("quantity_change", record.get("amount"))
        amount = _quantity(raw_amount)
    else:
        event_type = record.get("type") or record.get("event_type")
        amount = _money(record.get("amount"))
    return HistoryEvent(
        id=record["id"],
        entity_id=record.get(owner_field) or record.get("entity_id") or "",
        date=parse_iso(record.get("date")),
        type=event_type or "Other",
        amount=amount,
        notes=record.get("notes"),
        related_id=record.get("related_id"),
        changed_by=record.get("changed_by"),
    )


def history_to_record(kind: EntityKind, event: HistoryEvent) -> Record:
    kind = EntityKind(kind)
    record = {
        "id": event.id,
        OWNER_FIELDS[kind]: event.entity_id,
        "date": to_iso(event.date),
        "notes": event.notes,
        "related_id": event.related_id,
    }
    if kind == EntityKind.INVENTORY:
        record["event_type"] = event.type
        record["quantity_change"] = int(event.amount)
    else:
        record["type"] = event.type
        record["amount"] = _money(event.amount)
        record["changed_by"] = event.changed_by
    return record


def payment_from_record(kind: EntityKind, record: Record) -> Payment:
    owner_field = OWNER_FIELDS[EntityKind(kind)]
    return Payment(
        id=record["id"],
        entity_id=record.get(owner_field) or record.get("entity_id") or "",
        amount=_money(record.get("amount")),
        method=_method(record.get("method")) or PaymentMethod.OTHER,
        date=parse_iso(record.get("date")),
        notes=record.get("notes"),
        session_id=record.get("session_id"),
        received_by=record.get("received_by"),
    )


# --- clients ---

def client_from_record(record: Record) -> Client:
    return Client(
        id=record["id"],
        name=record["name"],
        contact_name=record.get("contact_name"),
        email=record.get("email"),
        phone=record.get("phone"),
        address=record.get("address"),
        notes=record.get("notes"),
        outstanding_balance=_money(record.get("credit_balance")),
        status=_status(record.get("active")),
        created_at=parse_iso(record.get("created_at")),
        updated_at=parse_iso(record.get("updated_at")),
        history=_history(EntityKind.CLIENT, record),
    )


def client_to_record(client: Client) -> Record:
    return {
        "id": client.id,
        "name": client.name,
        "contact_name": client.contact_name,
        "email": client.email,
        "phone": client.phone,
        "address": client.address,
        "notes": client.notes,
        "credit_balance": client.outstanding_balance,
        "active": _active(client.status),
        "created_at": to_iso(client.created_at),
        "updated_at": to_iso(client.updated_at),
        "history": [
            history_to_record(EntityKind.CLIENT, h) for h in client.history
        ],
    }


# --- suppliers ---

def supplier_from_record(record: Record) -> Supplier:
    return Supplier(
        id=record["id"],
        name=record["name"],
        contact_name=record.get("contact_name"),
        email=record.get("email"),
        phone=record.get("phone"),
        address=record.get("address"),
        notes=record.get("notes"),
        preferred_payment_method=_method(record.get("preferred_payment_method")),
        outstanding_balance=_money(record.get("credit_balance")),
        status=_status(record.get("active")),
        created_at=parse_iso(record.get("created_at")),
        updated_at=parse_iso(record.get("updated_at")),
        history=_history(EntityKind.SUPPLIER, record),
    )


def supplier_to_record(supplier: Supplier) -> Record:
    method = supplier.preferred_payment_method
    return {
        "id": supplier.id,
        "name": supplier.name,
        "contact_name": supplier.contact_name,
        "email": supplier.email,
        "phone": supplier.phone,
        "address": supplier.address,
        "notes": supplier.notes,
        "preferred_payment_method": method.value if method else None,
        "credit_balance": supplier.outstanding_balance,
        "active": _active(supplier.status),
        "created_at": to_iso(supplier.created_at),
        "updated_at": to_iso(supplier.updated_at),
        "history": [
            history_to_record(EntityKind.SUPPLIER, h) for h in supplier.history
        ],
    }


# --- inventory ---

def item_from_record(record: Record) -> InventoryItem:
    return InventoryItem(
        id=record["id"],
        item_name=record["item_name"],
        phone_brand=record.get("phone_brand") or "Other",
        item_type=record.get("item_type") or "Other",
        buying_price=record.get("buying_price") or 0.0,
        selling_price=record.get("selling_price") or 0.0,
        quantity_in_stock=_quantity(record.get("quantity_in_stock")),
        low_stock_threshold=record.get("low_stock_threshold"),
        supplier_info=record.get("supplier_info"),
        barcode=record.get("barcode"),
        created_at=parse_iso(record.get("created_at")),
        updated_at=parse_iso(record.get("updated_at")),
        history=_history(EntityKind.INVENTORY, record),
    )


def item_to_record(item: InventoryItem) -> Record:
    return {
        "id": item.id,
        "item_name": item.item_name,
        "phone_brand": item.phone_brand,
        "item_type": item.item_type,
        "buying_price": item.buying_price,
        "selling_price": item.selling_price,
        "quantity_in_stock": item.quantity_in_stock,
        "low_stock_threshold": item.low_stock_threshold,
        "supplier_info": item.supplier_info,
        "barcode": item.barcode,
        "created_at": to_iso(item.created_at),
        "updated_at": to_iso(item.updated_at),
        "history": [
            history_to_record(EntityKind.INVENTORY, h) for h in item.history
        ],
    }


# --- dispatch by kind ---

FROM_RECORD = {
    EntityKind.CLIENT: client_from_record,
    EntityKind.SUPPLIER: supplier_from_record,
    EntityKind.INVENTORY: item_from_record,
}

TO_RECORD = {
    EntityKind.CLIENT: client_to_record,
    EntityKind.SUPPLIER: supplier_to_record,
    EntityKind.INVENTORY: item_to_record,
}


def to_ui(kind: EntityKind, record: Record):
    return FROM_RECORD[EntityKind(kind)](record)


def to_storage(kind: EntityKind, entity) -> Record:
    return TO_RECORD[EntityKind(kind)](entity)
