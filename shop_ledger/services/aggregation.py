"""
Read-only figures derived from loaded entities and their history.

Nothing here touches the store. Every function takes UI records
(shop_ledger.schemas) that are already in memory and returns a
value; the inputs are never mutated.
"""

from collections import Counter
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Iterable

from shop_ledger.models.enums import EntityStatus, PaymentMethod
from shop_ledger.schemas.ledger import HistoryEvent
from shop_ledger.schemas.supplier import Supplier, SupplierStats
from shop_ledger.schemas.inventory import InventoryItem
from shop_ledger.time_utils import utcnow, parse_iso

PAYMENT_EVENT_TYPES = frozenset({"Payment Made"})

_EARLIEST = datetime.min.replace(tzinfo=timezone.utc)


def _date_key(event: HistoryEvent) -> datetime:
    return parse_iso(event.date) or _EARLIEST


# --- history ---

def history_total(history: Iterable[HistoryEvent]):
    """Sum of every event's signed amount."""
    return sum((event.amount for event in history), 0)


def total_paid(history: Iterable[HistoryEvent]) -> Decimal:
    """Money received or paid out, as a positive figure."""
    return sum(
        (abs(Decimal(event.amount)) for event in history
         if event.type in PAYMENT_EVENT_TYPES),
        Decimal("0"),
    )


def remaining_balance(total_cost, history: Iterable[HistoryEvent]) -> Decimal:
    """What is still owed against a fixed total, e.g. a repair quote."""
    return Decimal(str(total_cost)) - total_paid(history)


def last_activity_date(
    history: Iterable[HistoryEvent],
    updated_at: datetime | None = None,
) -> datetime | None:
    """
    Latest event date, falling back to updated_at when there is
    no history at all.
    """
    dates = [parse_iso(e.date) for e in history if e.date is not None]
    if not dates:
        return parse_iso(updated_at)
    return max(dates)


def is_overdue(
    balance,
    last_activity: datetime | None,
    now: datetime | None = None,
    overdue_days: int = 30,
) -> bool:
    """
    True when something is owed and nothing has happened for
    strictly longer than overdue_days.
    """
    if balance is None or balance <= 0 or last_activity is None:
        return False
    now = parse_iso(now) or utcnow()
    return parse_iso(last_activity) < now - timedelta(days=overdue_days)


def sort_for_display(history: Iterable[HistoryEvent]) -> list[HistoryEvent]:
    """Newest first. Events sharing a date keep their insertion order."""
    return sorted(history, key=_date_key, reverse=True)


def filter_history(
    history: Iterable[HistoryEvent],
    event_types: Iterable[str] | None = None,
) -> list[HistoryEvent]:
    history = list(history)
    if not event_types:
        return history
    wanted = {str(getattr(t, "value", t)) for t in event_types}
    return [event for event in history if event.type in wanted]


def recent_activity(
    history: Iterable[HistoryEvent],
    now: datetime | None = None,
    days: int = 30,
) -> list[HistoryEvent]:
    now = parse_iso(now) or utcnow()
    cutoff = now - timedelta(days=days)
    return [
        event for event in history
        if event.date is not None and parse_iso(event.date) >= cutoff
    ]


# --- clients and suppliers ---

def _balance(entity) -> Decimal:
    return entity.balance or Decimal("0")


def _last_activity(entity) -> datetime:
    return last_activity_date(entity.history, entity.updated_at) or _EARLIEST


def total_outstanding(entities: Iterable) -> Decimal:
    return sum((_balance(e) for e in entities), Decimal("0"))


def with_outstanding_balance(entities: Iterable) -> list:
    return [e for e in entities if _balance(e) > 0]


def search_parties(entities: Iterable, query: str) -> list:
    """Case-insensitive match on name, contact name, e-mail and phone."""
    entities = list(entities)
    term = (query or "").strip().lower()
    if not term:
        return entities

    def matches(entity) -> bool:
        fields = (entity.name, entity.contact_name, entity.email, entity.phone)
        return any(term in f.lower() for f in fields if f)

    return [e for e in entities if matches(e)]


def sort_by_balance(entities: Iterable) -> list:
    """Highest balance first."""
    return sorted(entities, key=_balance, reverse=True)


def sort_by_activity(entities: Iterable) -> list:
    """Most recently active first."""
    return sorted(entities, key=_last_activity, reverse=True)


def sort_by_name(entities: Iterable) -> list:
    return sorted(entities, key=lambda e: e.name.casefold())


def top_by_balance(entities: Iterable, limit: int = 5) -> list:
    return sort_by_balance(entities)[:limit]


def can_deactivate(entity) -> bool:
    """Only settled accounts may be deactivated."""
    return _balance(entity) <= 0


def supplier_stats(suppliers: Iterable[Supplier]) -> SupplierStats:
    suppliers = list(suppliers)
    total = len(suppliers)
    active = sum(1 for s in suppliers if s.status == EntityStatus.ACTIVE)
    outstanding = total_outstanding(suppliers)

    by_method = Counter(
        (s.preferred_payment_method or PaymentMethod.OTHER).value
        for s in suppliers
    )

    return SupplierStats(
        total=total,
        active=active,
        inactive=total - active,
        with_balance=len(with_outstanding_balance(suppliers)),
        total_outstanding=outstanding,
        average_balance=outstanding / total if total else Decimal("0"),
        by_payment_method=dict(by_method),
    )


# --- inventory ---

def low_stock(items: Iterable[InventoryItem]) -> list[InventoryItem]:
    return [item for item in items if item.is_low_stock]


def inventory_value(items: Iterable[InventoryItem]) -> Decimal:
    """Stock valued at buying price."""
    return sum(
        (Decimal(str(item.buying_price)) * item.quantity_in_stock
         for item in items),
        Decimal("0"),
    )
