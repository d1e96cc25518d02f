"""
Ledger service — balance adjustments, payments, and history.

This service enforces the rules that keep an entity's balance and
its history in step:
1. Every balance change is paired with exactly one history event
2. History is append-only; events are never edited or removed
3. A payment is a positive amount and reduces the balance by
   exactly that amount
4. Stock is counted in whole units and never goes below zero

Both writes of a balance change go through the same session. The
service only flushes; the caller commits once everything has
succeeded or rolls back if anything failed, so a balance can no
longer move without its history event.
"""

import logging
import uuid
from decimal import Decimal, InvalidOperation

from sqlalchemy.orm import Session

from shop_ledger.config import Settings, get_settings
from shop_ledger.errors import EntityNotFoundError, LedgerValidationError
from shop_ledger.mappers import (
    history_from_record,
    history_to_record,
    payment_from_record,
    to_ui,
)
from shop_ledger.models.enums import (
    EntityKind,
    PaymentMethod,
    ClientHistoryType,
    SupplierHistoryType,
    InventoryHistoryType,
)
from shop_ledger.schemas.ledger import (
    HistoryEvent,
    Payment,
    LedgerSummary,
    ReconciliationReport,
)
from shop_ledger.services import aggregation
from shop_ledger.store import STORES, EntityStore, Record
from shop_ledger.time_utils import utcnow

logger = logging.getLogger(__name__)


HISTORY_TYPES = {
    EntityKind.CLIENT: ClientHistoryType,
    EntityKind.SUPPLIER: SupplierHistoryType,
    EntityKind.INVENTORY: InventoryHistoryType,
}

# Event type used when the caller does not name one
ADJUSTMENT_TYPES = {
    EntityKind.CLIENT: ClientHistoryType.BALANCE_ADJUSTED,
    EntityKind.SUPPLIER: SupplierHistoryType.CREDIT_BALANCE_ADJUSTED,
    EntityKind.INVENTORY: InventoryHistoryType.MANUAL_CORRECTION,
}

PAYMENT_EVENT_TYPE = "Payment Made"

DEFAULT_REASON = "Manual entry"


class LedgerService:
    """
    Ledger operations for one entity kind.

    Like every service here it takes the session from the caller,
    who controls the transaction boundary. A store may be passed
    in; by default the kind's own store is built on the session.
    """

    def __init__(
        self,
        db: Session,
        kind: EntityKind,
        store: EntityStore | None = None,
        settings: Settings | None = None,
    ):
        self.db = db
        self.kind = EntityKind(kind)
        self.store = store if store is not None else STORES[self.kind](db)
        self.settings = settings or get_settings()

    # --- validation ---

    def _require(self, entity_id: str) -> Record:
        record = self.store.get_by_id(entity_id)
        if record is None:
            raise EntityNotFoundError(self.kind.value, entity_id)
        return record

    def _coerce_delta(self, delta) -> int | Decimal:
        try:
            value = Decimal(str(delta))
        except InvalidOperation:
            raise LedgerValidationError(f"Invalid amount: {delta!r}")
        if not value.is_finite():
            raise LedgerValidationError(f"Invalid amount: {delta!r}")

        if self.kind == EntityKind.INVENTORY:
            if value != value.to_integral_value():
                raise LedgerValidationError(
                    f"Stock changes must be whole units, got {delta}"
                )
            return int(value)
        return value

    def _event_type(self, event_type) -> str:
        if event_type is None:
            return ADJUSTMENT_TYPES[self.kind].value
        value = getattr(event_type, "value", event_type)
        allowed = [t.value for t in HISTORY_TYPES[self.kind]]
        if value not in allowed:
            raise LedgerValidationError(
                f"Unknown {self.kind.value} event type '{value}'. "
                f"Allowed: {allowed}"
            )
        return value

    # --- balance adjustment ---

    def adjust_balance(
        self,
        entity_id: str,
        delta,
        reason: str | None = None,
        related_id: str | None = None,
        event_type: str | None = None,
        changed_by: str | None = None,
    ) -> HistoryEvent:
        """
        Move an entity's balance by a signed delta and record it.

        Validation happens before any write:
        - the delta must be a finite, non-zero number
        - the entity must exist
        - for inventory, the delta must be whole and must not take
          stock below zero

        Raises LedgerValidationError on any of the above, and
        StoreError if either write fails. Nothing is committed here.
        """
        amount = self._coerce_delta(delta)
        if amount == 0:
            raise LedgerValidationError("Adjustment amount must not be zero")
        record = self._require(entity_id)

        if self.kind == EntityKind.INVENTORY:
            in_stock = record.get("quantity_in_stock") or 0
            if in_stock + amount < 0:
                raise LedgerValidationError(
                    f"Cannot remove {-amount} unit(s) from item {entity_id}: "
                    f"only {in_stock} in stock"
                )

        event = HistoryEvent(
            id=str(uuid.uuid4()),
            entity_id=entity_id,
            date=utcnow(),
            type=self._event_type(event_type),
            amount=amount,
            notes=reason or DEFAULT_REASON,
            related_id=related_id,
            changed_by=changed_by,
        )

        # Both writes share the session; the caller commits them together
        self.store.adjust_balance(entity_id, amount)
        stored = self.store.insert_history(history_to_record(self.kind, event))

        logger.info(
            "%s %s adjusted by %s (%s)",
            self.kind.value.capitalize(), entity_id, amount, event.type,
        )
        return history_from_record(self.kind, stored)

    # --- payments ---

    def record_payment(
        self,
        entity_id: str,
        amount,
        method,
        notes: str | None = None,
        session_id: str | None = None,
        received_by: str | None = None,
    ) -> Payment:
        """
        Record a payment and take it off the balance.

        Writes the payment row, then adjusts the balance by -amount
        with a "Payment Made" event pointing back at the payment.
        """
        if self.kind == EntityKind.INVENTORY:
            raise LedgerValidationError("Inventory items do not take payments")

        try:
            value = Decimal(str(amount))
        except InvalidOperation:
            raise LedgerValidationError(f"Invalid payment amount: {amount!r}")
        if not value.is_finite():
            raise LedgerValidationError(f"Invalid payment amount: {amount!r}")
        if value <= 0:
            raise LedgerValidationError(
                f"Payment amount must be positive, got {amount}"
            )

        try:
            method = PaymentMethod(method)
        except ValueError:
            raise LedgerValidationError(f"Unknown payment method '{method}'")

        self._require(entity_id)

        payment_id = str(uuid.uuid4())
        row = self.store.add_payment(
            payment_id,
            entity_id,
            value,
            method.value,
            notes=notes,
            session_id=session_id,
            received_by=received_by,
        )

        reason = f"Payment via {method.value}"
        if notes:
            reason = f"{reason}: {notes}"

        self.adjust_balance(
            entity_id,
            -value,
            reason=reason,
            related_id=payment_id,
            event_type=PAYMENT_EVENT_TYPE,
            changed_by=received_by,
        )
        return payment_from_record(self.kind, row)

    def get_payments(self, entity_id: str) -> list[Payment]:
        self._require(entity_id)
        return [
            payment_from_record(self.kind, r)
            for r in self.store.get_payments(entity_id)
        ]

    # --- history and derived figures ---

    def get_history(self, entity_id: str) -> list[HistoryEvent]:
        """Every event for the entity, oldest first."""
        self._require(entity_id)
        return [
            history_from_record(self.kind, r)
            for r in self.store.get_history(entity_id)
        ]

    def summarize(self, entity_id: str, now=None) -> LedgerSummary:
        record = self._require(entity_id)
        entity = to_ui(self.kind, record)
        history = self.get_history(entity_id)

        last_activity = aggregation.last_activity_date(
            history, entity.updated_at
        )
        # Stock on hand is not a debt
        overdue = self.kind != EntityKind.INVENTORY and aggregation.is_overdue(
            entity.balance,
            last_activity,
            now=now,
            overdue_days=self.settings.OVERDUE_DAYS,
        )

        return LedgerSummary(
            entity_id=entity_id,
            balance=entity.balance,
            total_paid=aggregation.total_paid(history),
            last_activity_date=last_activity,
            is_overdue=overdue,
            event_count=len(history),
        )

    def reconcile(self, entity_id: str) -> ReconciliationReport:
        """
        Compare the stored balance with the sum of the history.

        Creation events carry the opening balance, so for a
        consistent entity the two are equal. A mismatch is logged
        and reported; nothing is corrected automatically.
        """
        record = self._require(entity_id)
        balance = to_ui(self.kind, record).balance
        total = aggregation.history_total(self.get_history(entity_id))
        difference = balance - total

        if difference != 0:
            logger.warning(
                "%s %s balance %s does not match history total %s",
                self.kind.value.capitalize(), entity_id, balance, total,
            )

        return ReconciliationReport(
            entity_id=entity_id,
            balance=balance,
            history_total=total,
            difference=difference,
            is_consistent=difference == 0,
        )
