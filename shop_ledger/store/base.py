"""
Backing store — named commands over the embedded database.

The store is the only code that touches the ledger tables. It
speaks in storage-shaped records (plain dicts keyed by column
name) and knows nothing about the camelCase shapes the outer
surface uses; that translation lives in shop_ledger.mappers.

Every write flushes but never commits. The caller owns the
session and decides when a multi-command operation is complete.
"""

import logging
from contextlib import contextmanager
from typing import Any

from sqlalchemy import select, update, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shop_ledger.errors import StoreError
from shop_ledger.models.enums import EntityKind
from shop_ledger.time_utils import utcnow_iso

logger = logging.getLogger(__name__)

Record = dict[str, Any]


def columns_of(model) -> list[str]:
    return [c.key for c in model.__table__.columns]


class EntityStore:
    """
    Commands shared by every ledger entity kind.

    Subclasses declare their tables and the few column names that
    differ between kinds. COMMANDS maps each generic operation to
    the command name reported in errors and logs.
    """

    kind: EntityKind
    entity_model: Any
    history_model: Any
    payment_model: Any = None

    owner_field: str            # FK column on history / payment rows
    balance_field: str          # running balance column on the entity
    history_type_field: str
    history_amount_field: str

    COMMANDS: dict[str, str] = {}

    def __init__(self, db: Session):
        self.db = db

    # --- plumbing ---

    @contextmanager
    def _command(self, operation: str):
        name = self.COMMANDS.get(operation, f"{operation}_{self.kind.value}")
        try:
            yield name
        except SQLAlchemyError as e:
            logger.error("Store command %s failed: %s", name, e)
            raise StoreError(name, str(e)) from e

    def _record(self, obj, model=None) -> Record:
        model = model or self.entity_model
        return {key: getattr(obj, key) for key in columns_of(model)}

    def _history_record(self, row) -> Record:
        return {
            key: getattr(row, key)
            for key in columns_of(self.history_model)
            if key != "seq"
        }

    def _balance_column(self):
        return getattr(self.entity_model, self.balance_field)

    def _owner_column(self, model):
        return getattr(model, self.owner_field)

    # --- entity commands ---

    def insert(self, record: Record) -> Record:
        """Insert a new entity row. The record must carry its id."""
        with self._command("insert"):
            now = utcnow_iso()
            values = {
                key: record[key]
                for key in columns_of(self.entity_model)
                if key in record
            }
            values.setdefault("created_at", now)
            values.setdefault("updated_at", now)
            obj = self.entity_model(**values)
            self.db.add(obj)
            self.db.flush()
            return self._record(obj)

    def update(self, record: Record) -> Record:
        """
        Update descriptive fields of an entity.

        The balance column is never written here; balances only
        move through adjust_balance so that history stays paired.
        """
        with self._command("update") as name:
            obj = self.db.get(self.entity_model, record["id"])
            if obj is None:
                raise StoreError(name, f"no {self.kind.value} with id {record['id']}")
            for key in columns_of(self.entity_model):
                if key in ("id", "created_at", self.balance_field):
                    continue
                if key in record:
                    setattr(obj, key, record[key])
            obj.updated_at = record.get("updated_at") or utcnow_iso()
            self.db.flush()
            return self._record(obj)

    def delete(self, entity_id: str) -> None:
        with self._command("delete") as name:
            obj = self.db.get(self.entity_model, entity_id)
            if obj is None:
                raise StoreError(name, f"no {self.kind.value} with id {entity_id}")
            self.db.delete(obj)
            self.db.flush()

    def list_records(self) -> list[Record]:
        with self._command("list"):
            rows = self.db.execute(
                select(self.entity_model)
                .order_by(self.entity_model.created_at)
                .execution_options(populate_existing=True)
            ).scalars().all()
            return [self._record(r) for r in rows]

    def get_by_id(self, entity_id: str) -> Record | None:
        with self._command("get_by_id"):
            obj = self.db.execute(
                select(self.entity_model)
                .where(self.entity_model.id == entity_id)
                .execution_options(populate_existing=True)
            ).scalar_one_or_none()
            return self._record(obj) if obj is not None else None

    # --- ledger commands ---

    def adjust_balance(self, entity_id: str, amount) -> None:
        """
        Add amount to the stored balance.

        The update is additive in SQL (COALESCE(balance, 0) + amount)
        so two writers never overwrite each other's delta.
        """
        with self._command("adjust_balance") as name:
            column = self._balance_column()
            result = self.db.execute(
                update(self.entity_model)
                .where(self.entity_model.id == entity_id)
                .values({
                    self.balance_field: func.coalesce(column, 0) + amount,
                    "updated_at": utcnow_iso(),
                })
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                raise StoreError(name, f"no {self.kind.value} with id {entity_id}")
            # Loaded copies still hold the old balance
            self.db.expire_all()

    def insert_history(self, event: Record) -> Record:
        with self._command("insert_history"):
            values = {
                key: event[key]
                for key in columns_of(self.history_model)
                if key in event and key != "seq"
            }
            values.setdefault("date", utcnow_iso())
            row = self.history_model(**values)
            self.db.add(row)
            self.db.flush()
            return self._history_record(row)

    def get_history(self, entity_id: str) -> list[Record]:
        """History rows for one entity, in insertion order."""
        with self._command("get_history"):
            rows = self.db.execute(
                select(self.history_model)
                .where(self._owner_column(self.history_model) == entity_id)
                .order_by(self.history_model.seq)
            ).scalars().all()
            return [self._history_record(r) for r in rows]

    def add_payment(
        self,
        payment_id: str,
        entity_id: str,
        amount,
        method: str,
        notes: str | None = None,
        session_id: str | None = None,
        received_by: str | None = None,
    ) -> Record:
        if self.payment_model is None:
            raise StoreError(
                f"add_{self.kind.value}_payment",
                f"{self.kind.value} entities do not take payments",
            )
        with self._command("add_payment"):
            row = self.payment_model(**{
                "id": payment_id,
                self.owner_field: entity_id,
                "amount": amount,
                "method": method,
                "date": utcnow_iso(),
                "notes": notes,
                "session_id": session_id,
                "received_by": received_by,
            })
            self.db.add(row)
            self.db.flush()
            return self._record(row, self.payment_model)

    def get_payments(self, entity_id: str) -> list[Record]:
        if self.payment_model is None:
            return []
        with self._command("get_payments"):
            rows = self.db.execute(
                select(self.payment_model)
                .where(self._owner_column(self.payment_model) == entity_id)
                .order_by(self.payment_model.date)
            ).scalars().all()
            return [self._record(r, self.payment_model) for r in rows]
