"""
Ledger API endpoints shared by every entity kind.

Clients, suppliers, and inventory items expose the same CRUD and
ledger routes; add_ledger_routes attaches them to a kind's router.
The API layer is thin: it maps errors to status codes, commits on
success, rolls back on failure, and delegates everything else to
the services.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from shop_ledger.errors import (
    LedgerError,
    LedgerValidationError,
    EntityNotFoundError,
)
from shop_ledger.models.base import get_db
from shop_ledger.models.enums import EntityKind
from shop_ledger.schemas.ledger import (
    HistoryEvent,
    Payment,
    PaymentCreate,
    BalanceAdjustment,
    LedgerSummary,
    ReconciliationReport,
)
from shop_ledger.services.entity_service import entity_service
from shop_ledger.services.events import FINANCIAL_DATA_CHANGE, financial_events
from shop_ledger.services.ledger_service import LedgerService

logger = logging.getLogger(__name__)


def http_error(e: LedgerError) -> HTTPException:
    """404 for unknown ids, 400 for refused requests, 500 for store failures."""
    if isinstance(e, EntityNotFoundError):
        logger.warning("Request rejected (404): %s", e)
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, LedgerValidationError):
        logger.warning("Request rejected (400): %s", e)
        return HTTPException(status_code=400, detail=str(e))
    logger.error("Request failed: %s", e)
    return HTTPException(status_code=500, detail=str(e))


def announce(kind: EntityKind, entity_id: str) -> None:
    financial_events.emit(FINANCIAL_DATA_CHANGE, {
        "kind": kind.value,
        "entity_id": entity_id,
    })


def add_ledger_routes(
    router: APIRouter,
    kind: EntityKind,
    entity_schema,
    create_schema,
    update_schema,
    with_payments: bool = False,
) -> APIRouter:
    """
    Attach CRUD, history, adjustment, summary, and reconciliation
    routes for one entity kind. Payment routes are added for kinds
    that carry a money balance.
    """

    @router.post("", response_model=entity_schema, status_code=201)
    def create_entity(
        request: create_schema,
        db: Session = Depends(get_db),
    ):
        service = entity_service(db, kind)
        try:
            entity = service.create(request)
            db.commit()
        except LedgerError as e:
            db.rollback()
            raise http_error(e)
        announce(kind, entity.id)
        return entity

    @router.get("", response_model=list[entity_schema])
    def list_entities(db: Session = Depends(get_db)):
        try:
            return entity_service(db, kind).list_all()
        except LedgerError as e:
            raise http_error(e)

    @router.get("/{entity_id}", response_model=entity_schema)
    def get_entity(entity_id: str, db: Session = Depends(get_db)):
        """Entity details including the full history."""
        try:
            return entity_service(db, kind).get(entity_id)
        except LedgerError as e:
            raise http_error(e)

    @router.patch("/{entity_id}", response_model=entity_schema)
    def update_entity(
        entity_id: str,
        request: update_schema,
        db: Session = Depends(get_db),
    ):
        service = entity_service(db, kind)
        try:
            entity = service.update(entity_id, request)
            db.commit()
        except LedgerError as e:
            db.rollback()
            raise http_error(e)
        announce(kind, entity_id)
        return entity

    @router.delete("/{entity_id}", status_code=204)
    def delete_entity(entity_id: str, db: Session = Depends(get_db)):
        service = entity_service(db, kind)
        try:
            service.delete(entity_id)
            db.commit()
        except LedgerError as e:
            db.rollback()
            raise http_error(e)
        announce(kind, entity_id)

    @router.get("/{entity_id}/history", response_model=list[HistoryEvent])
    def get_history(entity_id: str, db: Session = Depends(get_db)):
        """History events in the order they were recorded."""
        try:
            return LedgerService(db, kind).get_history(entity_id)
        except LedgerError as e:
            raise http_error(e)

    @router.post(
        "/{entity_id}/adjustments",
        response_model=HistoryEvent,
        status_code=201,
    )
    def adjust_balance(
        entity_id: str,
        request: BalanceAdjustment,
        db: Session = Depends(get_db),
    ):
        """
        Move the balance by a signed delta.

        The balance change and its history event are committed
        together or not at all.
        """
        service = LedgerService(db, kind)
        try:
            event = service.adjust_balance(
                entity_id,
                request.delta,
                reason=request.reason,
                related_id=request.related_id,
                event_type=request.event_type,
            )
            db.commit()
        except LedgerError as e:
            db.rollback()
            raise http_error(e)
        announce(kind, entity_id)
        return event

    @router.get("/{entity_id}/summary", response_model=LedgerSummary)
    def get_summary(entity_id: str, db: Session = Depends(get_db)):
        try:
            return LedgerService(db, kind).summarize(entity_id)
        except LedgerError as e:
            raise http_error(e)

    @router.get(
        "/{entity_id}/reconciliation",
        response_model=ReconciliationReport,
    )
    def get_reconciliation(entity_id: str, db: Session = Depends(get_db)):
        """Stored balance against the sum of the history."""
        try:
            return LedgerService(db, kind).reconcile(entity_id)
        except LedgerError as e:
            raise http_error(e)

    if not with_payments:
        return router

    @router.post(
        "/{entity_id}/payments",
        response_model=Payment,
        status_code=201,
    )
    def record_payment(
        entity_id: str,
        request: PaymentCreate,
        db: Session = Depends(get_db),
    ):
        """
        Record a payment.

        Writes the payment, reduces the balance by its amount, and
        appends one "Payment Made" event, all in one commit.
        """
        service = LedgerService(db, kind)
        try:
            payment = service.record_payment(
                entity_id,
                request.amount,
                request.method,
                notes=request.notes,
                session_id=request.session_id,
                received_by=request.received_by,
            )
            db.commit()
        except LedgerError as e:
            db.rollback()
            raise http_error(e)
        announce(kind, entity_id)
        return payment

    @router.get("/{entity_id}/payments", response_model=list[Payment])
    def list_payments(entity_id: str, db: Session = Depends(get_db)):
        try:
            return LedgerService(db, kind).get_payments(entity_id)
        except LedgerError as e:
            raise http_error(e)

    return router
