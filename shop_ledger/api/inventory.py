"""
Inventory API endpoints.

Stock moves through POST /inventory/{id}/adjustments with a whole
number delta. Inventory items take no payments.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from shop_ledger.api.ledger import add_ledger_routes, http_error
from shop_ledger.errors import LedgerError
from shop_ledger.models.base import get_db
from shop_ledger.schemas.inventory import (
    InventoryItem,
    InventoryItemCreate,
    InventoryItemUpdate,
)
from shop_ledger.models.enums import EntityKind
from shop_ledger.services.entity_service import InventoryService

router = APIRouter(prefix="/inventory", tags=["Inventory"])


# Registered ahead of /inventory/{entity_id}

@router.get("/low-stock", response_model=list[InventoryItem])
def get_low_stock(db: Session = Depends(get_db)):
    """Items at or below their low-stock threshold."""
    try:
        return InventoryService(db).low_stock()
    except LedgerError as e:
        raise http_error(e)


@router.get("/search", response_model=list[InventoryItem])
def search_inventory(
    q: str = Query("", max_length=100),
    db: Session = Depends(get_db),
):
    """Match on item name, brand, type, or barcode."""
    try:
        return InventoryService(db).search(q)
    except LedgerError as e:
        raise http_error(e)


add_ledger_routes(
    router,
    EntityKind.INVENTORY,
    entity_schema=InventoryItem,
    create_schema=InventoryItemCreate,
    update_schema=InventoryItemUpdate,
)
