"""
Supplier API endpoints.

/suppliers/stats is registered before the per-supplier routes so
that "stats" is never read as a supplier id.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shop_ledger.api.ledger import add_ledger_routes, http_error
from shop_ledger.errors import LedgerError
from shop_ledger.models.base import get_db
from shop_ledger.models.enums import EntityKind
from shop_ledger.schemas.supplier import (
    Supplier,
    SupplierCreate,
    SupplierUpdate,
    SupplierStats,
)
from shop_ledger.services import aggregation
from shop_ledger.services.entity_service import EntityService

router = APIRouter(prefix="/suppliers", tags=["Suppliers"])


@router.get("/stats", response_model=SupplierStats)
def get_supplier_stats(db: Session = Depends(get_db)):
    """Counts and balance totals across all suppliers."""
    try:
        suppliers = EntityService(db, EntityKind.SUPPLIER).list_all()
    except LedgerError as e:
        raise http_error(e)
    return aggregation.supplier_stats(suppliers)


add_ledger_routes(
    router,
    EntityKind.SUPPLIER,
    entity_schema=Supplier,
    create_schema=SupplierCreate,
    update_schema=SupplierUpdate,
    with_payments=True,
)
