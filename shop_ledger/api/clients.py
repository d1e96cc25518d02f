"""
Client API endpoints.
"""

from fastapi import APIRouter

from shop_ledger.api.ledger import add_ledger_routes
from shop_ledger.models.enums import EntityKind
from shop_ledger.schemas.client import Client, ClientCreate, ClientUpdate

router = APIRouter(prefix="/clients", tags=["Clients"])

add_ledger_routes(
    router,
    EntityKind.CLIENT,
    entity_schema=Client,
    create_schema=ClientCreate,
    update_schema=ClientUpdate,
    with_payments=True,
)
