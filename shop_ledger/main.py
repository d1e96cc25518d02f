"""
Shop Ledger — FastAPI Application.

This is the entry point for the application.
All routers are registered here.
"""

import logging

from fastapi import FastAPI

from shop_ledger.config import get_settings, configure_logging
from shop_ledger.api.health import router as health_router
from shop_ledger.api.clients import router as clients_router
from shop_ledger.api.suppliers import router as suppliers_router
from shop_ledger.api.inventory import router as inventory_router

settings = get_settings()
configure_logging(settings.LOG_LEVEL)

logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Client, supplier, and inventory ledgers for a repair shop",
)

# Register routers
app.include_router(health_router)
app.include_router(clients_router)
app.include_router(suppliers_router)
app.include_router(inventory_router)

logger.info(
    "%s %s started (%s)",
    settings.APP_NAME, settings.APP_VERSION, settings.ENVIRONMENT,
)


def run() -> None:
    """Serve the API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "shop_ledger.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
