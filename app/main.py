# app/main.py
from fastapi import FastAPI
import uvicorn

from app.api.routers import (
    carts,
    contracts,
    health,
    media,
    orders,
    products,
    profiles,
    queues,
    users,
)
from app.data.database import init_db
from app.storage.clients import StorageGateway
from app.utils import settings
from app.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


def create_app(storage: StorageGateway | None = None) -> FastAPI:
    # brak connection stringow = blad startu
    settings.validate_settings()
    configure_logging()

    logger.info("Initializing database")
    init_db()

    app = FastAPI(
        title="Storefront Service",
        version="1.0.0",
    )
    app.state.storage = storage or StorageGateway.from_connection_string(
        settings.AZURE_STORAGE_CONNECTION_STRING
    )

    # Include routers
    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(products.router)
    app.include_router(profiles.router)
    app.include_router(carts.router)
    app.include_router(orders.router)
    app.include_router(orders.admin_router)
    app.include_router(media.router)
    app.include_router(contracts.router)
    app.include_router(queues.router)

    return app


if __name__ == "__main__":
    uvicorn.run(create_app(), host="0.0.0.0", port=8000)
