# pocketcashier/main.py
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pocketcashier.api.errors import setup_error_handlers
from pocketcashier.api.routers import carts, checkout, health, notifications, orders, payments, referrals
from pocketcashier.data.database import Base, engine
from pocketcashier.utils.settings import get_settings
from pocketcashier.utils.logging import get_logger

# import wszystkich modeli przed create_all
import pocketcashier.data.models  # noqa: F401

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if get_settings().create_tables:
        logger.info(f"Initializing database, tables: {list(Base.metadata.tables.keys())}")
        Base.metadata.create_all(bind=engine)
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="Pocket Cashier Shop Service",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Client-Info", "Apikey"],
    )

    setup_error_handlers(app)

    app.include_router(health.router)
    app.include_router(carts.router)
    app.include_router(orders.router)
    app.include_router(payments.router)
    app.include_router(checkout.router)
    app.include_router(notifications.router)
    app.include_router(referrals.router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
