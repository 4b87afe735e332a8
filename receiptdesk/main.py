from contextlib import asynccontextmanager

from fastapi import FastAPI
from receiptdesk.api.v1.routes_profile import router as profile_router
from receiptdesk.api.v1.routes_receipts import router as receipts_router
from receiptdesk.core.errors import register_error_handlers
from receiptdesk.core.logging import configure_logging, get_logger
from receiptdesk.db.base import init_models

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    await init_models()
    logger.info("receiptdesk started")
    yield


def create_app(use_lifespan: bool = True) -> FastAPI:
    app = FastAPI(title="receiptdesk", lifespan=lifespan if use_lifespan else None)
    register_error_handlers(app)

    app.include_router(profile_router, prefix="/api")
    app.include_router(receipts_router, prefix="/api")

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
