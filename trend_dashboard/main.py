# trend_dashboard/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .config import Settings, get_settings
from .dashboard import router as dashboard_router
from .database import create_engine
from .exceptions import DashboardError, StoreUnavailable
from .logging_config import setup_logging
from .store import DashboardStore, InMemoryDashboardStore, SqlDashboardStore

logger = logging.getLogger(__name__)


def build_store(settings: Settings) -> DashboardStore:
    if settings.STORE_BACKEND == "memory":
        return InMemoryDashboardStore()
    return SqlDashboardStore(
        create_engine(settings),
        timeout=settings.STORE_TIMEOUT_SECONDS,
        auto_create=settings.CREATE_TABLES,
    )


def create_app(settings: Optional[Settings] = None, store: Optional[DashboardStore] = None) -> FastAPI:
    """Application factory. Pass ``store`` to run against a ready-made store (tests)."""
    settings = settings or get_settings()
    setup_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.store = store if store is not None else build_store(settings)
        logger.info("Starting %s", settings.APP_NAME)
        try:
            await app.state.store.open()
            yield
        finally:
            await app.state.store.close()
            logger.info("Stopped %s", settings.APP_NAME)

    app = FastAPI(
        title="Trend Dashboard",
        description="Product trend and visitor summaries for the analytics dashboard",
        version=__version__,
        lifespan=lifespan,
    )

    # ✅ CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(DashboardError)
    async def dashboard_error_handler(request: Request, exc: DashboardError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    # ✅ Routers
    app.include_router(dashboard_router, prefix=settings.DASHBOARD_PREFIX)

    @app.get("/health", tags=["health"])
    async def health(request: Request):
        try:
            await request.app.state.store.ping()
        except StoreUnavailable as e:
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": "unavailable", "detail": e.detail},
            )
        return {"status": "ok"}

    return app


def run() -> None:
    uvicorn.run("trend_dashboard.main:create_app", factory=True, host="0.0.0.0", port=8000)


if __name__ == "__main__":
    run()
