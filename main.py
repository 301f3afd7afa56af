"""
Mobile shop backend — application entry point.
"""

from __future__ import annotations

import logging
import sys
from datetime import timedelta
from typing import Optional

import httpx
import uvicorn
from fastapi import FastAPI

from api.exception_handlers import setup_exception_handlers
from api.middleware import register_middleware
from auth.routes import router as auth_router
from auth.tokens import TokenIssuer
from catalog.client import CatalogClient
from catalog.routes import router as catalog_router
from config.settings import Settings
from database.session import build_engine, build_session_factory, init_db
from utils.schemas import HealthResponse

logger = logging.getLogger(__name__)


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
        stream=sys.stdout,
    )
    for _noisy in ("httpcore", "httpx", "sqlalchemy.engine", "aiosqlite", "asyncio"):
        logging.getLogger(_noisy).setLevel(logging.WARNING)


def create_app(
    settings: Optional[Settings] = None,
    catalog_transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Build the application.

    ``settings`` is validated here so a missing signing secret stops the
    process before it binds a port.  ``catalog_transport`` replaces the
    network transport of the upstream catalog client.
    """
    settings = settings or Settings()
    settings.validate_for_startup()

    app = FastAPI(
        title="Mobile Shop Backend",
        version="1.0.0",
        description="User accounts and a read-through product catalog.",
    )

    engine = build_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.token_issuer = TokenIssuer(
        settings.jwt_secret,
        lifetime=timedelta(seconds=settings.jwt_expiry_seconds),
    )
    app.state.catalog = CatalogClient.create(
        settings.catalog_base_url,
        settings.catalog_timeout_seconds,
        transport=catalog_transport,
    )

    register_middleware(app, settings.cors_origins, settings.trusted_proxy_list())
    setup_exception_handlers(app)

    # Routes
    app.include_router(auth_router, prefix="/api")
    app.include_router(catalog_router, prefix="/api")

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", mode="full")

    @app.on_event("startup")
    async def on_startup():
        await init_db(engine)
        logger.info("Trusted proxies: %s", settings.trusted_proxy_list())
        logger.info("Application ready to accept requests.")

    @app.on_event("shutdown")
    async def on_shutdown():
        await app.state.catalog.aclose()
        await engine.dispose()

    return app


if __name__ == "__main__":
    _settings = Settings()
    configure_logging(_settings.debug)
    uvicorn.run(
        create_app(_settings),
        host=_settings.host,
        port=_settings.port,
        log_level="debug" if _settings.debug else "info",
        proxy_headers=False,
    )
