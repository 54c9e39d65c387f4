from __future__ import annotations

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hotelms.api.v1.router import router as api_v1_router
from hotelms.config.settings import Settings, get_settings
from hotelms.core.error_handling import register_exception_handlers
from hotelms.core.logging import get_logger, setup_logging
from hotelms.core.middleware import register_middlewares
from hotelms.core.security import PasswordHasher
from hotelms.db.init_db import init_db, seed_first_admin
from hotelms.db.session import build_engine, build_session_factory

logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Application factory for the FastAPI app.

    - Configures title, version, debug mode from Settings.
    - Registers CORS, core middleware, and exception handlers.
    - Includes the versioned API router under API_V1_STR.
    """
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title=settings.APP_NAME,
        debug=settings.DEBUG,
        version=settings.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    app.state.settings = settings

    origins = settings.get_cors_origins() or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Browsers reject credentials with a wildcard origin
        allow_credentials=origins != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middlewares(app)
    register_exception_handlers(app)

    app.include_router(api_v1_router, prefix=settings.API_V1_STR)

    # Schema creation is for dev/demo only; production uses migrations
    @app.on_event("startup")
    def on_startup() -> None:
        if settings.is_production():
            return
        db_engine = build_engine(settings.get_database_url(), settings)
        init_db(db_engine)
        db = build_session_factory(db_engine)()
        try:
            seed_first_admin(db, settings, PasswordHasher(rounds=settings.PASSWORD_BCRYPT_ROUNDS))
        finally:
            db.close()
            db_engine.dispose()

    logger.info(
        "Application created",
        extra={"environment": settings.ENVIRONMENT, "api_prefix": settings.API_V1_STR},
    )
    return app


app = create_app()
