"""
Cleo — Application entry point.

This is the **only** file that assembles the app.  All business logic
lives in the `api/`, `services/`, `repositories/`, and `models/` packages.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cleo.api.v1.api import api_router
from cleo.core.config import settings
from cleo.core.exceptions import register_exception_handlers
from cleo.db.base import Base
from cleo.db.session import async_session_factory, engine

# Ensure all models are imported so metadata.create_all can see them
from cleo.models.content import ExtraContentField, UserFile, UserPost  # noqa: F401
from cleo.models.credentials import EmailToken, UserAPIToken, UserKey  # noqa: F401
from cleo.models.instance import InstanceInformation  # noqa: F401
from cleo.models.user import User  # noqa: F401
from cleo.services.bootstrap import bootstrap_instance

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


# ── Lifespan ────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(_app: FastAPI):
    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables initialised")

    # Seed instance information & default admin on first run
    async with async_session_factory() as session:
        await bootstrap_instance(session, settings)

    logger.info("Cleo v%s started for %s", settings.VERSION, settings.HOSTNAME)
    yield
    await engine.dispose()
    logger.info("Shutdown complete")


# ── App factory ─────────────────────────────────────────────────────
def create_app() -> FastAPI:
    application = FastAPI(
        title=settings.PROJECT_NAME,
        description="Blogging & publishing backend",
        version=settings.VERSION,
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # CORS
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Global exception handlers (prevent stack-trace leakage)
    register_exception_handlers(application)

    application.include_router(api_router, prefix=settings.API_PREFIX)

    return application


app = create_app()


def run() -> None:
    """Console entry point: serve the app on CLEO_HOST:CLEO_PORT."""
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
