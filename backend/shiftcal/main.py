from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import date
from typing import TYPE_CHECKING

from fastapi import FastAPI

from shiftcal.api.health import router as health_router
from shiftcal.api.router import api_router
from shiftcal.config import get_settings
from shiftcal.db import dispose_engine
from shiftcal.exceptions import setup_exception_handlers
from shiftcal.middleware import setup_middleware
from shiftcal.services import holiday as holiday_oracle

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager for startup and shutdown."""
    settings = get_settings()
    logger.info("Starting %s v%s [%s]", settings.app_name, settings.app_version, settings.environment)
    logger.info("Rotation anchored at %s", settings.rotation_reference_date)
    current_year = date.today().year
    if not holiday_oracle.is_lunar_supported(current_year):
        logger.warning("Lunar holiday table does not cover %d; holiday counts will be low", current_year)
    yield
    logger.info("Shutting down %s", settings.app_name)
    await dispose_engine()


def create_app() -> FastAPI:
    """Application factory."""
    settings = get_settings()

    application = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
        docs_url="/docs" if settings.environment != "production" else None,
        redoc_url="/redoc" if settings.environment != "production" else None,
    )

    setup_middleware(application, settings)
    setup_exception_handlers(application)

    application.include_router(health_router)
    application.include_router(api_router)

    return application


app = create_app()
