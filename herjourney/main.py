"""HerJourney API: FastAPI application entry point.

Run locally:
    uvicorn herjourney.main:app --reload --port 8000
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from herjourney.care.config_loader import get_care_config, reload_care_config
from herjourney.config import get_settings
from herjourney.middleware.security import SecurityHeadersMiddleware
from herjourney.models.base import ErrorDetail
from herjourney.routers import (
    analyzer,
    health,
    notes,
    onboarding,
    pregnancy,
    premium,
    profile,
    tips,
    tracker,
)
from herjourney.storage.repository import StateStoreError
from herjourney.storage.service import close_state_service, init_state_service

# ---------- Logging ----------

logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stdout,
)
logger = logging.getLogger("herjourney")


# ---------- Lifespan ----------

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup / shutdown hooks."""
    settings = get_settings()
    logger.info(
        "Starting HerJourney API v%s [%s]",
        settings.app_version,
        settings.environment,
    )
    if settings.care_config_path:
        reload_care_config(settings.care_config_path)
    else:
        get_care_config()
    init_state_service(settings)
    yield
    close_state_service()
    logger.info("HerJourney API shut down")


async def _state_store_error_handler(request: Request, exc: StateStoreError) -> JSONResponse:
    logger.error("State store failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=503,
        content=ErrorDetail(detail="State storage is unavailable").model_dump(),
    )


async def _invalid_update_handler(request: Request, exc: ValidationError) -> JSONResponse:
    logger.warning("Rejected invalid update on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=422,
        content=ErrorDetail(detail=f"Invalid update: {exc.error_count()} field error(s)").model_dump(),
    )


# ---------- App factory ----------

def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title="HerJourney API",
        description=(
            "Pregnancy and cycle tracking: gestational age, fertile window, "
            "daily health analyzer, symptom tracker and weekly tips. "
            "Not medical advice."
        ),
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ---------- Middleware ----------

    app.add_middleware(SecurityHeadersMiddleware)

    # Added last, so CORS is the outermost layer and answers preflight requests
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StateStoreError, _state_store_error_handler)
    app.add_exception_handler(ValidationError, _invalid_update_handler)

    # ---------- Health check (outside the v1 prefix) ----------
    app.include_router(health.router)

    # ---------- API v1 routes ----------
    v1_prefix = "/api/v1"

    app.include_router(onboarding.router, prefix=v1_prefix)
    app.include_router(pregnancy.router, prefix=v1_prefix)
    app.include_router(analyzer.router, prefix=v1_prefix)
    app.include_router(tracker.router, prefix=v1_prefix)
    app.include_router(tips.router, prefix=v1_prefix)
    app.include_router(notes.router, prefix=v1_prefix)
    app.include_router(profile.router, prefix=v1_prefix)
    app.include_router(premium.router, prefix=v1_prefix)

    return app


app = create_app()
