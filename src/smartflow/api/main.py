"""
FastAPI backend for the form builder and form renderer.

Serve with:
    uvicorn --factory smartflow.api.main:create_app
"""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from smartflow import __version__
from smartflow.api.routers import conditions, forms, system
from smartflow.config import SmartFlowSettings, get_settings
from smartflow.startup import ensure_initialized

logger = logging.getLogger(__name__)


def create_app(settings: Optional[SmartFlowSettings] = None) -> FastAPI:
    """Build the API application."""
    ensure_initialized()
    settings = settings or get_settings()

    app = FastAPI(title="SmartFlow API", version=__version__)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(system.router)
    app.include_router(conditions.router)
    app.include_router(forms.router)

    logger.info(f"SmartFlow API {__version__} ready (CORS origins: {settings.cors_origins})")
    return app
