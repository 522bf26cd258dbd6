"""
OpenData Gateway - Main Application Entry Point

This module provides the FastAPI application exposing the UK Parliament API
tools, their context documents, health checks and Prometheus metrics.

The lifespan builds the toolset (one resilient fetcher per upstream, one
shared response cache) and closes the fetchers' HTTP clients on shutdown.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from opendata_gateway import __version__
from opendata_gateway.api.middleware.logging import RequestLoggingMiddleware
from opendata_gateway.api.routes.context import router as context_router
from opendata_gateway.api.routes.health import router as health_router
from opendata_gateway.api.routes.tools import router as tools_router
from opendata_gateway.context.registry import ContextResourceRegistry
from opendata_gateway.core.config import Settings, get_settings
from opendata_gateway.observability.logging import configure_logging
from opendata_gateway.observability.metrics import MetricsMiddleware, get_metrics_app
from opendata_gateway.tools.builtin import Toolset, build_toolset
from opendata_gateway.tools.executor import ToolExecutor

logger = logging.getLogger(__name__)

APP_NAME = "OpenData Gateway"
APP_DESCRIPTION = "Resilient tool gateway for the UK Parliament APIs"


def _attach_toolset(app: FastAPI, toolset: Toolset) -> None:
    app.state.toolset = toolset
    app.state.tool_executor = ToolExecutor(registry=toolset.registry)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager for startup/shutdown events.

    Builds the toolset unless one was supplied to create_app().
    """
    settings: Settings = app.state.settings
    configure_logging(level=settings.log_level)
    logger.info(f"{APP_NAME} v{__version__} starting in {settings.environment} mode")

    owns_toolset = getattr(app.state, "toolset", None) is None
    if owns_toolset:
        _attach_toolset(app, build_toolset(settings))

    app.state.initialized = True

    yield

    logger.info(f"{APP_NAME} shutting down")
    app.state.initialized = False
    if owns_toolset:
        await app.state.toolset.aclose()


def create_app(
    settings: Optional[Settings] = None,
    toolset: Optional[Toolset] = None,
    context_registry: Optional[ContextResourceRegistry] = None,
) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        settings: Application settings (default: get_settings())
        toolset: Pre-built toolset; the caller keeps ownership
        context_registry: Pre-loaded context resources

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=APP_NAME,
        description=APP_DESCRIPTION,
        version=__version__,
        docs_url="/docs" if settings.environment != "production" else None,
        redoc_url="/redoc" if settings.environment != "production" else None,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.toolset = None
    if toolset is not None:
        _attach_toolset(app, toolset)
    app.state.context_registry = context_registry or ContextResourceRegistry.load(
        settings.context_directory
    )

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router)
    app.include_router(tools_router)
    app.include_router(context_router)
    app.mount("/metrics", get_metrics_app())

    @app.get("/", tags=["Info"])
    async def root() -> dict[str, Any]:
        """Root endpoint returning basic service information."""
        return {
            "service": APP_NAME,
            "version": __version__,
            "docs": "/docs" if settings.environment != "production" else "disabled",
        }

    return app


app = create_app()
