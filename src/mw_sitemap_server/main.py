"""
Sitemap Server Application Entry Point

This module defines the FastAPI application instance, registers all routers,
configures global exception handling, and provides a test-friendly application
factory.

Design Goals
------------
- Deterministic startup
- Centralized router registration
- Global exception safety net
- Test-friendly via create_app()
"""

from __future__ import annotations

import logging
from typing import List

from fastapi import FastAPI

from .config import settings
from .core.errors import (
    store_unavailable_handler,
    sitemap_not_found_handler,
    unhandled_exception_handler,
)
from .core.exceptions import StoreUnavailableError, SitemapNotFoundError
from .db import async_engine
from .api.dependencies import get_title_resolver
from .sitemap.resolver import MediaWikiTitleResolver

from .api import (
    health_routes,
    sitemap_routes,
)


logger = logging.getLogger("sitemap.app")


def check_namespace_prefixes(
    namespaces: List[int],
    resolver: MediaWikiTitleResolver,
) -> List[int]:
    """
    Warn about configured namespaces the resolver has no prefix for.

    Every page of such a namespace would be dropped, leaving its sitemap
    files listed in the index but empty.
    """
    unknown = [ns for ns in namespaces if not resolver.knows_namespace(ns)]
    for ns in unknown:
        logger.warning(
            "Namespace %d has no name; set MW_NAMESPACE_NAMES or its sitemap files will be empty",
            ns,
        )
    return unknown


# ---------------------------------------------------------------------
# Application Factory (Test-Friendly)
# ---------------------------------------------------------------------

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    This factory pattern allows:
    - Clean test instantiation
    - Isolated app instances for integration tests
    - Controlled dependency overrides in pytest

    Returns
    -------
    FastAPI
        Fully configured FastAPI application.
    """
    app = FastAPI(
        title="mw-sitemap-server",
        version="1.0.0",
        docs_url="/docs",
        redoc_url=None,
        openapi_url="/openapi.json",
    )

    # --------------------------------------------------------------
    # Global Exception Handling
    # --------------------------------------------------------------

    app.add_exception_handler(StoreUnavailableError, store_unavailable_handler)
    app.add_exception_handler(SitemapNotFoundError, sitemap_not_found_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # --------------------------------------------------------------
    # Router Registration
    # --------------------------------------------------------------

    # Sitemap routes end in a catch-all file name and must come last.
    # Index locations live under the script path; the root copy keeps
    # /sitemap.xml reachable for robots.txt.
    app.include_router(health_routes.router)
    script_path = settings.mw_script_path.rstrip("/")
    if script_path:
        app.include_router(sitemap_routes.router, prefix=script_path)
    app.include_router(sitemap_routes.router)

    # --------------------------------------------------------------
    # Startup Validation Hook
    # --------------------------------------------------------------

    @app.on_event("startup")
    async def _startup_validation() -> None:
        """
        Fail-fast validation at application startup.

        Parses the namespace list now so a bad SITEMAP_NAMESPACES value
        stops the server before the first crawler request.
        """
        logger.info("Starting mw-sitemap-server")

        namespaces = settings.sitemap_namespace_ids
        if not namespaces:
            logger.warning("No namespaces configured; the sitemap index will be empty")

        check_namespace_prefixes(namespaces, get_title_resolver())

        logger.info(
            "Serving sitemaps for %s on namespaces %s",
            settings.mw_server,
            namespaces,
        )

    @app.on_event("shutdown")
    async def _shutdown_cleanup() -> None:
        """
        Graceful shutdown hook: release pooled database connections.
        """
        await async_engine.dispose()
        logger.info("Shutting down mw-sitemap-server")

    return app


# ---------------------------------------------------------------------
# Default Application Instance (for Uvicorn/Gunicorn)
# ---------------------------------------------------------------------

app = create_app()
