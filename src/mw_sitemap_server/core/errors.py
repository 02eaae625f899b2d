"""
Global Error Handling

This module defines application-wide exception handlers for the sitemap
server.

Design Goals
------------
- Never leak internal exception details to crawlers
- Always return deterministic, machine-readable error responses
- Never serve a truncated sitemap: failures become a plain error status
- Log full stack traces internally for debugging
"""

from __future__ import annotations

import logging
from typing import Dict, Any

from fastapi import Request
from fastapi.responses import JSONResponse

from .exceptions import StoreUnavailableError, SitemapNotFoundError

logger = logging.getLogger("sitemap.errors")


# ---------------------------------------------------------------------
# Public Exception Handlers
# ---------------------------------------------------------------------

async def store_unavailable_handler(
    request: Request,
    exc: StoreUnavailableError,
) -> JSONResponse:
    """
    Map page store failures to 503 Service Unavailable.

    Crawlers treat 503 as transient and retry later, which is the desired
    behavior when the database replica is down or timing out.
    """
    logger.error(
        "Page store unavailable during request: %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
    )

    payload: Dict[str, Any] = {
        "error": "store_unavailable",
        "detail": "Sitemap data is temporarily unavailable",
    }

    return JSONResponse(
        status_code=503,
        content=payload,
    )


async def sitemap_not_found_handler(
    request: Request,
    exc: SitemapNotFoundError,
) -> JSONResponse:
    """
    Map unknown sitemap file names to 404 Not Found.
    """
    logger.info("Unknown sitemap requested: %s", request.url.path)

    payload: Dict[str, Any] = {
        "error": "not_found",
        "detail": str(exc),
    }

    return JSONResponse(
        status_code=404,
        content=payload,
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """
    Catch-all handler for uncaught exceptions.

    This handler should be registered with FastAPI as the final safety net
    for any exception not otherwise handled by route-level or framework-level
    handlers.

    Behavior
    --------
    - Logs the full exception stack trace for internal diagnostics.
    - Returns a generic 500 error to the client with no internal details.
    - Ensures consistent error response format across the entire API.

    Parameters
    ----------
    request : Request
        The incoming HTTP request that triggered the exception.

    exc : Exception
        The uncaught exception instance.

    Returns
    -------
    JSONResponse
        A JSON 500 response with a minimal error payload.
    """

    # Log full traceback internally (never returned to client)
    logger.exception(
        "Unhandled exception during request: %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
    )

    payload: Dict[str, Any] = {
        "error": "internal_server_error",
        "detail": "Internal server error",
    }

    return JSONResponse(
        status_code=500,
        content=payload,
    )
