"""Middleware setup for the FastAPI application."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

logger = logging.getLogger(__name__)


def get_allowed_origins(ui_url: str | None) -> list[str]:
    """Get the list of allowed CORS origins.

    Only the configured UI origin is allowed.

    Args:
        ui_url: URL of the UI application

    Returns:
        List with the normalised UI origin, empty if none is configured
    """
    if not ui_url:
        return []
    return [ui_url.rstrip("/")]


def get_cors_headers(origin: str | None, ui_url: str | None) -> dict[str, str]:
    """Get CORS headers for a given origin.

    Responses built outside the CORS middleware (the 500 handler) use this
    to stay readable by the UI.

    Args:
        origin: The origin from the request header
        ui_url: URL of the UI application

    Returns:
        Dictionary of CORS headers, empty if origin is not allowed
    """
    if not origin or origin not in get_allowed_origins(ui_url):
        return {}
    return {
        "Access-Control-Allow-Origin": origin,
        "Access-Control-Allow-Methods": "*",
        "Access-Control-Allow-Headers": "*",
        "Vary": "Origin",
    }


def setup_middleware(app: FastAPI, ui_url: str | None) -> None:
    """Setup middleware for the FastAPI application.

    Args:
        app: FastAPI application instance
        ui_url: URL of the UI application for CORS
    """
    allowed_origins = get_allowed_origins(ui_url)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    logger.info("CORS enabled for origins: %s", allowed_origins)
