"""Main FastAPI application."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from users_api.config import Settings, get_settings
from users_api.error_handlers import register_error_handlers
from users_api.middleware import setup_middleware
from users_api.routes import api_router
from users_api.services import create_user_store
from users_common.services.user_service import UserService
from users_common.services.user_store import UserStore

logger = logging.getLogger(__name__)


def configure_logging(log_level: str) -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(settings: Settings | None = None, user_store: UserStore | None = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        settings: Application settings, loaded from the environment when omitted
        user_store: Store to use instead of the one selected by settings

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Handle application lifespan events."""
        logger.info("%s v%s starting", settings.app_name, settings.app_version)
        logger.info("Environment: %s", settings.environment)

        # Storage must be ready before the first request; failure aborts startup
        store = user_store if user_store is not None else await create_user_store(settings)
        app.state.user_service = UserService(store)
        logger.info("%s started", settings.app_name)

        yield

        logger.info("%s shutting down", settings.app_name)

    app = FastAPI(
        title=settings.app_name,
        description="User management - FastAPI backend service",
        version=settings.app_version,
        lifespan=lifespan,
        redirect_slashes=False,
    )
    app.state.settings = settings

    setup_middleware(app, ui_url=settings.ui_url)
    register_error_handlers(app, ui_url=settings.ui_url)
    app.include_router(api_router)

    return app


def run() -> None:
    """Run the API with uvicorn."""
    import uvicorn

    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(
        create_app(settings),
        host=settings.api_host,
        port=settings.api_port,
        lifespan="on",
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
