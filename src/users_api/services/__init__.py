"""Service initialization and dependency injection.

The user service is built once during application startup and kept on
``app.state``; route handlers receive it through ``get_user_service``.
"""

import logging

from fastapi import Request

from users_api.config import Settings
from users_api.services.cosmos_db_init import initialize_cosmos_db
from users_common.services.user_service import UserService
from users_common.services.user_store import CosmosUserStore, InMemoryUserStore, UserStore

logger = logging.getLogger(__name__)


async def create_user_store(settings: Settings) -> UserStore:
    """Create the user store selected by ``settings.storage_backend``.

    Args:
        settings: Application settings

    Returns:
        UserStore instance
    """
    if settings.storage_backend == "memory":
        logger.warning("Using in-memory user store; data is lost on restart")
        return InMemoryUserStore()

    container = await initialize_cosmos_db(settings)
    logger.info("Initialized CosmosUserStore")
    return CosmosUserStore(container)


def get_user_service(request: Request) -> UserService:
    """Get the user service bound to this application.

    Args:
        request: Incoming request

    Returns:
        UserService instance
    """
    return request.app.state.user_service
