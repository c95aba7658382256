"""Common services package."""

from users_common.services.user_service import UserService, build_user_fields
from users_common.services.user_store import CosmosUserStore, InMemoryUserStore, UserStore

__all__ = [
    "CosmosUserStore",
    "InMemoryUserStore",
    "UserService",
    "UserStore",
    "build_user_fields",
]
