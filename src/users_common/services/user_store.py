"""User storage with Cosmos DB and in-memory implementations."""

import logging
from abc import ABC, abstractmethod
from datetime import UTC, datetime

from azure.cosmos import ContainerProxy

from users_common.infra.cosmos.cosmos_base import BaseCosmosClient
from users_common.models.user import User, UserFields, new_user_id

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class UserStore(ABC):
    """Abstract interface for user storage.

    Stores own identity and timestamps: ``add_user`` assigns ``id``,
    ``created_at`` and ``updated_at``; ``replace_user`` refreshes
    ``updated_at`` only.
    """

    @abstractmethod
    def add_user(self, fields: UserFields) -> User:
        """Persist a new user."""
        pass

    @abstractmethod
    def get_user(self, user_id: str) -> User | None:
        """Get a user by ID."""
        pass

    @abstractmethod
    def list_users(self) -> list[User]:
        """List all users, newest first."""
        pass

    @abstractmethod
    def replace_user(self, existing: User, fields: UserFields) -> User:
        """Overwrite every writable field of an existing user."""
        pass

    @abstractmethod
    def delete_user(self, user_id: str) -> bool:
        """Delete a user. Returns False if it did not exist."""
        pass

    @staticmethod
    def _new_user(fields: UserFields) -> User:
        now = _utcnow()
        return User(id=new_user_id(), created_at=now, updated_at=now, **fields.model_dump())

    @staticmethod
    def _replaced_user(existing: User, fields: UserFields) -> User:
        return User(
            id=existing.id,
            created_at=existing.created_at,
            updated_at=_utcnow(),
            **fields.model_dump(),
        )


class CosmosUserStore(UserStore):
    """Cosmos DB implementation of UserStore.

    Users live in a container partitioned on ``/id``.
    """

    def __init__(self, container: ContainerProxy) -> None:
        self.client = BaseCosmosClient[User](container)

    def add_user(self, fields: UserFields) -> User:
        created = self.client.create_item(self._new_user(fields))
        return User.model_validate(created)

    def get_user(self, user_id: str) -> User | None:
        item = self.client.read_item(user_id, partition_key=user_id)
        return User.model_validate(item) if item is not None else None

    def list_users(self) -> list[User]:
        items = self.client.query_items("SELECT * FROM c ORDER BY c.created_at DESC")
        return [User.model_validate(item) for item in items]

    def replace_user(self, existing: User, fields: UserFields) -> User:
        replaced = self.client.replace_item(existing.id, self._replaced_user(existing, fields))
        return User.model_validate(replaced)

    def delete_user(self, user_id: str) -> bool:
        return self.client.delete_item(user_id, partition_key=user_id)


class InMemoryUserStore(UserStore):
    """Service for managing users in memory."""

    def __init__(self) -> None:
        self.users: dict[str, User] = {}

    def add_user(self, fields: UserFields) -> User:
        user = self._new_user(fields)
        self.users[user.id] = user
        logger.info("Created user %s in memory", user.id)
        return user.model_copy(deep=True)

    def get_user(self, user_id: str) -> User | None:
        user = self.users.get(user_id)
        return user.model_copy(deep=True) if user is not None else None

    def list_users(self) -> list[User]:
        # Insertion order breaks ties between equal timestamps.
        ordered = sorted(enumerate(self.users.values()), key=lambda pair: (pair[1].created_at, pair[0]), reverse=True)
        return [user.model_copy(deep=True) for _, user in ordered]

    def replace_user(self, existing: User, fields: UserFields) -> User:
        if existing.id not in self.users:
            raise KeyError(existing.id)
        user = self._replaced_user(existing, fields)
        self.users[user.id] = user
        logger.info("Replaced user %s in memory", user.id)
        return user.model_copy(deep=True)

    def delete_user(self, user_id: str) -> bool:
        if user_id in self.users:
            del self.users[user_id]
            logger.info("Deleted user %s from memory", user_id)
            return True
        return False
