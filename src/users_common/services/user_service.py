"""Request handling for user records.

``UserService`` sits between the HTTP routes and a ``UserStore``: it runs
validation, normalises accepted payloads and turns missing records into
``UserNotFoundError``.
"""

import logging
from collections.abc import Mapping
from typing import Any

from users_common.errors import UserNotFoundError, UserValidationError
from users_common.models.user import Address, Geo, User, UserFields, is_valid_user_id
from users_common.services.user_store import UserStore
from users_common.validation.user_validator import validate_user_payload

logger = logging.getLogger(__name__)


def build_user_fields(payload: Mapping[str, Any]) -> UserFields:
    """Normalise a validated payload into storable fields.

    Text is trimmed, geo values are coerced to text and trimmed, and a missing
    company becomes an empty string.
    """
    address = payload["address"]
    geo = address["geo"]
    return UserFields(
        name=payload["name"].strip(),
        email=payload["email"].strip(),
        phone=payload["phone"].strip(),
        company=(payload.get("company") or "").strip(),
        address=Address(
            street=address["street"].strip(),
            city=address["city"].strip(),
            zip=address["zip"].strip(),
            geo=Geo(lat=str(geo["lat"]).strip(), lng=str(geo["lng"]).strip()),
        ),
    )


def _overlay(base: dict[str, Any], patch: Mapping[str, Any]) -> dict[str, Any]:
    """Apply supplied (non-None) values from ``patch`` onto ``base``."""
    merged = dict(base)
    for key, value in patch.items():
        if value is None or key not in base:
            continue
        if isinstance(base[key], dict) and isinstance(value, Mapping):
            merged[key] = _overlay(base[key], value)
        else:
            merged[key] = value
    return merged


class UserService:
    """Validate-then-store orchestration for the five CRUD operations plus patch."""

    def __init__(self, store: UserStore) -> None:
        self.store = store

    def _require_user(self, user_id: str) -> User:
        # Malformed identifiers are reported the same way as absent users.
        if not is_valid_user_id(user_id):
            logger.debug("Rejected malformed user id %r", user_id)
            raise UserNotFoundError()
        user = self.store.get_user(user_id)
        if user is None:
            raise UserNotFoundError()
        return user

    @staticmethod
    def _validate(payload: Any, partial: bool = False) -> None:
        errors = validate_user_payload(payload, partial=partial)
        if errors:
            logger.info("User payload rejected with %d error(s)", len(errors))
            raise UserValidationError(details=errors)

    def list_users(self) -> list[User]:
        return self.store.list_users()

    def get_user(self, user_id: str) -> User:
        return self._require_user(user_id)

    def create_user(self, payload: Mapping[str, Any]) -> User:
        self._validate(payload)
        user = self.store.add_user(build_user_fields(payload))
        logger.info("Created user %s", user.id)
        return user

    def update_user(self, user_id: str, payload: Mapping[str, Any]) -> User:
        """Replace every writable field of an existing user."""
        existing = self._require_user(user_id)
        self._validate(payload)
        user = self.store.replace_user(existing, build_user_fields(payload))
        logger.info("Updated user %s", user.id)
        return user

    def patch_user(self, user_id: str, payload: Mapping[str, Any]) -> User:
        """Update only the supplied fields of an existing user.

        Address and geo sub-fields merge individually with the stored values.
        """
        existing = self._require_user(user_id)
        self._validate(payload, partial=True)
        stored = existing.model_dump(include={"name", "email", "phone", "company", "address"})
        user = self.store.replace_user(existing, build_user_fields(_overlay(stored, payload)))
        logger.info("Patched user %s", user.id)
        return user

    def delete_user(self, user_id: str) -> None:
        existing = self._require_user(user_id)
        if not self.store.delete_user(existing.id):
            raise UserNotFoundError()
        logger.info("Deleted user %s", existing.id)
