"""Common models package."""

from users_common.models.envelope import ErrorBody, ErrorResponse, FieldError, UserListResponse, UserResponse
from users_common.models.user import Address, Geo, User, UserFields, is_valid_user_id, new_user_id

__all__ = [
    "Address",
    "ErrorBody",
    "ErrorResponse",
    "FieldError",
    "Geo",
    "User",
    "UserFields",
    "UserListResponse",
    "UserResponse",
    "is_valid_user_id",
    "new_user_id",
]
