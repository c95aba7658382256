"""Response envelope models.

Every response body is either ``{"data": ...}`` or
``{"error": {"message": ..., "details": ...}}``.
"""

from pydantic import BaseModel

from users_common.models.user import User


class FieldError(BaseModel):
    """A single field-scoped validation problem."""

    field: str
    message: str


class ErrorBody(BaseModel):
    """Inner error object."""

    message: str
    details: list[FieldError] | None = None


class ErrorResponse(BaseModel):
    """Top-level error envelope."""

    error: ErrorBody


class UserResponse(BaseModel):
    data: User


class UserListResponse(BaseModel):
    data: list[User]
