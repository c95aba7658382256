"""User model for User API."""

import uuid
from datetime import datetime
from typing import ClassVar

from pydantic import BaseModel, Field


def new_user_id() -> str:
    """Generate a new opaque user identifier."""
    return str(uuid.uuid4())


def is_valid_user_id(user_id: str) -> bool:
    """Check whether a value is a well-formed user identifier.

    Malformed identifiers are never looked up in the store; callers treat
    them exactly like identifiers of absent users.
    """
    try:
        uuid.UUID(user_id)
    except (TypeError, ValueError, AttributeError):
        return False
    return True


class Geo(BaseModel):
    """Geographic coordinates, stored as text."""

    lat: str = Field(..., description="Latitude as a numeric string")
    lng: str = Field(..., description="Longitude as a numeric string")


class Address(BaseModel):
    """Postal address embedded in a user record."""

    street: str
    city: str
    zip: str
    geo: Geo


class UserFields(BaseModel):
    """Normalised, client-writable fields of a user."""

    name: str = Field(..., description="Full name of the user")
    email: str = Field(..., description="Email address of the user")
    phone: str = Field(..., description="Phone number of the user")
    company: str = Field(default="", description="Company name, empty when unknown")
    address: Address


class User(UserFields):
    """User entity model."""

    id: str = Field(..., description="Unique identifier for the user")
    created_at: datetime
    updated_at: datetime

    class Config:
        """Pydantic config."""

        json_schema_extra: ClassVar[dict] = {
            "example": {
                "id": "6f1c2b4e-8d0a-4c61-9a55-3b8f0f7e2d11",
                "name": "Jane Doe",
                "email": "jane.doe@example.com",
                "phone": "555-0100",
                "company": "Acme",
                "address": {
                    "street": "1 Main St",
                    "city": "Springfield",
                    "zip": "12345",
                    "geo": {"lat": "40.7128", "lng": "-74.0060"},
                },
                "created_at": "2024-01-01T12:00:00Z",
                "updated_at": "2024-01-01T12:00:00Z",
            }
        }
