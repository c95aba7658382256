"""Field-level validation of user payloads.

The validator never raises. It returns every problem it finds as a
``FieldError`` whose ``field`` is a dotted path into the payload
(``address.geo.lat``) so clients can show errors next to inputs.

Nested objects are checked by sub-validators that report paths relative to
their own object; ``_nested`` re-scopes them under the parent key.
"""

import math
import re
from collections.abc import Callable, Mapping
from typing import Any

from users_common.models.envelope import FieldError

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

USER_TEXT_FIELDS = (("name", "Name"), ("email", "Email"), ("phone", "Phone"))
ADDRESS_TEXT_FIELDS = (("street", "Street"), ("city", "City"), ("zip", "ZIP"))
GEO_NUMBER_FIELDS = (("lat", "Latitude"), ("lng", "Longitude"))

SubValidator = Callable[..., list[FieldError]]


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def is_numeric(value: Any) -> bool:
    """Return True if ``value`` reads as a finite decimal number."""
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return math.isfinite(value)
    if isinstance(value, str):
        return NUMBER_PATTERN.fullmatch(value.strip()) is not None
    return False


def _check_text(payload: Mapping[str, Any], key: str, label: str, *, partial: bool) -> list[FieldError]:
    value = payload.get(key)
    if value is None:
        return [] if partial else [FieldError(field=key, message=f"{label} is required")]
    if not isinstance(value, str):
        return [FieldError(field=key, message=f"{label} must be a string")]
    if not value.strip():
        return [FieldError(field=key, message=f"{label} is required")]
    return []


def _check_number(payload: Mapping[str, Any], key: str, label: str, *, partial: bool) -> list[FieldError]:
    value = payload.get(key)
    if value is None and partial:
        return []
    if _is_blank(value):
        return [FieldError(field=key, message=f"{label} is required")]
    if not is_numeric(value):
        return [FieldError(field=key, message=f"{label} must be a number")]
    return []


def _nested(
    payload: Mapping[str, Any], key: str, label: str, validate: SubValidator, *, partial: bool
) -> list[FieldError]:
    value = payload.get(key)
    if value is None and partial:
        return []
    if not isinstance(value, Mapping):
        return [FieldError(field=key, message=f"{label} is required and must be an object")]
    return [
        FieldError(field=f"{key}.{error.field}", message=error.message) for error in validate(value, partial=partial)
    ]


def validate_geo(geo: Mapping[str, Any], partial: bool = False) -> list[FieldError]:
    """Validate the ``lat``/``lng`` pair of a geo object."""
    errors: list[FieldError] = []
    for key, label in GEO_NUMBER_FIELDS:
        errors.extend(_check_number(geo, key, label, partial=partial))
    return errors


def validate_address(address: Mapping[str, Any], partial: bool = False) -> list[FieldError]:
    """Validate an address object, including its nested geo object."""
    errors: list[FieldError] = []
    for key, label in ADDRESS_TEXT_FIELDS:
        errors.extend(_check_text(address, key, label, partial=partial))
    errors.extend(_nested(address, "geo", "Geo", validate_geo, partial=partial))
    return errors


def validate_user_payload(payload: Any, partial: bool = False) -> list[FieldError]:
    """Validate a candidate user payload.

    Args:
        payload: Decoded JSON request body. Anything that is not a mapping is
            treated as an empty object.
        partial: Skip fields that are absent (missing or ``None``). Fields
            that are supplied are checked exactly as in full mode.

    Returns:
        List of field errors, empty when the payload is valid.
    """
    if not isinstance(payload, Mapping):
        payload = {}

    errors: list[FieldError] = []
    for key, label in USER_TEXT_FIELDS:
        field_errors = _check_text(payload, key, label, partial=partial)
        errors.extend(field_errors)
        if key == "email" and not field_errors and isinstance(payload.get(key), str):
            if not EMAIL_PATTERN.fullmatch(payload[key]):
                errors.append(FieldError(field="email", message="Email must be a valid email address"))

    company = payload.get("company")
    if company is not None and not isinstance(company, str):
        errors.append(FieldError(field="company", message="Company must be a string"))

    errors.extend(_nested(payload, "address", "Address", validate_address, partial=partial))
    return errors
