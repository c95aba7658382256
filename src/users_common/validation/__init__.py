"""User payload validation."""

from users_common.validation.user_validator import validate_address, validate_geo, validate_user_payload

__all__ = ["validate_address", "validate_geo", "validate_user_payload"]
