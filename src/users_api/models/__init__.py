"""API response models."""

from users_api.models.health import HealthCheck, HealthCheckResponse

__all__ = ["HealthCheck", "HealthCheckResponse"]
