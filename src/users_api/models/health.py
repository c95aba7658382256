"""Health check response models."""

from typing import ClassVar

from pydantic import BaseModel


class HealthCheck(BaseModel):
    """Health check payload."""

    status: str
    version: str
    environment: str | None = None
    storage_backend: str
    message: str = "API is healthy"

    class Config:
        """Pydantic config."""

        json_schema_extra: ClassVar[dict] = {
            "example": {
                "status": "ok",
                "version": "0.1.0",
                "environment": "development",
                "storage_backend": "cosmos",
                "message": "API is healthy",
            }
        }


class HealthCheckResponse(BaseModel):
    """Health check response envelope."""

    data: HealthCheck
