"""Health check routes."""

from fastapi import APIRouter, Request

from users_api.config import Settings
from users_api.models.health import HealthCheck, HealthCheckResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthCheckResponse)
async def health_check(request: Request) -> HealthCheckResponse:
    """Health check endpoint.

    Returns:
        HealthCheckResponse with status and version information
    """
    settings: Settings = request.app.state.settings

    return HealthCheckResponse(
        data=HealthCheck(
            status="ok",
            version=settings.app_version,
            environment=settings.environment,
            storage_backend=settings.storage_backend,
        )
    )
