from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from metafield_proxy import __version__
from metafield_proxy.core.config import Settings, get_settings
from metafield_proxy.core.logging import get_logger

health_router = APIRouter()
logger = get_logger(__name__)


class HealthStatus(BaseModel):
    """Basic health status response model."""
    status: str
    version: str = __version__
    service: str = "Metafield Translation Proxy"
    machine_translation: bool = False


@health_router.get(
    "",
    response_model=HealthStatus,
    status_code=status.HTTP_200_OK,
    summary="Basic health check",
    description="Returns basic health status of the service."
)
async def get_health(settings: Settings = Depends(get_settings)) -> HealthStatus:
    """
    Basic health check endpoint.

    Returns:
        HealthStatus: Basic service health status
    """
    logger.debug("Health check requested")
    return HealthStatus(
        status="ok",
        service=settings.PROJECT_NAME,
        machine_translation=settings.machine_translation_active,
    )
