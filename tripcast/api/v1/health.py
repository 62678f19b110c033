"""Health check endpoint with database connectivity and weather configuration status."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tripcast.api.v1.auth import get_app_settings
from tripcast.api.v1.weather import get_weather_gateway
from tripcast.core.config import Settings
from tripcast.core.database import check_db_connected, get_db
from tripcast.schemas.health import HealthResponse
from tripcast.services.weather import WeatherGateway

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    gateway: Annotated[WeatherGateway, Depends(get_weather_gateway)],
) -> HealthResponse:
    """
    Return service health status and database connectivity.
    Used by load balancers and monitoring.
    """
    db_status = "connected" if check_db_connected(db) else "disconnected"

    return HealthResponse(
        status="ok",
        environment=settings.APP_ENV,
        database=db_status,
        weather="configured" if gateway.is_configured else "not_configured",
    )
