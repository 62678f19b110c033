"""Weather endpoints: current conditions and forecast via OpenWeatherMap."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from tripcast.api.v1.auth import get_app_settings
from tripcast.core.config import Settings
from tripcast.schemas.weather import CurrentWeather, Forecast
from tripcast.services.weather import (
    WeatherFetchError,
    WeatherGateway,
    WeatherNotConfiguredError,
    WeatherUnavailableError,
)

logger = logging.getLogger(__name__)
router = APIRouter()


def get_weather_gateway(request: Request) -> WeatherGateway:
    return request.app.state.weather_gateway


def _to_http_error(e: WeatherNotConfiguredError | WeatherFetchError) -> HTTPException:
    """Map gateway errors: missing key or unreachable -> 503, unknown place -> 404, else 502."""
    if isinstance(e, WeatherNotConfiguredError):
        return HTTPException(status_code=503, detail=e.message)
    if e.status_code == 404:
        return HTTPException(status_code=404, detail=e.message)
    if isinstance(e, WeatherUnavailableError):
        return HTTPException(status_code=503, detail=e.message)
    return HTTPException(status_code=502, detail=e.message)


def _place(city: str | None, lat: float | None, lon: float | None, default_city: str) -> str | None:
    """City to query: the given one, else the default when no coordinates were supplied."""
    if city and city.strip():
        return city
    if lat is None and lon is None:
        return default_city
    return None


@router.get("", response_model=CurrentWeather)
async def current_weather(
    gateway: Annotated[WeatherGateway, Depends(get_weather_gateway)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    city: Annotated[str | None, Query(max_length=200)] = None,
    lat: Annotated[float | None, Query(ge=-90, le=90)] = None,
    lon: Annotated[float | None, Query(ge=-180, le=180)] = None,
) -> CurrentWeather:
    """Current weather for ?city= or ?lat=&lon= (defaults to DEFAULT_CITY)."""
    try:
        return await gateway.current(
            city=_place(city, lat, lon, settings.DEFAULT_CITY), lat=lat, lon=lon
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    except (WeatherNotConfiguredError, WeatherFetchError) as e:
        logger.error("Weather lookup failed", extra={"reason": e.message[:200]})
        raise _to_http_error(e) from e


@router.get("/forecast", response_model=Forecast)
async def forecast(
    gateway: Annotated[WeatherGateway, Depends(get_weather_gateway)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    city: Annotated[str | None, Query(max_length=200)] = None,
    lat: Annotated[float | None, Query(ge=-90, le=90)] = None,
    lon: Annotated[float | None, Query(ge=-180, le=180)] = None,
) -> Forecast:
    """Forecast (3-hour periods) for ?lat=&lon= or ?city= (defaults to DEFAULT_CITY)."""
    try:
        return await gateway.forecast(
            city=_place(city, lat, lon, settings.DEFAULT_CITY), lat=lat, lon=lon
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    except (WeatherNotConfiguredError, WeatherFetchError) as e:
        logger.error("Forecast lookup failed", extra={"reason": e.message[:200]})
        raise _to_http_error(e) from e
