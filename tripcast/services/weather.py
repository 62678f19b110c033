"""OpenWeatherMap gateway: current conditions and multi-period forecasts, by city or coordinates."""

from __future__ import annotations

import logging
import time
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

import httpx

from tripcast.schemas.weather import (
    Conditions,
    Coordinates,
    CurrentWeather,
    Forecast,
    ForecastPeriod,
)

if TYPE_CHECKING:
    from tripcast.core.config import Settings

logger = logging.getLogger(__name__)

ICON_URL_TEMPLATE = "https://openweathermap.org/img/wn/{icon}@2x.png"


class WeatherNotConfiguredError(Exception):
    """Raised when a weather lookup is attempted without OPENWEATHER_API_KEY."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class WeatherFetchError(Exception):
    """Raised when the provider is unreachable or answers with an error or an unusable body."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class WeatherUnavailableError(WeatherFetchError):
    """Raised when the provider cannot be reached or does not answer in time."""


def _epoch_to_datetime(value: Any) -> datetime | None:
    if value is None:
        return None
    try:
        return datetime.fromtimestamp(int(value), tz=UTC)
    except (TypeError, ValueError, OverflowError, OSError):
        return None


def _parse_conditions(entries: Any) -> Conditions:
    """First entry of an OpenWeatherMap "weather" array, with the icon URL filled in."""
    first = entries[0] if isinstance(entries, list) and entries else {}
    icon = first.get("icon") or None
    return Conditions(
        main=first.get("main") or "",
        description=first.get("description") or "",
        icon=icon,
        icon_url=ICON_URL_TEMPLATE.format(icon=icon) if icon else None,
    )


def parse_current(body: dict[str, Any], units: str) -> CurrentWeather:
    """Build CurrentWeather from a /weather response body. Raises WeatherFetchError if malformed."""
    try:
        main = body["main"]
        coord = body["coord"]
        return CurrentWeather(
            location=body.get("name") or "",
            country=(body.get("sys") or {}).get("country"),
            coordinates=Coordinates(lat=coord["lat"], lon=coord["lon"]),
            units=units,
            temperature=main["temp"],
            feels_like=main.get("feels_like"),
            temp_min=main.get("temp_min"),
            temp_max=main.get("temp_max"),
            humidity=main.get("humidity"),
            pressure=main.get("pressure"),
            wind_speed=(body.get("wind") or {}).get("speed"),
            conditions=_parse_conditions(body.get("weather")),
            observed_at=_epoch_to_datetime(body.get("dt")),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise WeatherFetchError("Weather provider returned an unexpected payload.") from e


def parse_forecast(body: dict[str, Any], units: str) -> Forecast:
    """Build Forecast from a /forecast response body. Raises WeatherFetchError if malformed."""
    try:
        city = body.get("city") or {}
        coord = city["coord"]
        periods = [
            ForecastPeriod(
                time=_epoch_to_datetime(entry["dt"]),
                temperature=entry["main"]["temp"],
                feels_like=entry["main"].get("feels_like"),
                humidity=entry["main"].get("humidity"),
                wind_speed=(entry.get("wind") or {}).get("speed"),
                precipitation_probability=entry.get("pop"),
                conditions=_parse_conditions(entry.get("weather")),
            )
            for entry in body.get("list") or []
        ]
        return Forecast(
            location=city.get("name") or "",
            country=city.get("country"),
            coordinates=Coordinates(lat=coord["lat"], lon=coord["lon"]),
            units=units,
            periods=periods,
        )
    except (KeyError, TypeError, ValueError) as e:
        raise WeatherFetchError("Weather provider returned an unexpected payload.") from e


def _location_params(
    city: str | None, lat: float | None, lon: float | None
) -> dict[str, str | float]:
    """Query params for either a city name or a lat/lon pair (coordinates win when both given)."""
    if lat is not None and lon is not None:
        if not -90 <= lat <= 90 or not -180 <= lon <= 180:
            raise ValueError("lat must be within [-90, 90] and lon within [-180, 180].")
        return {"lat": lat, "lon": lon}
    if (lat is None) != (lon is None):
        raise ValueError("lat and lon must be given together.")
    if city and city.strip():
        return {"q": city.strip()}
    raise ValueError("A city name or a lat/lon pair is required.")


class WeatherGateway:
    """
    Read-only, per-request pass-through to OpenWeatherMap. No caching, no retries.

    transport is for tests (httpx.MockTransport); production uses the default network transport.
    """

    def __init__(
        self,
        api_key: str | None,
        base_url: str,
        units: str = "imperial",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.units = units
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> WeatherGateway:
        api_key = (
            settings.OPENWEATHER_API_KEY.get_secret_value()
            if settings.OPENWEATHER_API_KEY is not None
            else None
        )
        return cls(
            api_key=api_key,
            base_url=settings.OPENWEATHER_BASE_URL,
            units=settings.OPENWEATHER_UNITS,
            timeout=settings.WEATHER_REQUEST_TIMEOUT_SEC,
            transport=transport,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key and self.api_key.strip())

    async def current(
        self,
        city: str | None = None,
        lat: float | None = None,
        lon: float | None = None,
    ) -> CurrentWeather:
        """Current conditions for a city name or a lat/lon pair."""
        body = await self._get("weather", _location_params(city, lat, lon))
        return parse_current(body, self.units)

    async def forecast(
        self,
        city: str | None = None,
        lat: float | None = None,
        lon: float | None = None,
    ) -> Forecast:
        """Multi-period forecast for a city name or a lat/lon pair."""
        body = await self._get("forecast", _location_params(city, lat, lon))
        return parse_forecast(body, self.units)

    async def _get(self, endpoint: str, params: dict[str, str | float]) -> dict[str, Any]:
        if not self.is_configured:
            raise WeatherNotConfiguredError(
                "Weather lookups are not configured; set OPENWEATHER_API_KEY."
            )
        url = f"{self.base_url}/{endpoint}"
        query = {**params, "appid": self.api_key, "units": self.units}
        start = time.perf_counter()
        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout), transport=self._transport
            ) as client:
                response = await client.get(url, params=query)
        except httpx.TimeoutException as e:
            logger.warning(
                "Weather request timed out",
                extra={"endpoint": endpoint, "latency_seconds": time.perf_counter() - start},
            )
            raise WeatherUnavailableError("Weather provider timed out.") from e
        except httpx.HTTPError as e:
            logger.warning(
                "Weather request failed",
                extra={"endpoint": endpoint, "latency_seconds": time.perf_counter() - start},
            )
            raise WeatherUnavailableError("Weather provider is unreachable.") from e

        elapsed = time.perf_counter() - start
        logger.info(
            "Weather request completed",
            extra={
                "endpoint": endpoint,
                "status_code": response.status_code,
                "latency_seconds": elapsed,
            },
        )

        if response.status_code == 404:
            raise WeatherFetchError("Location not found.", 404)
        if response.status_code == 401:
            raise WeatherFetchError("Weather provider rejected the API key.", 401)
        if response.status_code >= 400:
            try:
                detail = response.json().get("message") or response.text[:200]
            except (ValueError, AttributeError):
                detail = response.text[:200] if response.text else "Unknown error"
            raise WeatherFetchError(
                f"Weather provider returned {response.status_code}: {detail}",
                response.status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise WeatherFetchError("Weather provider response is not valid JSON.") from e
        if not isinstance(body, dict):
            raise WeatherFetchError("Weather provider returned an unexpected payload.")
        return body
