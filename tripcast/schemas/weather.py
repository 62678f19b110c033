"""Structured weather payloads built from OpenWeatherMap responses."""

from datetime import datetime

from pydantic import BaseModel, Field


class Coordinates(BaseModel):
    lat: float
    lon: float


class Conditions(BaseModel):
    """Short condition summary (e.g. main="Rain", description="light rain")."""

    main: str = ""
    description: str = ""
    icon: str | None = None
    icon_url: str | None = None


class CurrentWeather(BaseModel):
    """Current conditions for one place."""

    location: str = Field(description="Place name as resolved by the provider")
    country: str | None = None
    coordinates: Coordinates
    units: str
    temperature: float
    feels_like: float | None = None
    temp_min: float | None = None
    temp_max: float | None = None
    humidity: int | None = None
    pressure: int | None = None
    wind_speed: float | None = None
    conditions: Conditions
    observed_at: datetime | None = None


class ForecastPeriod(BaseModel):
    """One forecast step (3 hours with the free OpenWeatherMap plan)."""

    time: datetime
    temperature: float
    feels_like: float | None = None
    humidity: int | None = None
    wind_speed: float | None = None
    precipitation_probability: float | None = Field(
        default=None, ge=0, le=1, description="Probability of precipitation, 0-1"
    )
    conditions: Conditions


class Forecast(BaseModel):
    """Multi-period forecast for one place."""

    location: str
    country: str | None = None
    coordinates: Coordinates
    units: str
    periods: list[ForecastPeriod]
