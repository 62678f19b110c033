"""Application configuration loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Allowed URL schemes for DATABASE_URL (module-level so validators can use it).
VALID_DATABASE_URL_PREFIXES = (
    "sqlite://",
    "sqlite+pysqlite://",
    "postgresql://",
    "postgresql+psycopg2://",
    "postgres://",
    "postgres+psycopg2://",
)


class Settings(BaseSettings):
    """Validated application settings from env and optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    APP_ENV: Literal["dev", "prod"] = "dev"
    DEBUG: bool = False
    API_V1_PREFIX: str = "/api/v1"
    HOST: str = "127.0.0.1"
    PORT: int = 3000
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    # Browser origins allowed to send the session cookie; JSON list in env, e.g. ["http://localhost:5173"]
    CORS_ORIGINS: list[str] = []

    # SQLite file by default; any PostgreSQL URL works for deployments
    DATABASE_URL: str = "sqlite:///./tripcast.db"
    # Create missing tables at startup (create_all is check-first, existing rows are untouched)
    DB_AUTO_CREATE: bool = True

    # Server-side sessions; the client holds a signed token naming the session id
    SESSION_SECRET: SecretStr = SecretStr("change-me-in-production")
    SESSION_ALGORITHM: str = "HS256"
    SESSION_EXPIRE_MINUTES: int = 60 * 24
    SESSION_COOKIE_NAME: str = "tripcast_session"
    SESSION_COOKIE_SECURE: bool = False

    # "allow_all" lets every signed-in user reach the admin routes; "role" requires role ADMIN
    ADMIN_POLICY: Literal["allow_all", "role"] = "allow_all"

    # OpenWeatherMap (optional; weather routes answer 503 without a key)
    OPENWEATHER_API_KEY: SecretStr | None = None
    OPENWEATHER_BASE_URL: str = "https://api.openweathermap.org/data/2.5"
    OPENWEATHER_UNITS: Literal["standard", "metric", "imperial"] = "imperial"
    WEATHER_REQUEST_TIMEOUT_SEC: float = 10.0
    DEFAULT_CITY: str = "Milwaukee"

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("DATABASE_URL must be set and non-empty")
        if not any(v.startswith(prefix) for prefix in VALID_DATABASE_URL_PREFIXES):
            raise ValueError(
                "DATABASE_URL must be a SQLite or PostgreSQL URL (e.g. sqlite:///./tripcast.db)"
            )
        return v.strip()

    @field_validator("PORT")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if v < 1 or v > 65535:
            raise ValueError("PORT must be between 1 and 65535")
        return v

    @field_validator("CORS_ORIGINS")
    @classmethod
    def validate_cors_origins(cls, v: list[str]) -> list[str]:
        origins = [o.strip().rstrip("/") for o in v if o and o.strip()]
        if "*" in origins:
            raise ValueError('CORS_ORIGINS must list explicit origins, not "*"')
        return origins

    @field_validator("SESSION_SECRET")
    @classmethod
    def validate_session_secret(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value() or not v.get_secret_value().strip():
            raise ValueError("SESSION_SECRET must be set and non-empty")
        return v

    @field_validator("SESSION_ALGORITHM")
    @classmethod
    def validate_session_algorithm(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("SESSION_ALGORITHM must be set and non-empty")
        return v.strip()

    @field_validator("SESSION_EXPIRE_MINUTES")
    @classmethod
    def validate_session_expire_minutes(cls, v: int) -> int:
        if v < 1 or v > 43200:
            raise ValueError(
                "SESSION_EXPIRE_MINUTES must be between 1 and 43200 (1 min to 30 days)"
            )
        return v

    @field_validator("SESSION_COOKIE_NAME")
    @classmethod
    def validate_session_cookie_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("SESSION_COOKIE_NAME must be set and non-empty")
        return v.strip()

    @field_validator("OPENWEATHER_API_KEY")
    @classmethod
    def validate_openweather_api_key(cls, v: SecretStr | None) -> SecretStr | None:
        if v is None or not v.get_secret_value().strip():
            return None
        return v

    @field_validator("OPENWEATHER_BASE_URL")
    @classmethod
    def validate_openweather_base_url(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("OPENWEATHER_BASE_URL must be set and non-empty")
        s = v.strip().lower()
        if not (s.startswith("http://") or s.startswith("https://")):
            raise ValueError(
                "OPENWEATHER_BASE_URL must use http or https (e.g. https://api.openweathermap.org/data/2.5)"
            )
        return v.strip().rstrip("/")

    @field_validator("WEATHER_REQUEST_TIMEOUT_SEC")
    @classmethod
    def validate_weather_timeout(cls, v: float) -> float:
        if v <= 0 or v > 60:
            raise ValueError(
                "WEATHER_REQUEST_TIMEOUT_SEC must be greater than 0 and at most 60"
            )
        return v

    @field_validator("DEFAULT_CITY")
    @classmethod
    def validate_default_city(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("DEFAULT_CITY must be set and non-empty")
        return v.strip()


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance (safe to call from dependencies)."""
    return Settings()
