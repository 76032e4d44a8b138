"""Configuration pulled from environment variables via pydantic.

Only the bootstrap layer (handlers, CLI, trigger API) touches `settings`; the
jobs and the core components receive an immutable `RunConfig` instead.
"""
import math
from dataclasses import dataclass
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from utils.logging_utils import get_tagged_logger, mask_secret
logger = get_tagged_logger(__name__, tag="config")

OPENWEATHER_FORECAST_URL = "https://api.openweathermap.org/data/2.5/forecast"
DEFAULT_CITY = "Sydney,AU"
DEFAULT_SECRET_NAME = "WeatherAPIKey"
DEFAULT_FETCH_TIMEOUT_SECONDS = 8.0
SUPPORTED_UNITS = ("metric", "imperial", "standard")


@dataclass(frozen=True)
class RunConfig:
    """Plain key/value configuration for one invocation."""
    location: str = DEFAULT_CITY
    channel: Optional[str] = None
    injected_credential: Optional[str] = None
    dispatch_on_fetch: bool = False


class Settings(BaseSettings):
    """Environment-driven configuration for the weather automation units."""
    model_config = SettingsConfigDict(env_prefix="WEATHER_", extra="ignore")

    city: str = DEFAULT_CITY
    api_key: str = ""
    secret_name: str = DEFAULT_SECRET_NAME  # empty disables the secret-store lookup
    aws_region: str | None = None
    automation_topic_arn: str | None = None
    forecast_url: str = OPENWEATHER_FORECAST_URL
    units: str = "metric"
    # Passed to requests as `timeout=`: it bounds the connect and each socket
    # read on its own, not the total call. A slow trickle of bytes can run past
    # it, so keep it well under the scheduler's own time limit.
    fetch_timeout_seconds: float = DEFAULT_FETCH_TIMEOUT_SECONDS
    summary_dispatch_enabled: bool = False
    trigger_api_key: str | None = None
    log_level: str = "INFO"

    @field_validator("forecast_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the forecast URL."""
        return str(v).rstrip("/")

    @field_validator("units", mode="after")
    @classmethod
    def check_units(cls, v: str) -> str:
        """Only the unit systems the provider understands are accepted."""
        v = v.lower()
        if v not in SUPPORTED_UNITS:
            raise ValueError(f"units must be one of {', '.join(SUPPORTED_UNITS)}")
        return v

    @field_validator("fetch_timeout_seconds", mode="after")
    @classmethod
    def check_timeout(cls, v: float) -> float:
        """The scheduled task is time-boxed, so the fetch timeout must be bounded."""
        if not math.isfinite(v) or v <= 0:
            raise ValueError("fetch_timeout_seconds must be a finite number greater than zero")
        return v

    def run_config(self) -> RunConfig:
        """Snapshot the settings into the value object the jobs consume."""
        return RunConfig(
            location=self.city,
            channel=self.automation_topic_arn or None,
            injected_credential=self.api_key or None,
            dispatch_on_fetch=self.summary_dispatch_enabled,
        )


settings = Settings()


if __name__ == "__main__":
    logger.logger.setLevel("DEBUG")
    dumped = settings.model_dump()
    dumped["api_key"] = mask_secret(dumped["api_key"])
    dumped["trigger_api_key"] = mask_secret(dumped["trigger_api_key"])
    logger.debug(f"Loaded settings: {dumped}")
