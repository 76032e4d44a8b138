"""Factory helpers for building the collaborators at startup."""

from __future__ import annotations

from typing import Optional

from weather_automation import config
from weather_automation.adapters.aws import SecretsManagerStore, SnsPublisher
from weather_automation.adapters.base import NotificationPublisher, SecretStore
from weather_automation.adapters.openweather_client import ConditionFetcher
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="adapters/factory")


def build_secret_store(settings: config.Settings | None = None) -> Optional[SecretStore]:
    """Return the Secrets Manager store, or None when no secret name is configured."""
    settings = settings or config.settings
    if not settings.secret_name:
        logger.info("No secret name configured; secret-store lookup disabled")
        return None
    logger.info("Using Secrets Manager secret store", extra={"secret_name": settings.secret_name})
    return SecretsManagerStore(region_name=settings.aws_region)


def build_publisher(settings: config.Settings | None = None) -> NotificationPublisher:
    """Return the SNS publisher."""
    settings = settings or config.settings
    if not settings.automation_topic_arn:
        logger.warning("No automation topic ARN configured; Rain notifications will fail")
    return SnsPublisher(region_name=settings.aws_region)


def build_fetcher(settings: config.Settings | None = None) -> ConditionFetcher:
    """Return a fetcher bound to the shared HTTP session."""
    settings = settings or config.settings
    return ConditionFetcher(
        base_url=settings.forecast_url,
        units=settings.units,
        timeout_seconds=settings.fetch_timeout_seconds,
    )
