"""Scheduler entry points (Lambda-style `handler(event, context)`).

The collaborators (HTTP session, boto3 clients) are built once per process
and reused by every warm invocation; they carry no per-request state.
"""

from __future__ import annotations

import json
import random
from dataclasses import dataclass
from typing import Any, Dict, Optional

from weather_automation import config
from weather_automation.adapters import build_fetcher, build_publisher, build_secret_store
from weather_automation.adapters.base import NotificationPublisher
from weather_automation.adapters.openweather_client import ConditionFetcher
from weather_automation.classifier import ConditionClassifier
from weather_automation.credentials import CredentialResolver
from weather_automation.jobs import AutomationJob, DailySummaryJob
from utils.logging_utils import get_tagged_logger, setup_logging

logger = get_tagged_logger(__name__, tag="handlers")


@dataclass
class Runtime:
    """Collaborators shared across invocations of both units."""

    resolver: CredentialResolver
    fetcher: ConditionFetcher
    classifier: ConditionClassifier
    publisher: NotificationPublisher

    def daily_summary_job(self) -> DailySummaryJob:
        return DailySummaryJob(self.resolver, self.fetcher, self.classifier, self.publisher)

    def automation_job(self) -> AutomationJob:
        return AutomationJob(self.classifier, self.publisher)


def build_runtime(settings: config.Settings | None = None) -> Runtime:
    """Wire the production collaborators from settings."""
    settings = settings or config.settings
    return Runtime(
        resolver=CredentialResolver(build_secret_store(settings), settings.secret_name),
        fetcher=build_fetcher(settings),
        classifier=ConditionClassifier(rng=random.Random()),
        publisher=build_publisher(settings),
    )


_runtime: Optional[Runtime] = None


def get_runtime() -> Runtime:
    """Return the process-wide runtime, building it on first use."""
    global _runtime
    if _runtime is None:
        _runtime = build_runtime(config.settings)
    return _runtime


def set_runtime(runtime: Optional[Runtime]) -> None:
    """Replace (or with None, reset) the process-wide runtime."""
    global _runtime
    _runtime = runtime


def _log_event(event: Any) -> None:
    try:
        logger.info("Event received: %s", json.dumps(event, default=str))
    except (TypeError, ValueError):
        logger.info("Event received: %r", event)


def daily_summary_handler(event: Any = None, context: Any = None) -> Dict[str, Any]:
    """Daily forecast summary unit."""
    setup_logging(level=config.settings.log_level, job_name="daily_summary")
    _log_event(event)
    result = get_runtime().daily_summary_job().run(config.settings.run_config())
    logger.info("Daily summary result: %s", result)
    return result


def automation_handler(event: Any = None, context: Any = None) -> Dict[str, Any]:
    """Simulated automation unit."""
    setup_logging(level=config.settings.log_level, job_name="automation")
    _log_event(event)
    result = get_runtime().automation_job().run(config.settings.run_config(), event)
    logger.info("Automation result: %s", result)
    return result
