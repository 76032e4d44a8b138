"""The two scheduled units: daily forecast summary and simulated automation.

Each `run` is one invocation: a strictly sequential chain of
resolve -> fetch -> classify -> dispatch with no internal retries. Failures
from the fetch or the publish propagate to whoever scheduled the run.
Overlapping invocations are independent and may publish more than once.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from weather_automation.adapters.base import NotificationPublisher
from weather_automation.adapters.openweather_client import ConditionFetcher
from weather_automation.classifier import ConditionClassifier
from weather_automation.config import RunConfig
from weather_automation.credentials import CredentialResolver
from weather_automation.dispatcher import ActionDispatcher
from weather_automation.domain import ActionOutcome, Skipped
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="jobs")

SKIP_MESSAGE = "Skipped real API call (dummy key)."
AUTOMATION_MESSAGE = "Automation simulation complete."


def _outcome_fields(outcome: ActionOutcome) -> Dict[str, Any]:
    return {
        "condition": outcome.category.value,
        "action": outcome.action_taken.value,
        "detail": outcome.detail,
    }


@dataclass
class DailySummaryJob:
    """Fetch the forecast for the configured city and report how many entries came back."""

    resolver: CredentialResolver
    fetcher: ConditionFetcher
    classifier: ConditionClassifier
    publisher: NotificationPublisher

    def run(self, run_config: RunConfig) -> Dict[str, Any]:
        logger.info("Starting run for city: %s", run_config.location)

        credential = self.resolver.resolve(run_config.injected_credential)
        result = self.fetcher.fetch(run_config.location, credential)

        if isinstance(result, Skipped):
            return {"ok": True, "message": SKIP_MESSAGE}

        summary: Dict[str, Any] = {"ok": True, "count": result.entry_count}
        if run_config.dispatch_on_fetch:
            condition = self.classifier.classify(result)
            outcome = ActionDispatcher(self.publisher, run_config.channel).dispatch(condition)
            summary.update(_outcome_fields(outcome))
        return summary


@dataclass
class AutomationJob:
    """Pick a condition (randomly, or from the triggering event) and dispatch its action."""

    classifier: ConditionClassifier
    publisher: NotificationPublisher

    def run(self, run_config: RunConfig, event: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        label = event.get("condition") if isinstance(event, Mapping) else None
        if label:
            condition = self.classifier.classify(str(label))
            logger.info("Condition supplied by event: %s -> %s", label, condition.value)
        else:
            condition = self.classifier.draw()

        outcome = ActionDispatcher(self.publisher, run_config.channel).dispatch(condition)

        return {
            "statusCode": 200,
            **_outcome_fields(outcome),
            "message": AUTOMATION_MESSAGE,
        }
