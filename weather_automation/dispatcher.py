"""Turn a classified Condition into exactly one action.

Only Rain has a real side effect (a notification publish). Storm and Clear
are simulations that are logged and recorded, never live device control.
"""

from __future__ import annotations

from typing import Dict, Optional

from weather_automation.adapters.base import NotificationPublisher
from weather_automation.domain import ActionKind, ActionOutcome, Condition
from weather_automation.errors import DispatchError
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="dispatcher")

RAIN_MESSAGE = "Automated notice: Rain detected. IoT watering system paused."

ACTION_TABLE: Dict[Condition, ActionKind] = {
    Condition.STORM: ActionKind.SHUTDOWN_SIMULATED,
    Condition.RAIN: ActionKind.NOTIFY_PUBLISHED,
    Condition.CLEAR: ActionKind.BACKUP_SIMULATED,
    Condition.CLOUDY: ActionKind.NO_OP,
}

SIMULATION_DETAILS: Dict[ActionKind, str] = {
    ActionKind.SHUTDOWN_SIMULATED: "Detected storm. Simulating IoT device shutdown.",
    ActionKind.BACKUP_SIMULATED: "Clear weather. Simulating backup trigger.",
    ActionKind.NO_OP: "Cloudy weather. No automation required.",
}


class ActionDispatcher:
    """Stateless mapping from Condition to ActionOutcome.

    Publishes are not deduplicated: dispatching Rain twice publishes twice.
    """

    def __init__(self, publisher: NotificationPublisher, channel: Optional[str] = None, message: str = RAIN_MESSAGE):
        self.publisher = publisher
        self.channel = channel
        self.message = message

    def dispatch(self, category: Condition) -> ActionOutcome:
        category = Condition(category)
        action = ACTION_TABLE[category]

        if action is ActionKind.NOTIFY_PUBLISHED:
            return self._notify(category)

        detail = SIMULATION_DETAILS[action]
        logger.info(detail)
        return ActionOutcome(category=category, action_taken=action, detail=detail)

    def _notify(self, category: Condition) -> ActionOutcome:
        if not self.channel:
            logger.error("Rain detected but no notification channel is configured")
            raise DispatchError("No notification channel configured")

        logger.info("Detected rain. Sending notification.", extra={"channel": self.channel})
        try:
            message_id = self.publisher.publish(self.channel, self.message)
        except Exception as exc:
            logger.error("Notification publish failed: %s", exc)
            raise DispatchError(exc) from exc

        detail = f"Published notification to {self.channel}"
        if message_id:
            detail += f" (message id {message_id})"
        return ActionOutcome(category=category, action_taken=ActionKind.NOTIFY_PUBLISHED, detail=detail)
