import unittest

from weather_automation.adapters.base import CallablePublisher
from weather_automation.dispatcher import RAIN_MESSAGE, ActionDispatcher
from weather_automation.domain import ActionKind, Condition
from weather_automation.errors import DispatchError, PublishError

TOPIC = "arn:aws:sns:ap-southeast-2:123456789012:WeatherNotifications"


class RecordingPublisher:
    def __init__(self, exc=None):
        self.exc = exc
        self.calls = []

    def publish(self, channel, message):
        self.calls.append((channel, message))
        if self.exc is not None:
            raise self.exc
        return f"msg-{len(self.calls)}"


class TestActionDispatcher(unittest.TestCase):
    def test_action_table(self):
        expected = {
            Condition.STORM: ActionKind.SHUTDOWN_SIMULATED,
            Condition.RAIN: ActionKind.NOTIFY_PUBLISHED,
            Condition.CLEAR: ActionKind.BACKUP_SIMULATED,
            Condition.CLOUDY: ActionKind.NO_OP,
        }
        for condition, action in expected.items():
            outcome = ActionDispatcher(RecordingPublisher(), TOPIC).dispatch(condition)
            self.assertIs(outcome.category, condition)
            self.assertIs(outcome.action_taken, action)
            self.assertTrue(outcome.detail)

    def test_rain_publishes_once_to_configured_channel(self):
        publisher = RecordingPublisher()
        outcome = ActionDispatcher(publisher, TOPIC).dispatch(Condition.RAIN)

        self.assertEqual(publisher.calls, [(TOPIC, RAIN_MESSAGE)])
        self.assertTrue(RAIN_MESSAGE)
        self.assertIn("msg-1", outcome.detail)

    def test_other_conditions_never_publish(self):
        publisher = RecordingPublisher()
        dispatcher = ActionDispatcher(publisher, TOPIC)
        for condition in (Condition.STORM, Condition.CLEAR, Condition.CLOUDY):
            dispatcher.dispatch(condition)
        self.assertEqual(publisher.calls, [])

    def test_repeated_rain_is_not_deduplicated(self):
        publisher = RecordingPublisher()
        dispatcher = ActionDispatcher(publisher, TOPIC)

        first = dispatcher.dispatch(Condition.RAIN)
        second = dispatcher.dispatch(Condition.RAIN)

        self.assertEqual(len(publisher.calls), 2)
        self.assertIs(first.action_taken, ActionKind.NOTIFY_PUBLISHED)
        self.assertIs(second.action_taken, ActionKind.NOTIFY_PUBLISHED)

    def test_publish_failure_becomes_dispatch_error(self):
        cause = PublishError(PublishError.THROTTLED, "Rate exceeded")
        publisher = RecordingPublisher(exc=cause)

        with self.assertRaises(DispatchError) as cm:
            ActionDispatcher(publisher, TOPIC).dispatch(Condition.RAIN)

        self.assertEqual(str(cm.exception), "Rate exceeded")
        self.assertIs(cm.exception.cause, cause)

    def test_missing_channel_fails_without_publishing(self):
        publisher = RecordingPublisher()
        with self.assertRaises(DispatchError):
            ActionDispatcher(publisher, None).dispatch(Condition.RAIN)
        self.assertEqual(publisher.calls, [])

    def test_missing_channel_irrelevant_for_simulations(self):
        outcome = ActionDispatcher(RecordingPublisher(), None).dispatch(Condition.STORM)
        self.assertIs(outcome.action_taken, ActionKind.SHUTDOWN_SIMULATED)

    def test_callable_publisher_adapter(self):
        sent = []
        publisher = CallablePublisher(send=lambda channel, message: sent.append((channel, message)))
        outcome = ActionDispatcher(publisher, TOPIC).dispatch(Condition.RAIN)
        self.assertEqual(sent, [(TOPIC, RAIN_MESSAGE)])
        self.assertEqual(outcome.detail, f"Published notification to {TOPIC}")

    def test_accepts_plain_condition_values(self):
        outcome = ActionDispatcher(RecordingPublisher(), TOPIC).dispatch("Clear")
        self.assertIs(outcome.action_taken, ActionKind.BACKUP_SIMULATED)


if __name__ == "__main__":
    unittest.main()
