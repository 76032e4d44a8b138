import os
import unittest

from pydantic import ValidationError

from weather_automation.config import OPENWEATHER_FORECAST_URL, RunConfig, Settings


class TestConfig(unittest.TestCase):
    def test_settings_defaults(self):
        saved = {k: os.environ.pop(k) for k in ("WEATHER_CITY", "WEATHER_FETCH_TIMEOUT_SECONDS") if k in os.environ}
        try:
            s = Settings()
            self.assertEqual(s.city, "Sydney,AU")
            self.assertEqual(s.fetch_timeout_seconds, 8.0)
            self.assertEqual(s.secret_name, "WeatherAPIKey")
            self.assertEqual(s.forecast_url, OPENWEATHER_FORECAST_URL)
        finally:
            os.environ.update(saved)

    def test_settings_env_override(self):
        previous = os.environ.get("WEATHER_CITY")
        try:
            os.environ["WEATHER_CITY"] = "Perth,AU"
            s = Settings()
            self.assertEqual(s.city, "Perth,AU")
        finally:
            if previous is None:
                os.environ.pop("WEATHER_CITY", None)
            else:
                os.environ["WEATHER_CITY"] = previous

    def test_forecast_url_trailing_slash_stripped(self):
        s = Settings(forecast_url="http://example.com/forecast/")
        self.assertEqual(s.forecast_url, "http://example.com/forecast")

    def test_timeout_must_be_finite_and_positive(self):
        for bad in (0, -1, float("inf")):
            with self.assertRaises(ValidationError):
                Settings(fetch_timeout_seconds=bad)

    def test_units_validated(self):
        self.assertEqual(Settings(units="Imperial").units, "imperial")
        with self.assertRaises(ValidationError):
            Settings(units="kelvin")

    def test_run_config_snapshot(self):
        s = Settings(
            city="Sydney,AU",
            api_key="FAKE123",
            automation_topic_arn="arn:aws:sns:ap-southeast-2:123456789012:weather",
            summary_dispatch_enabled=True,
        )
        self.assertEqual(
            s.run_config(),
            RunConfig(
                location="Sydney,AU",
                channel="arn:aws:sns:ap-southeast-2:123456789012:weather",
                injected_credential="FAKE123",
                dispatch_on_fetch=True,
            ),
        )

    def test_run_config_empty_values_become_none(self):
        cfg = Settings(api_key="", automation_topic_arn="").run_config()
        self.assertIsNone(cfg.injected_credential)
        self.assertIsNone(cfg.channel)


if __name__ == "__main__":
    unittest.main()
