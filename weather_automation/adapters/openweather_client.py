"""Fetch the 5 day / 3 hour forecast from OpenWeatherMap and normalize it."""
from __future__ import annotations

from typing import Any, Dict, List, Optional
from urllib.parse import quote, quote_plus

import requests

from weather_automation.config import DEFAULT_FETCH_TIMEOUT_SECONDS, OPENWEATHER_FORECAST_URL
from weather_automation.domain import SKIP_NO_CREDENTIAL, FetchResult, Fetched, Skipped, is_absent
from weather_automation.errors import FetchError
from utils.logging_utils import get_tagged_logger, mask_secret, mask_url

logger = get_tagged_logger(__name__, tag="openweather_client")

# Shared across warm invocations; only request-scoped parameters vary per call.
# No retry adapter and no response cache: the scheduler owns retries.
session = requests.Session()


def _entry_label(entry: Any) -> str:
    """Return the provider's primary label (`weather[0].main`) for one forecast entry."""
    if not isinstance(entry, dict):
        return ""
    weather = entry.get("weather") or []
    if not isinstance(weather, list) or not weather or not isinstance(weather[0], dict):
        return ""
    return str(weather[0].get("main") or "")


def _redact(text: str, credential: str) -> str:
    """Replace the credential, raw or URL-encoded, with its masked form."""
    masked = mask_secret(credential)
    for form in {credential, quote_plus(credential), quote(credential, safe="")}:
        if form:
            text = text.replace(form, masked)
    return text


class ConditionFetcher:
    """Calls the forecast endpoint once per invocation, or not at all without a credential.

    `timeout_seconds` is handed to requests as-is, so it bounds the connect and
    each socket read separately rather than the whole call.
    """

    def __init__(
        self,
        http_session: Optional[requests.Session] = None,
        *,
        base_url: str = OPENWEATHER_FORECAST_URL,
        units: str = "metric",
        timeout_seconds: float = DEFAULT_FETCH_TIMEOUT_SECONDS,
    ):
        self.session = http_session if http_session is not None else session
        self.base_url = base_url.rstrip("/")
        self.units = units
        self.timeout_seconds = timeout_seconds

    def forecast_params(self, location: str, credential: str) -> Dict[str, str]:
        return {"q": location, "appid": credential, "units": self.units}

    def fetch(self, location: str, credential: str | None) -> FetchResult:
        """Fetch the forecast for `location`.

        Returns `Skipped` without any outbound call when the credential is the
        sentinel (or empty). Raises `FetchError` on network errors, timeouts,
        non-2xx statuses and bodies that are not a JSON object. The credential
        is masked in the error message and in the logs.
        """
        if is_absent(credential):
            logger.info("No real API key found, skipping API call.")
            return Skipped(reason=SKIP_NO_CREDENTIAL)

        params = self.forecast_params(location, credential)
        prepared_url = requests.Request("GET", self.base_url, params=params).prepare().url
        logger.info("Requesting forecast for %s: %s", location, mask_url(prepared_url))

        try:
            resp = self.session.get(self.base_url, params=params, timeout=self.timeout_seconds)
            resp.raise_for_status()
            data = resp.json()
        except (requests.exceptions.RequestException, ValueError) as exc:
            message = _redact(str(exc), credential)
            logger.error("Error fetching forecast: %s", message)
            raise FetchError(exc, message) from exc

        if not isinstance(data, dict):
            logger.error("Forecast body is not a JSON object: %s", type(data).__name__)
            raise FetchError(f"Unexpected forecast body of type {type(data).__name__}")

        entries = data.get("list")
        if not isinstance(entries, list):
            entries = []
        labels: List[str] = [_entry_label(entry) for entry in entries]

        logger.info("Forecast list length: %d", len(entries))
        return Fetched(entry_count=len(entries), raw_categories=tuple(labels))
