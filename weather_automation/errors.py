"""Exception types shared by the fetch, classify and dispatch steps."""

from __future__ import annotations


class WeatherAutomationError(RuntimeError):
    """Base class for every error raised by this package."""


class SecretLookupError(WeatherAutomationError):
    """A secret-store lookup failed. Always absorbed by the credential resolver."""

    NOT_FOUND = "not_found"
    ACCESS_DENIED = "access_denied"
    TRANSIENT = "transient"

    def __init__(self, kind: str, message: str) -> None:
        super().__init__(message)
        self.kind = kind


class PublishError(WeatherAutomationError):
    """A notification publish failed at the transport."""

    THROTTLED = "throttled"
    ACCESS_DENIED = "access_denied"
    TRANSIENT = "transient"

    def __init__(self, kind: str, message: str) -> None:
        super().__init__(message)
        self.kind = kind


class _CausedError(WeatherAutomationError):
    """Wraps an underlying exception, reusing its message unless a redacted one is given."""

    def __init__(self, cause: BaseException | str, message: str | None = None) -> None:
        if isinstance(cause, str):
            cause = WeatherAutomationError(cause)
        super().__init__(str(cause) if message is None else message)
        self.cause = cause


class FetchError(_CausedError):
    """The forecast request was attempted but the transport or body failed."""


class DispatchError(_CausedError):
    """The side effect chosen for a condition could not be carried out."""
