"""Interfaces and helpers for the secret store and notification collaborators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Protocol


class SecretStore(Protocol):
    """Anything that can return a secret string by logical name.

    Implementations raise `SecretLookupError` for not-found, access-denied and
    transient failures.
    """

    def get_secret(self, name: str) -> str:
        """Return the secret value stored under `name`."""
        ...


class NotificationPublisher(Protocol):
    """Anything that can publish a text message to a channel.

    Implementations raise `PublishError` for throttled, access-denied and
    transient failures.
    """

    def publish(self, channel: str, message: str) -> Optional[str]:
        """Publish `message` to `channel` and return the message id, if any."""
        ...


@dataclass
class CallableSecretStore(SecretStore):
    """Wrap a callable so secret lookups can be swapped for different backends."""

    lookup: Callable[[str], str]

    def get_secret(self, name: str) -> str:
        """Delegate to the configured lookup callable."""
        return self.lookup(name)


@dataclass
class CallablePublisher(NotificationPublisher):
    """Wrap a callable so publishing can be swapped for different backends."""

    send: Callable[[str, str], Optional[str]]

    def publish(self, channel: str, message: str) -> Optional[str]:
        """Delegate to the configured send callable."""
        return self.send(channel, message)
