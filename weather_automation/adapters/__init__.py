"""Adapters for the external collaborators: forecast API, secret store, notifications."""

from .base import CallablePublisher, CallableSecretStore, NotificationPublisher, SecretStore
from .factory import build_fetcher, build_publisher, build_secret_store
from .openweather_client import ConditionFetcher

__all__ = [
    "build_fetcher",
    "build_publisher",
    "build_secret_store",
    "CallablePublisher",
    "CallableSecretStore",
    "ConditionFetcher",
    "NotificationPublisher",
    "SecretStore",
]
