"""boto3-backed secret store (Secrets Manager) and notification publisher (SNS)."""

from __future__ import annotations

from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from weather_automation.adapters.base import NotificationPublisher, SecretStore
from weather_automation.errors import PublishError, SecretLookupError
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="aws")

_SECRET_NOT_FOUND_CODES = {"ResourceNotFoundException"}
_SECRET_DENIED_CODES = {"AccessDeniedException", "AccessDenied", "UnrecognizedClientException"}
_SNS_THROTTLED_CODES = {"Throttling", "ThrottlingException", "ThrottledException"}
_SNS_DENIED_CODES = {"AuthorizationError", "AccessDenied", "AccessDeniedException"}


def _error_code(exc: ClientError) -> str:
    return exc.response.get("Error", {}).get("Code", "")


class SecretsManagerStore(SecretStore):
    """Read plain-string secrets from AWS Secrets Manager.

    The boto3 client is created on first use so importing this module never
    needs AWS credentials or a region.
    """

    def __init__(self, region_name: Optional[str] = None, client: Any = None) -> None:
        self.region_name = region_name
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = boto3.client("secretsmanager", region_name=self.region_name)
        return self._client

    def get_secret(self, name: str) -> str:
        try:
            resp = self.client.get_secret_value(SecretId=name)
        except ClientError as exc:
            code = _error_code(exc)
            if code in _SECRET_NOT_FOUND_CODES:
                kind = SecretLookupError.NOT_FOUND
            elif code in _SECRET_DENIED_CODES:
                kind = SecretLookupError.ACCESS_DENIED
            else:
                kind = SecretLookupError.TRANSIENT
            raise SecretLookupError(kind, f"{code or 'ClientError'}: {exc}") from exc
        except BotoCoreError as exc:
            raise SecretLookupError(SecretLookupError.TRANSIENT, str(exc)) from exc

        value = (resp.get("SecretString") or "").strip()
        if not value:
            raise SecretLookupError(SecretLookupError.NOT_FOUND, f"Secret '{name}' has no string value")
        return value


class SnsPublisher(NotificationPublisher):
    """Publish text messages to an SNS topic ARN."""

    def __init__(self, region_name: Optional[str] = None, client: Any = None) -> None:
        self.region_name = region_name
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = boto3.client("sns", region_name=self.region_name)
        return self._client

    def publish(self, channel: str, message: str) -> Optional[str]:
        try:
            resp = self.client.publish(TopicArn=channel, Message=message)
        except ClientError as exc:
            code = _error_code(exc)
            if code in _SNS_THROTTLED_CODES:
                kind = PublishError.THROTTLED
            elif code in _SNS_DENIED_CODES:
                kind = PublishError.ACCESS_DENIED
            else:
                kind = PublishError.TRANSIENT
            raise PublishError(kind, f"{code or 'ClientError'}: {exc}") from exc
        except BotoCoreError as exc:
            raise PublishError(PublishError.TRANSIENT, str(exc)) from exc

        message_id = resp.get("MessageId")
        logger.debug("Published notification", extra={"message_id": message_id})
        return message_id
