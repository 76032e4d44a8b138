"""Resolve the forecast API credential without ever failing the invocation."""

from __future__ import annotations

from typing import Optional

from weather_automation.adapters.base import SecretStore
from weather_automation.config import DEFAULT_SECRET_NAME
from weather_automation.domain import SENTINEL_CREDENTIAL, is_absent
from utils.logging_utils import get_tagged_logger, mask_secret

logger = get_tagged_logger(__name__, tag="credentials")


class CredentialResolver:
    """Prefer an injected key, then the secret store, then the sentinel.

    `resolve` never raises: a failed lookup is an explicit "no usable
    credential" result, which puts the fetch step into skip mode.
    """

    def __init__(self, secret_store: Optional[SecretStore] = None, secret_name: str = DEFAULT_SECRET_NAME):
        self.secret_store = secret_store
        self.secret_name = secret_name

    def resolve(self, injected: Optional[str] = None) -> str:
        if not is_absent(injected):
            logger.debug("Using injected credential %s", mask_secret(injected))
            return injected

        if self.secret_store is None or not self.secret_name:
            logger.info("No injected credential and no secret store configured")
            return SENTINEL_CREDENTIAL

        try:
            value = self.secret_store.get_secret(self.secret_name)
        except Exception as exc:
            logger.warning(
                "Secret lookup for '%s' failed (%s); continuing without a credential: %s",
                self.secret_name,
                getattr(exc, "kind", type(exc).__name__),
                exc,
            )
            return SENTINEL_CREDENTIAL

        if is_absent(value):
            logger.warning("Secret '%s' holds no usable credential", self.secret_name)
            return SENTINEL_CREDENTIAL

        logger.info("Resolved credential %s from secret '%s'", mask_secret(value), self.secret_name)
        return value
