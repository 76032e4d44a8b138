"""Domain vocabulary for the weather automation units.

Closed enumerations for conditions and actions, the per-invocation result
types, and the credential sentinel. No I/O and no decision logic lives here;
every value is created once per invocation and never mutated afterwards.
"""

from __future__ import annotations

from enum import Enum
from typing import Tuple, Union

from pydantic import BaseModel, ConfigDict

# Placeholder credential meaning "no real key available". Never sent upstream.
SENTINEL_CREDENTIAL = "DUMMY_KEY_FOR_LOCAL_TESTS"

SKIP_NO_CREDENTIAL = "no credential"


def is_absent(credential: str | None) -> bool:
    """Return True when `credential` must not be used in an outbound call."""
    return not credential or credential == SENTINEL_CREDENTIAL


class Condition(str, Enum):
    """The only categories the classifier may produce."""
    CLEAR = "Clear"
    RAIN = "Rain"
    STORM = "Storm"
    CLOUDY = "Cloudy"


class ActionKind(str, Enum):
    """Action chosen for a condition."""
    SHUTDOWN_SIMULATED = "ShutdownSimulated"
    NOTIFY_PUBLISHED = "NotifyPublished"
    BACKUP_SIMULATED = "BackupSimulated"
    NO_OP = "NoOp"


class _ValueModel(BaseModel):
    """Immutable, strict base for per-invocation values."""

    model_config = ConfigDict(extra="forbid", frozen=True)


class ActionOutcome(_ValueModel):
    """What the dispatcher did (or would have done) for one condition."""

    category: Condition
    action_taken: ActionKind
    detail: str


class Skipped(_ValueModel):
    """No outbound call was made."""
    reason: str


class Fetched(_ValueModel):
    """A forecast response was received and normalized."""
    entry_count: int
    raw_categories: Tuple[str, ...] = ()


FetchResult = Union[Skipped, Fetched]
