"""Map fetched forecasts, external labels or a random draw onto a Condition."""

from __future__ import annotations

import random
from collections import Counter
from typing import Iterable, Optional, Protocol, Sequence, Union

from weather_automation.domain import Condition, FetchResult, Fetched
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="classifier")

DEFAULT_CONDITION = Condition.CLOUDY

# Provider labels (OpenWeatherMap `weather[].main`) that map to something other than Cloudy.
LABEL_TO_CONDITION = {
    "thunderstorm": Condition.STORM,
    "squall": Condition.STORM,
    "tornado": Condition.STORM,
    "storm": Condition.STORM,
    "rain": Condition.RAIN,
    "drizzle": Condition.RAIN,
    "snow": Condition.RAIN,
    "clear": Condition.CLEAR,
}

# Tie-break order for the majority vote, most severe first.
SEVERITY = (Condition.STORM, Condition.RAIN, Condition.CLOUDY, Condition.CLEAR)


class RandomSource(Protocol):
    """The part of `random.Random` the classifier needs."""

    def choice(self, seq: Sequence[Condition]) -> Condition:
        ...


def condition_from_label(label: Optional[str]) -> Condition:
    """Map one provider or operator label to a Condition; unknown labels are Cloudy."""
    if isinstance(label, Condition):
        return label
    key = (label or "").strip().lower()
    return LABEL_TO_CONDITION.get(key, DEFAULT_CONDITION)


def dominant_condition(labels: Iterable[str]) -> Condition:
    """Majority vote over mapped labels, ties broken by severity; no labels means Cloudy."""
    counts = Counter(condition_from_label(label) for label in labels)
    if not counts:
        return DEFAULT_CONDITION
    best = max(counts.values())
    return next(c for c in SEVERITY if counts.get(c) == best)


class ConditionClassifier:
    """Total function from classifier input to exactly one Condition."""

    def __init__(self, rng: Optional[RandomSource] = None):
        self.rng = rng if rng is not None else random.Random()

    def classify(self, source: Union[FetchResult, str, Condition]) -> Condition:
        if isinstance(source, Fetched):
            condition = dominant_condition(source.raw_categories)
            logger.info(
                "Classified %d forecast entries as %s", source.entry_count, condition.value
            )
            return condition
        if isinstance(source, (str, Condition)):
            return condition_from_label(source)
        # Skipped: nothing to classify
        return DEFAULT_CONDITION

    def draw(self) -> Condition:
        """Simulated trigger: pick one of the four conditions uniformly at random."""
        condition = Condition(self.rng.choice(list(Condition)))
        logger.info("Simulated weather condition: %s", condition.value)
        return condition
