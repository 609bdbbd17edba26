from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import datetime
from numbers import Real
from typing import Callable, Sequence

from dotenv import load_dotenv

from ..errors import InvalidConfiguration
from ..profile import BucketState

Callback = Callable[[datetime], object]


@dataclass(frozen=True)
class PredictionCandidate:
    """A predicted date and the total deviation it was accepted with."""

    date: datetime
    deviation: float = 0.0


@dataclass
class TrainedModel:
    """What ``train`` learned from a sample list."""

    samples: list[datetime] = field(default_factory=list)
    first_date: datetime | None = None
    last_date: datetime | None = None

    total_epoch_interval: float = 0.0
    mean_epoch_interval: float = 0.0
    smallest_epoch_interval: float = 0.0
    largest_epoch_interval: float = 0.0

    distinct: list[BucketState] = field(default_factory=list)
    interval: list[BucketState] = field(default_factory=list)

    trained: bool = False


@dataclass(frozen=True)
class PredictOptions:
    """Controls how far and how long prediction searches.

    - stdev_limit: each bucket is searched within stdev * stdev_limit steps.
    - max_predictions: stop as soon as this many candidates are accepted.
    - min_date: predictions must be strictly later than this.
    - callbacks: extra predicates; a falsy return rejects the candidate.
    """

    stdev_limit: float = 2
    max_predictions: int | None = None
    min_date: datetime | None = None
    callbacks: Sequence[Callback] = ()

    def __post_init__(self) -> None:
        if isinstance(self.stdev_limit, bool) or not isinstance(self.stdev_limit, Real) or self.stdev_limit <= 0:
            raise InvalidConfiguration(f"stdev_limit must be a positive number, got {self.stdev_limit!r}")
        if self.max_predictions is not None and (
            isinstance(self.max_predictions, bool) or not isinstance(self.max_predictions, int) or self.max_predictions < 1
        ):
            raise InvalidConfiguration(f"max_predictions must be a positive integer, got {self.max_predictions!r}")
        if self.min_date is not None and not isinstance(self.min_date, datetime):
            raise InvalidConfiguration(f"min_date must be a datetime, got {type(self.min_date).__name__}")
        if isinstance(self.callbacks, (str, bytes)) or not isinstance(self.callbacks, (list, tuple)):
            raise InvalidConfiguration(f"callbacks must be a list of callables, got {type(self.callbacks).__name__}")
        for cb in self.callbacks:
            if not callable(cb):
                raise InvalidConfiguration(f"callback is not callable: {cb!r}")
        # Freeze whatever sequence we were handed.
        object.__setattr__(self, "callbacks", tuple(self.callbacks))

    @classmethod
    def from_env(cls, **overrides: object) -> "PredictOptions":
        """Defaults from EVENT_PREDICT_* env vars (or .env), then ``overrides``."""
        load_dotenv()
        kwargs: dict[str, object] = {}

        stdev_limit = os.environ.get("EVENT_PREDICT_STDEV_LIMIT", "").strip()
        if stdev_limit:
            try:
                kwargs["stdev_limit"] = float(stdev_limit)
            except ValueError:
                raise InvalidConfiguration(f"EVENT_PREDICT_STDEV_LIMIT is not a number: {stdev_limit!r}") from None

        max_predictions = os.environ.get("EVENT_PREDICT_MAX_PREDICTIONS", "").strip()
        if max_predictions:
            try:
                kwargs["max_predictions"] = int(max_predictions)
            except ValueError:
                raise InvalidConfiguration(
                    f"EVENT_PREDICT_MAX_PREDICTIONS is not an integer: {max_predictions!r}"
                ) from None

        kwargs.update(overrides)
        return cls(**kwargs)  # type: ignore[arg-type]
