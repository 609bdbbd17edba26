from __future__ import annotations

import dataclasses
import logging
from datetime import datetime
from typing import Iterable, Sequence

from ..dates import add_seconds
from ..errors import InvalidConfiguration, InvalidInput, NoBucketsConfigured
from ..profile import BucketState, Profile, coerce_profile
from .accept import accept_interval
from .rank import best, rank
from .search import search_distinct, search_interval
from .train import compute_statistics, train
from .types import PredictionCandidate, PredictOptions, TrainedModel

logger = logging.getLogger(__name__)


class Predictor:
    """Predict the next date(s) of a recurring event from past dates.

    Usage:
      p = Predictor(dates, profile="holiday")
      p.predict_one()                       # best single prediction (or None)
      p.predict(max_predictions=5)          # up to 5, lowest deviation first
    """

    def __init__(self, dates: Iterable[datetime] | None = None, profile: object = "default") -> None:
        self._dates: list[datetime] = []
        self._profile: Profile = coerce_profile(profile or "default")
        self.model = TrainedModel()
        if dates is not None:
            self.set_dates(dates)

    # -- samples -----------------------------------------------------------

    def dates(self) -> list[datetime]:
        return list(self._dates)

    def set_dates(self, dates: Iterable[datetime]) -> None:
        """Append every date in ``dates``."""
        self._dates.extend(_as_list(dates))

    def add_date(self, d: datetime) -> None:
        # Checked at train time, where a value that can't be read is an error.
        self._dates.append(d)

    # -- profile -----------------------------------------------------------

    @property
    def profile(self) -> Profile:
        return self._profile

    def set_profile(self, profile: object) -> None:
        """Swap the profile; a new profile has no counts, so the model is reset."""
        self._profile = coerce_profile(profile)
        self.model = TrainedModel()

    # -- training / prediction ----------------------------------------------

    @property
    def trained(self) -> bool:
        return self.model.trained

    def train(self, dates: Iterable[datetime] | None = None) -> TrainedModel:
        """Gather statistics on the dates (replacing them first if ``dates`` is given)."""
        if dates is not None:
            self._dates = _as_list(dates)
        # Switched-off buckets are cleared too, so switching one back on never
        # brings back counts from an earlier sample set.
        self._profile.reset()
        self.model = train(
            self._dates,
            self._profile.distinct_buckets(),
            self._profile.interval_buckets(),
        )
        return self.model

    def predict(self, options: PredictOptions | None = None, **kwargs: object) -> list[PredictionCandidate]:
        """Return accepted predictions, lowest total deviation first.

        ``kwargs`` are PredictOptions fields and override ``options``.
        """
        opts = _options(options, kwargs)

        distinct = self._profile.distinct_buckets()
        interval = self._profile.interval_buckets()
        if not distinct and not interval:
            raise NoBucketsConfigured("No buckets supplied: switch on at least one distinct or interval bucket")

        model = self.model if self.model.trained else self.train()

        most_recent = model.last_date
        if most_recent is None:
            raise InvalidInput("Model has no dates to predict from; train it on at least one date")

        compute_statistics(distinct)
        compute_statistics(interval)

        start = add_seconds(most_recent, model.mean_epoch_interval)

        if distinct:
            ctx = search_distinct(start, most_recent, distinct, opts)
            found = list(ctx.predictions.values())
            if interval:
                found = _interval_filter(found, most_recent, interval)
        else:
            ctx = search_interval(start, most_recent, interval, opts)
            found = list(ctx.predictions.values())

        logger.debug("predicted %d date(s) after %s", len(found), most_recent.isoformat())
        return rank(found)

    def predict_one(self, options: PredictOptions | None = None, **kwargs: object) -> PredictionCandidate | None:
        """Best single prediction; stops searching at the first one unless max_predictions is set."""
        opts = _options(options, kwargs)
        if opts.max_predictions is None:
            opts = dataclasses.replace(opts, max_predictions=1)
        return best(self.predict(opts))


def _as_list(dates: Iterable[datetime]) -> list[datetime]:
    if isinstance(dates, (str, bytes)) or not isinstance(dates, Iterable):
        raise InvalidInput(f"dates must be a list of datetime values, got {type(dates).__name__}")
    return list(dates)


def _options(options: PredictOptions | None, overrides: dict[str, object]) -> PredictOptions:
    known = {f.name for f in dataclasses.fields(PredictOptions)}
    unknown = set(overrides) - known
    if unknown:
        raise InvalidConfiguration(f"Unknown predict option(s): {', '.join(sorted(unknown))}")
    if options is None:
        return PredictOptions(**overrides)  # type: ignore[arg-type]
    if overrides:
        return dataclasses.replace(options, **overrides)  # type: ignore[arg-type]
    return options


def _interval_filter(
    found: list[PredictionCandidate],
    most_recent: datetime,
    interval: Sequence[BucketState],
) -> list[PredictionCandidate]:
    """Drop distinct-search predictions that disagree with the interval statistics."""
    out: list[PredictionCandidate] = []
    for c in found:
        dev = accept_interval(c.date, most_recent, interval)
        if dev is None:
            continue
        out.append(dataclasses.replace(c, deviation=c.deviation + dev))
    return out
