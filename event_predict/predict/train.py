from __future__ import annotations

import logging
import math
from collections import Counter
from datetime import datetime
from typing import Iterable, Mapping, Sequence

from ..dates import between, epoch_seconds, read_date_part, read_duration_part
from ..errors import DivideByZero, InsufficientSamples, InvalidInput, MissingCapability
from ..profile import BucketState
from .types import TrainedModel

logger = logging.getLogger(__name__)


def _sort_key(d: object) -> float:
    if not isinstance(d, datetime):
        raise MissingCapability(f"Can't order {type(d).__name__} value: {d!r} (samples must be datetime values)")
    return epoch_seconds(d)


def train(
    samples: Iterable[datetime],
    distinct: Sequence[BucketState],
    interval: Sequence[BucketState] = (),
) -> TrainedModel:
    """Count bucket occurrences over ``samples``.

    Distinct buckets see every sample once; interval buckets see every
    chronologically adjacent pair once. Counters are cleared first, so training
    the same samples twice gives the same statistics.
    """
    dates = list(samples)
    if not dates:
        raise InvalidInput("Can't train on an empty list of dates")
    if interval and len(dates) < 2:
        raise InsufficientSamples(f"Interval buckets need at least 2 dates, got {len(dates)}")

    # sorted() is stable, so equal timestamps keep their input order.
    dates = sorted(dates, key=_sort_key)

    for b in list(distinct) + list(interval):
        b.reset()

    total = 0.0
    smallest: float | None = None
    largest = 0.0
    prev: datetime | None = None
    for d in dates:
        for b in distinct:
            b.record(read_date_part(d, b.definition.accessor))

        if prev is None:
            prev = d
            continue

        dur = between(d, prev)
        for b in interval:
            b.record(read_duration_part(dur, b.definition.accessor))

        gap = epoch_seconds(d) - epoch_seconds(prev)
        total += gap
        smallest = gap if smallest is None else min(smallest, gap)
        largest = max(largest, gap)
        prev = d

    n = len(dates)
    # A lone sample has no interval to average; searching starts on the sample itself.
    mean = total / (n - 1) if n > 1 else 0.0

    logger.debug("trained on %d dates: mean interval %.3fs over %.3fs", n, mean, total)

    return TrainedModel(
        samples=dates,
        first_date=dates[0],
        last_date=dates[-1],
        total_epoch_interval=total,
        mean_epoch_interval=mean,
        smallest_epoch_interval=smallest or 0.0,
        largest_epoch_interval=largest,
        distinct=list(distinct),
        interval=list(interval),
        trained=True,
    )


def bucket_statistics(counts: Mapping[int, int] | Counter) -> tuple[float, float, float]:
    """Return (mean, variance, stdev) of the recorded occurrences.

    Population statistics: the variance divides by the occurrence count.
    """
    n = sum(counts.values())
    if n == 0:
        raise DivideByZero("Bucket has no recorded occurrences")

    mean = sum(value * c for value, c in counts.items()) / n
    variance = sum((value - mean) ** 2 * c for value, c in counts.items()) / n
    return mean, variance, math.sqrt(variance)


def compute_statistics(buckets: Iterable[BucketState]) -> None:
    for b in buckets:
        try:
            b.mean, b.variance, b.stdev = bucket_statistics(b.counts)
        except DivideByZero:
            raise DivideByZero(f"Bucket {b.name!r} has no recorded occurrences (was it switched on after training?)") from None
