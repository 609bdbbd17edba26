from __future__ import annotations

from datetime import datetime
from typing import Callable, Iterable, Sequence

from ..dates import Duration, between, read_date_part, read_duration_part
from ..profile import BucketState
from .types import Callback


def _deviation(buckets: Iterable[BucketState], read: Callable[[BucketState], int]) -> float | None:
    total = 0.0
    for b in buckets:
        dev = abs(read(b) - b.mean)
        total += dev
        if dev > b.stdev:
            return None
    return total


def _run_callbacks(d: datetime, callbacks: Sequence[Callback]) -> bool:
    for cb in callbacks:
        if not cb(d):
            return False
    return True


def accept_distinct(d: datetime, buckets: Sequence[BucketState], callbacks: Sequence[Callback] = ()) -> float | None:
    """Return the total deviation of ``d`` if every bucket and callback accepts it, else None.

    A bucket rejects when the date part is more than one stdev away from the
    bucket mean. No buckets means a deviation of 0.
    """
    total = _deviation(buckets, lambda b: read_date_part(d, b.definition.accessor))
    if total is None or not _run_callbacks(d, callbacks):
        return None
    return total


def accept_interval(
    d: datetime,
    most_recent: datetime,
    buckets: Sequence[BucketState],
    callbacks: Sequence[Callback] = (),
) -> float | None:
    """Like ``accept_distinct`` but on the interval since the most recent date."""
    dur: Duration = between(d, most_recent)
    total = _deviation(buckets, lambda b: read_duration_part(dur, b.definition.accessor))
    if total is None or not _run_callbacks(d, callbacks):
        return None
    return total
