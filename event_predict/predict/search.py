from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Iterator, Sequence

from ..dates import STEP_SCALE, epoch_seconds, shift
from ..profile import BucketState
from .accept import accept_distinct, accept_interval
from .trim import trim
from .types import PredictionCandidate, PredictOptions

logger = logging.getLogger(__name__)


def search_range(stdev: float, stdev_limit: float) -> int:
    return int(math.ceil(stdev * stdev_limit))


def offsets(window: int) -> Iterator[int]:
    """0, +1, -1, +2, -2, ... +window, -window."""
    yield 0
    for k in range(1, window + 1):
        yield k
        yield -k


@dataclass
class SearchContext:
    """Everything one search call reads and writes.

    ``buckets`` is ordered coarse to fine. ``predictions`` is keyed by the
    epoch value of the candidate so equal dates collapse into one.
    """

    start: datetime
    most_recent: datetime
    buckets: Sequence[BucketState]
    accept: Callable[[datetime], float | None]
    options: PredictOptions
    trim_buckets: Sequence[BucketState] = ()

    predictions: dict[float, PredictionCandidate] = field(default_factory=dict)
    stopped: bool = False
    visited: int = 0

    @property
    def full(self) -> bool:
        cap = self.options.max_predictions
        return cap is not None and len(self.predictions) >= cap

    def in_bounds(self, d: datetime) -> bool:
        if d <= self.most_recent:
            return False
        min_date = self.options.min_date
        if min_date is not None and d <= min_date:
            return False
        return True


def descend(ctx: SearchContext) -> SearchContext:
    """Depth-first search over the buckets, one date part per level.

    Each frame is (bucket index, partial date). A level tries the partial date
    shifted by 0, +1, -1, ... steps of its bucket's unit, within
    ceil(stdev * stdev_limit) steps. The last level gates candidates through
    ``ctx.accept``; the others push frames for the next level. The search stops
    as soon as ``max_predictions`` candidates are accepted.
    """
    if not ctx.buckets:
        return ctx

    last = len(ctx.buckets) - 1
    limit = ctx.options.stdev_limit
    stack: list[tuple[int, datetime]] = [(0, ctx.start)]

    while stack:
        if ctx.full:
            ctx.stopped = True
            break

        level, partial = stack.pop()
        bucket = ctx.buckets[level]
        unit = bucket.definition.step_unit
        scale = STEP_SCALE.get(unit, 1)
        window = search_range(bucket.stdev / scale, limit)

        children: list[tuple[int, datetime]] = []
        for inc in offsets(window):
            if ctx.full:
                ctx.stopped = True
                break

            cand = trim(shift(partial, unit, inc * scale), ctx.trim_buckets)
            ctx.visited += 1
            if not ctx.in_bounds(cand):
                continue

            if level < last:
                children.append((level + 1, cand))
                continue

            dev = ctx.accept(cand)
            if dev is not None:
                ctx.predictions[epoch_seconds(cand)] = PredictionCandidate(date=cand, deviation=dev)

        if ctx.stopped:
            break
        # Reversed so the frames pop in offset order.
        stack.extend(reversed(children))

    logger.debug(
        "search over %s visited %d dates, accepted %d%s",
        [b.name for b in ctx.buckets],
        ctx.visited,
        len(ctx.predictions),
        " (stopped at max_predictions)" if ctx.stopped else "",
    )
    return ctx


def search_distinct(
    start: datetime,
    most_recent: datetime,
    buckets: Sequence[BucketState],
    options: PredictOptions,
) -> SearchContext:
    """Search by offsetting one calendar part at a time, coarsest first."""
    ordered = sorted(buckets, key=lambda b: b.order, reverse=True)
    ctx = SearchContext(
        start=start,
        most_recent=most_recent,
        buckets=ordered,
        accept=lambda d: accept_distinct(d, ordered, options.callbacks),
        options=options,
        trim_buckets=ordered,
    )
    return descend(ctx)


def search_interval(
    start: datetime,
    most_recent: datetime,
    buckets: Sequence[BucketState],
    options: PredictOptions,
    trim_buckets: Sequence[BucketState] = (),
) -> SearchContext:
    """Search by offsetting one interval unit at a time, largest first."""
    ordered = sorted(buckets, key=lambda b: b.order, reverse=True)
    ctx = SearchContext(
        start=start,
        most_recent=most_recent,
        buckets=ordered,
        accept=lambda d: accept_interval(d, most_recent, ordered, options.callbacks),
        options=options,
        trim_buckets=trim_buckets,
    )
    return descend(ctx)
