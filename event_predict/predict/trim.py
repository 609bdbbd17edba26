from __future__ import annotations

from datetime import datetime
from typing import Iterable

from ..dates import truncate
from ..profile import BucketState


def smallest_trimmable(buckets: Iterable[BucketState]) -> BucketState | None:
    cands = [b for b in buckets if b.on and b.definition.trimmable]
    if not cands:
        return None
    return min(cands, key=lambda b: b.order)


def trim(d: datetime, buckets: Iterable[BucketState]) -> datetime:
    """Drop the date parts finer than the smallest one we track.

    Without this, a search step that lands on the same day as the most recent
    date but a few hours later would count as a new prediction. Only parts
    finer than the smallest trimmable bucket are touched; coarser parts are
    left as they are even if no bucket tracks them.
    """
    smallest = smallest_trimmable(buckets)
    if smallest is None:
        return d
    return truncate(d, smallest.definition.accessor)
