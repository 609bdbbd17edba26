from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable

from .catalog import DISTINCT_ALIASES, BucketDefinition


@dataclass
class BucketState:
    """Occurrence counts for one bucket plus the statistics derived from them."""

    definition: BucketDefinition
    on: bool = True
    counts: Counter = field(default_factory=Counter)
    mean: float = 0.0
    variance: float = 0.0
    stdev: float = 0.0

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def order(self) -> int:
        return self.definition.order

    @property
    def off(self) -> bool:
        return not self.on

    @property
    def occurrences(self) -> int:
        return sum(self.counts.values())

    def record(self, value: int) -> None:
        self.counts[value] += 1

    def reset(self) -> None:
        self.counts = Counter()
        self.mean = self.variance = self.stdev = 0.0


class Profile:
    """The set of buckets a predictor trains and searches on.

    Buckets are kept even when switched off so they can be switched back on;
    only buckets that are on take part in training and prediction.
    """

    def __init__(self, distinct: Iterable[BucketDefinition] = (), interval: Iterable[BucketDefinition] = ()) -> None:
        self._buckets: dict[str, BucketState] = {}
        for d in list(distinct) + list(interval):
            self._buckets[d.name] = BucketState(definition=d)

    def bucket(self, name: str) -> BucketState | None:
        return self._buckets.get(DISTINCT_ALIASES.get(name, name))

    def buckets(self, *names: str) -> list[BucketState]:
        if not names:
            return list(self._buckets.values())
        out: list[BucketState] = []
        for n in names:
            b = self.bucket(n)
            if b is not None:
                out.append(b)
        return out

    def distinct_buckets(self, *, active_only: bool = True) -> list[BucketState]:
        return self._of_kind("distinct", active_only)

    def interval_buckets(self, *, active_only: bool = True) -> list[BucketState]:
        return self._of_kind("interval", active_only)

    def _of_kind(self, kind: str, active_only: bool) -> list[BucketState]:
        # Coarse to fine; ties keep declaration order.
        out = [b for b in self._buckets.values() if b.definition.kind == kind and (b.on or not active_only)]
        out.sort(key=lambda b: b.order, reverse=True)
        return out

    def reset(self) -> None:
        for b in self._buckets.values():
            b.reset()

    def __repr__(self) -> str:
        on = [b.name for b in self._buckets.values() if b.on]
        return f"Profile(on={on})"
