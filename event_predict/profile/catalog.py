from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Literal, Mapping

BucketKind = Literal["distinct", "interval"]


@dataclass(frozen=True)
class BucketDefinition:
    """A named channel of statistics over one date part or one interval part."""

    name: str
    kind: BucketKind
    accessor: str  # key into DATE_ACCESSORS / DURATION_ACCESSORS
    order: int  # larger = coarser, searched first
    duration: str | None = None  # step unit; distinct buckets only
    trimmable: bool = False

    @property
    def step_unit(self) -> str:
        # Interval buckets step by their own unit.
        return self.duration if self.kind == "distinct" and self.duration else self.accessor


def _distinct(name: str, accessor: str, duration: str, order: int, *, trimmable: bool = False) -> BucketDefinition:
    return BucketDefinition(
        name=name, kind="distinct", accessor=accessor, order=order, duration=duration, trimmable=trimmable
    )


def _interval(name: str, order: int) -> BucketDefinition:
    return BucketDefinition(name=name, kind="interval", accessor=name, order=order)


_distinct_defs = [
    _distinct("nanosecond", "nanosecond", "nanoseconds", 1, trimmable=True),
    _distinct("second", "second", "seconds", 4, trimmable=True),
    _distinct("minute", "minute", "minutes", 6, trimmable=True),
    _distinct("hour", "hour", "hours", 7, trimmable=True),
    _distinct("day_of_week", "day_of_week", "days", 8),
    _distinct("day_of_month", "day", "days", 9, trimmable=True),
    _distinct("day_of_quarter", "day_of_quarter", "days", 10),
    # n-th occurrence of the weekday in its month (June 9, 2003 is the 2nd Monday -> 2)
    _distinct("weekday_of_month", "weekday", "days", 11),
    _distinct("week_of_month", "week_of_month", "weeks", 12),
    _distinct("day_of_year", "day_of_year", "days", 13),
    _distinct("week_number", "week_number", "weeks", 14),
    _distinct("month_of_year", "month", "months", 15, trimmable=True),
    _distinct("quarter_of_year", "quarter", "quarters", 16),
    _distinct("year", "year", "years", 17),
]

_distinct_table: dict[str, BucketDefinition] = {b.name: b for b in _distinct_defs}

DISTINCT_ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "second_of_minute": "second",
        "minute_of_hour": "minute",
        "hour_of_day": "hour",
        "day": "day_of_month",
        "weekday": "weekday_of_month",
        "week_of_year": "week_number",
        "month": "month_of_year",
        "quarter": "quarter_of_year",
    }
)

DISTINCT_BUCKETS: Mapping[str, BucketDefinition] = MappingProxyType(_distinct_table)

INTERVAL_BUCKETS: Mapping[str, BucketDefinition] = MappingProxyType(
    {
        b.name: b
        for b in (
            _interval("nanoseconds", 0),
            _interval("seconds", 1),
            _interval("minutes", 2),
            _interval("hours", 3),
            _interval("days", 4),
            _interval("weeks", 5),
            _interval("months", 6),
            _interval("years", 7),
        )
    }
)

PROFILES: Mapping[str, Mapping[str, tuple[str, ...]]] = MappingProxyType(
    {
        "default": MappingProxyType({"distinct_buckets": ("day_of_week", "day_of_month", "day_of_year")}),
        "holiday": MappingProxyType({"distinct_buckets": ("day_of_year", "day_of_week")}),
        "daily": MappingProxyType({"distinct_buckets": ("day_of_year",)}),
    }
)


def lookup_distinct(name: str) -> BucketDefinition | None:
    canonical = DISTINCT_ALIASES.get(name, name)
    return DISTINCT_BUCKETS.get(canonical)


def lookup_interval(name: str) -> BucketDefinition | None:
    return INTERVAL_BUCKETS.get(name)
