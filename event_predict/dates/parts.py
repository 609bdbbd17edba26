from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable

from dateutil.relativedelta import relativedelta

from ..errors import MissingCapability

EPOCH = datetime(1970, 1, 1)
EPOCH_UTC = EPOCH.replace(tzinfo=timezone.utc)


def _day_of_quarter(d: datetime) -> int:
    start = d.replace(month=3 * ((d.month - 1) // 3) + 1, day=1)
    return (d.date() - start.date()).days + 1


def _week_of_month(d: datetime) -> int:
    # Weeks start on Monday; week 1 is the one holding the month's first Thursday.
    thursday = d.day + 4 - d.isoweekday()
    return (thursday + 6) // 7


DATE_ACCESSORS: dict[str, Callable[[datetime], int]] = {
    "year": lambda d: d.year,
    "quarter": lambda d: (d.month - 1) // 3 + 1,
    "month": lambda d: d.month,
    "week_number": lambda d: d.isocalendar()[1],
    "week_of_month": _week_of_month,
    "day_of_year": lambda d: d.timetuple().tm_yday,
    "day_of_quarter": _day_of_quarter,
    "day": lambda d: d.day,
    "weekday": lambda d: (d.day + 6) // 7,
    "day_of_week": lambda d: d.isoweekday(),
    "hour": lambda d: d.hour,
    "minute": lambda d: d.minute,
    "second": lambda d: d.second,
    "nanosecond": lambda d: d.microsecond * 1000,
}


@dataclass(frozen=True)
class Duration:
    """Elapsed time between two dates, split into calendar components.

    Components follow the usual "largest unit first" split: ``weeks`` takes
    whole weeks out of the day count and ``days`` is what remains.
    """

    delta: relativedelta
    total_seconds: float

    @property
    def years(self) -> int:
        return abs(self.delta.years)

    @property
    def months(self) -> int:
        return abs(self.delta.months)

    @property
    def weeks(self) -> int:
        return abs(self.delta.days) // 7

    @property
    def days(self) -> int:
        return abs(self.delta.days) % 7

    @property
    def hours(self) -> int:
        return abs(self.delta.hours)

    @property
    def minutes(self) -> int:
        return abs(self.delta.minutes)

    @property
    def seconds(self) -> int:
        return abs(self.delta.seconds)

    @property
    def nanoseconds(self) -> int:
        return abs(self.delta.microseconds) * 1000


DURATION_ACCESSORS: dict[str, Callable[[Duration], int]] = {
    "years": lambda dur: dur.years,
    "months": lambda dur: dur.months,
    "weeks": lambda dur: dur.weeks,
    "days": lambda dur: dur.days,
    "hours": lambda dur: dur.hours,
    "minutes": lambda dur: dur.minutes,
    "seconds": lambda dur: dur.seconds,
    "nanoseconds": lambda dur: dur.nanoseconds,
}

# Fields zeroed (or reset to their first value) when truncating to a granularity.
_TIME_FIELDS = ("hour", "minute", "second", "microsecond")
TRUNCATE_FIELDS: dict[str, tuple[str, ...]] = {
    "nanosecond": (),
    "second": ("microsecond",),
    "minute": ("second", "microsecond"),
    "hour": ("minute", "second", "microsecond"),
    "day": _TIME_FIELDS,
    "month": ("day",) + _TIME_FIELDS,
    "quarter": ("month", "day") + _TIME_FIELDS,
    "year": ("month", "day") + _TIME_FIELDS,
}

SHIFT_UNITS = ("years", "quarters", "months", "weeks", "days", "hours", "minutes", "seconds", "nanoseconds")

# Bucket units per representable step; datetime resolution stops at microseconds.
STEP_SCALE: dict[str, int] = {"nanoseconds": 1000}


def _require_datetime(value: object, what: str) -> datetime:
    if not isinstance(value, datetime):
        raise MissingCapability(f"Can't read {what} from {type(value).__name__} value: {value!r}")
    return value


def read_date_part(d: object, accessor: str) -> int:
    """Return the named calendar component of ``d``."""
    fn = DATE_ACCESSORS[accessor]
    return fn(_require_datetime(d, accessor))


def read_duration_part(dur: object, accessor: str) -> int:
    fn = DURATION_ACCESSORS[accessor]
    if not isinstance(dur, Duration):
        raise MissingCapability(f"Can't read {accessor} from {type(dur).__name__} value: {dur!r}")
    return fn(dur)


def epoch_seconds(d: datetime) -> float:
    """High-resolution epoch value; naive datetimes are read as UTC."""
    if d.tzinfo is None:
        return (d - EPOCH).total_seconds()
    return (d - EPOCH_UTC).total_seconds()


def between(later: object, earlier: object) -> Duration:
    """Duration from ``earlier`` to ``later`` (calendar aware)."""
    a = _require_datetime(later, "duration")
    b = _require_datetime(earlier, "duration")
    return Duration(delta=relativedelta(a, b), total_seconds=epoch_seconds(a) - epoch_seconds(b))


def shift(d: datetime, unit: str, amount: int) -> datetime:
    """Return ``d`` moved by ``amount`` units; ``d`` itself is left alone."""
    if amount == 0:
        return d
    if unit == "quarters":
        return d + relativedelta(months=3 * amount)
    if unit == "nanoseconds":
        # datetime resolution stops at microseconds.
        return d + relativedelta(microseconds=int(amount / 1000))
    if unit not in SHIFT_UNITS:
        raise ValueError(f"Unsupported shift unit: {unit}")
    return d + relativedelta(**{unit: amount})


def add_seconds(d: datetime, seconds: float) -> datetime:
    return d + timedelta(seconds=seconds)


def truncate(d: datetime, to: str) -> datetime:
    """Zero every component of ``d`` finer than ``to`` (no rounding)."""
    fields = TRUNCATE_FIELDS[to]
    if not fields:
        return d
    repl: dict[str, int] = {f: 0 for f in fields}
    for f in ("month", "day"):
        if f in repl:
            repl[f] = 1
    if to == "quarter":
        repl["month"] = 3 * ((d.month - 1) // 3) + 1
    return d.replace(**repl)
