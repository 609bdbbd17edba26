from __future__ import annotations

from typing import Mapping, Sequence

from ..dates import DATE_ACCESSORS, DURATION_ACCESSORS
from ..errors import InvalidConfiguration
from .base import Profile
from .catalog import PROFILES, BucketDefinition, lookup_distinct, lookup_interval


def _resolve(names: Sequence[str], kind: str) -> list[BucketDefinition]:
    if isinstance(names, str) or not isinstance(names, (list, tuple)):
        raise InvalidConfiguration(f"{kind}_buckets must be a list of bucket names, got {type(names).__name__}")

    lookup = lookup_distinct if kind == "distinct" else lookup_interval
    table = DATE_ACCESSORS if kind == "distinct" else DURATION_ACCESSORS

    out: list[BucketDefinition] = []
    seen: set[str] = set()
    for n in names:
        d = lookup(str(n))
        if d is None:
            raise InvalidConfiguration(f"Undefined {kind} bucket: {n!r}")
        if d.accessor not in table:
            raise InvalidConfiguration(f"Bucket {d.name!r} has no accessor {d.accessor!r}")
        if d.name in seen:
            continue
        seen.add(d.name)
        out.append(d)
    return out


def build_profile(
    profile: str | None = None,
    *,
    distinct_buckets: Sequence[str] | None = None,
    interval_buckets: Sequence[str] | None = None,
) -> Profile:
    """Profile factory.

    Either name a preset (see ``PROFILES``) or list the buckets to use. A preset
    wins over explicit lists, as it always has.
    """
    if profile:
        preset = PROFILES.get(profile)
        if preset is None:
            raise InvalidConfiguration(f"Undefined profile: {profile!r} (known: {', '.join(sorted(PROFILES))})")
        distinct_buckets = preset.get("distinct_buckets", ())
        interval_buckets = preset.get("interval_buckets", ())
    elif not distinct_buckets and not interval_buckets:
        raise InvalidConfiguration("Must specify either a profile or a custom set of buckets")

    return Profile(
        distinct=_resolve(distinct_buckets or (), "distinct"),
        interval=_resolve(interval_buckets or (), "interval"),
    )


def coerce_profile(value: object) -> Profile:
    """Accept a preset name, a mapping of ``build_profile`` options, or a Profile."""
    if isinstance(value, Profile):
        return value
    if isinstance(value, str):
        return build_profile(value)
    if isinstance(value, Mapping):
        unknown = set(value) - {"profile", "distinct_buckets", "interval_buckets"}
        if unknown:
            raise InvalidConfiguration(f"Unknown profile option(s): {', '.join(sorted(unknown))}")
        return build_profile(
            value.get("profile"),
            distinct_buckets=value.get("distinct_buckets"),
            interval_buckets=value.get("interval_buckets"),
        )
    raise InvalidConfiguration(f"Unsupported profile value: {value!r}")
