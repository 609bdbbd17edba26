from __future__ import annotations

import pytest

from event_predict.errors import InvalidConfiguration
from event_predict.profile import DISTINCT_BUCKETS, build_profile, coerce_profile


def test_default_preset_orders_coarse_to_fine() -> None:
    p = build_profile("default")
    assert [b.name for b in p.distinct_buckets()] == ["day_of_year", "day_of_month", "day_of_week"]
    assert p.interval_buckets() == []


def test_unknown_preset_and_empty_profile_raise() -> None:
    with pytest.raises(InvalidConfiguration):
        build_profile("weekly")
    with pytest.raises(ValueError):
        build_profile()
    with pytest.raises(InvalidConfiguration):
        build_profile(distinct_buckets=["fortnight"])
    with pytest.raises(InvalidConfiguration):
        build_profile(distinct_buckets="day_of_week")  # type: ignore[arg-type]


def test_aliases_resolve_to_one_bucket() -> None:
    p = build_profile(distinct_buckets=["month", "month_of_year", "day"])
    assert [b.name for b in p.buckets()] == ["month_of_year", "day_of_month"]
    assert p.bucket("month") is p.bucket("month_of_year")
    assert p.bucket("year") is None


def test_switching_a_bucket_off_keeps_it_in_the_profile() -> None:
    p = build_profile(distinct_buckets=["day_of_week", "day_of_month"], interval_buckets=["days"])
    b = p.bucket("day_of_week")
    assert b is not None
    b.on = False

    assert b.off
    assert [x.name for x in p.distinct_buckets()] == ["day_of_month"]
    assert [x.name for x in p.distinct_buckets(active_only=False)] == ["day_of_month", "day_of_week"]
    assert [x.name for x in p.interval_buckets()] == ["days"]


def test_catalog_is_read_only() -> None:
    with pytest.raises(TypeError):
        DISTINCT_BUCKETS["fortnight"] = DISTINCT_BUCKETS["day"]  # type: ignore[index]


def test_coerce_profile_accepts_name_mapping_and_profile() -> None:
    p = build_profile("holiday")
    assert coerce_profile(p) is p
    assert [b.name for b in coerce_profile("daily").buckets()] == ["day_of_year"]
    assert [b.name for b in coerce_profile({"interval_buckets": ["years"]}).buckets()] == ["years"]

    with pytest.raises(InvalidConfiguration):
        coerce_profile({"buckets": ["day_of_week"]})
    with pytest.raises(InvalidConfiguration):
        coerce_profile(42)
