from __future__ import annotations

from datetime import datetime, timedelta

from event_predict.predict import PredictOptions, SearchContext, accept_distinct, search_distinct
from event_predict.predict.search import descend, offsets, search_range
from event_predict.profile import DISTINCT_BUCKETS, BucketState

MOST_RECENT = datetime(2009, 12, 17)
START = datetime(2009, 12, 18)


def _state(name: str, mean: float, stdev: float) -> BucketState:
    return BucketState(definition=DISTINCT_BUCKETS[name], mean=mean, stdev=stdev)


def _accept_all(d: datetime) -> float:
    return 0.0


def test_offsets_and_window() -> None:
    assert list(offsets(2)) == [0, 1, -1, 2, -2]
    assert list(offsets(0)) == [0]
    assert search_range(0.0, 2) == 0
    assert search_range(1.2, 2) == 3


def test_single_bucket_checks_leaves_in_offset_order() -> None:
    ctx = descend(
        SearchContext(
            start=START,
            most_recent=MOST_RECENT,
            buckets=[_state("day_of_week", 4.0, 1.0)],
            accept=_accept_all,
            options=PredictOptions(),
        )
    )

    # offsets 0, +1, -1, +2, -2; -1 and -2 are not after the most recent date
    assert [c.date for c in ctx.predictions.values()] == [START, START + timedelta(days=1), START + timedelta(days=2)]
    assert not ctx.stopped


def test_max_predictions_stops_the_search() -> None:
    ctx = descend(
        SearchContext(
            start=START,
            most_recent=MOST_RECENT,
            buckets=[_state("day_of_year", 100.0, 3.0), _state("day_of_week", 4.0, 2.0)],
            accept=_accept_all,
            options=PredictOptions(max_predictions=2),
        )
    )
    assert len(ctx.predictions) == 2
    assert ctx.stopped


def test_descent_is_depth_first_coarse_to_fine() -> None:
    ctx = descend(
        SearchContext(
            start=START,
            most_recent=MOST_RECENT,
            buckets=[_state("month_of_year", 6.0, 0.5), _state("day_of_week", 4.0, 0.0)],
            accept=_accept_all,
            options=PredictOptions(),
        )
    )
    # month offsets 0, +1, -1 (the last one falls before the most recent date)
    assert [c.date for c in ctx.predictions.values()] == [START, datetime(2010, 1, 18)]


def test_candidates_are_after_most_recent_and_min_date() -> None:
    min_date = datetime(2009, 12, 19)
    ctx = descend(
        SearchContext(
            start=START,
            most_recent=MOST_RECENT,
            buckets=[_state("day_of_week", 4.0, 2.0)],
            accept=_accept_all,
            options=PredictOptions(min_date=min_date),
        )
    )
    assert ctx.predictions
    assert all(c.date > min_date for c in ctx.predictions.values())


def test_no_buckets_with_callbacks_keeps_every_valid_candidate() -> None:
    def weekday(d: datetime) -> bool:
        return d.weekday() < 5

    opts = PredictOptions(callbacks=[weekday])
    ctx = descend(
        SearchContext(
            start=START,
            most_recent=MOST_RECENT,
            buckets=[_state("day_of_week", 4.0, 1.5)],
            accept=lambda d: accept_distinct(d, [], opts.callbacks),
            options=opts,
        )
    )
    # window 3 around Fri Dec 18: Dec 18..21 are after Dec 17; Sat/Sun fail the callback
    assert sorted(c.date for c in ctx.predictions.values()) == [datetime(2009, 12, 18), datetime(2009, 12, 21)]


def test_search_distinct_gates_on_bucket_statistics() -> None:
    dow = _state("day_of_week", 4.0, 1.0)
    ctx = search_distinct(START, MOST_RECENT, [dow], PredictOptions())
    # Fri (5) is within one stdev of Thursday, Sat/Sun are not
    assert [c.date for c in ctx.predictions.values()] == [START]
    assert ctx.predictions[next(iter(ctx.predictions))].deviation == 1.0


def test_trim_drops_a_same_day_candidate() -> None:
    most_recent = datetime(2009, 12, 17, 15, 30)
    dom = _state("day_of_month", 10.0, 1.0)
    ctx = descend(
        SearchContext(
            start=datetime(2009, 12, 17, 20, 0),
            most_recent=most_recent,
            buckets=[dom],
            accept=_accept_all,
            options=PredictOptions(),
            trim_buckets=[dom],
        )
    )
    # offset 0 trims to Dec 17 00:00, which is not after the most recent date
    assert [c.date for c in ctx.predictions.values()] == [datetime(2009, 12, 18), datetime(2009, 12, 19)]


def test_nanosecond_window_steps_whole_microseconds() -> None:
    start = MOST_RECENT + timedelta(seconds=1)
    ctx = descend(
        SearchContext(
            start=start,
            most_recent=MOST_RECENT,
            buckets=[_state("nanosecond", 500_000.0, 2_500.0)],
            accept=_accept_all,
            options=PredictOptions(),
        )
    )
    # 2.5us stdev * 2 -> 5 microsecond steps each way, every one a distinct date
    assert ctx.visited == 11
    assert len(ctx.predictions) == 11
    assert min(c.date for c in ctx.predictions.values()) == start - timedelta(microseconds=5)
