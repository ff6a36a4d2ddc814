from __future__ import annotations

import pytest

from hit_object_models import HitObject, HitObjectKind, make_filler, make_point
from timeline import MalformedTimelineError, Timeline


def test_timeline_sorts_by_start_time() -> None:
    timeline = Timeline([make_point(300), make_point(100), make_point(200)])
    assert [item.start_time for item in timeline] == [100, 200, 300]


def test_timeline_sort_is_stable_for_equal_start_times() -> None:
    slider = HitObject(start_time=100, end_time=400, kind=HitObjectKind.HELD_RANGE)
    point = make_point(100)
    timeline = Timeline([slider, point])
    assert timeline.objects() == [slider, point]


def test_insert_resorts_and_range_slices() -> None:
    timeline = Timeline([make_point(100), make_point(300)])
    timeline.insert([make_filler(200), make_filler(200)])
    assert [item.start_time for item in timeline] == [100, 200, 200, 300]
    assert timeline.range(1, 2) == [make_filler(200), make_filler(200)]
    assert timeline.range(3, 5) == [make_point(300)]
    assert timeline.range(0, 0) == []


def test_max_end_time_uses_end_times() -> None:
    timeline = Timeline(
        [
            HitObject(start_time=0, end_time=9000, kind=HitObjectKind.CHANNELED_RANGE),
            make_point(5000),
        ]
    )
    assert timeline.max_end_time() == 9000


def test_empty_timeline_is_rejected() -> None:
    with pytest.raises(MalformedTimelineError):
        Timeline([])


def test_reversed_end_time_is_rejected() -> None:
    with pytest.raises(MalformedTimelineError):
        Timeline([make_point(0), HitObject(start_time=10000, end_time=0)])


def test_insert_rejects_reversed_end_time() -> None:
    timeline = Timeline([make_point(0)])
    with pytest.raises(MalformedTimelineError):
        timeline.insert([HitObject(start_time=50, end_time=49)])
    assert len(timeline) == 1
