from __future__ import annotations

from hit_object_models import HitObject, HitObjectKind, make_point
from timeline import Timeline
from window_oracle import (
    adjusted_end_time,
    loaded_window,
    loaded_window_padded,
    search_end_times,
    search_end_times_padded,
    window_contains,
)


def test_adjusted_end_time_by_kind(params) -> None:
    assert adjusted_end_time(make_point(200), params) == 260
    assert adjusted_end_time(HitObject(start_time=0, end_time=700, kind=HitObjectKind.HELD_RANGE), params) == 710
    assert adjusted_end_time(HitObject(start_time=0, end_time=700, kind=HitObjectKind.CHANNELED_RANGE), params) == 710


def test_adjusted_end_time_other_kind_takes_the_later_margin(params) -> None:
    short_hold = HitObject(start_time=0, end_time=30, kind=HitObjectKind.HOLD_NOTE)
    long_hold = HitObject(start_time=0, end_time=700, kind=HitObjectKind.HOLD_NOTE)
    assert adjusted_end_time(short_hold, params) == 60
    assert adjusted_end_time(long_hold, params) == 710


def test_search_matches_bisect_on_sorted_end_times() -> None:
    timeline = Timeline([make_point(time) for time in (0, 100, 200, 300, 400)])
    assert search_end_times(timeline, -5) == 0
    assert search_end_times(timeline, 150) == 2
    assert search_end_times(timeline, 300) == 3
    assert search_end_times(timeline, 999) == 5


def test_search_is_steered_by_early_end_times(spinner_hit_objects) -> None:
    timeline = Timeline(spinner_hit_objects)
    assert search_end_times(timeline, 200) == 1
    assert search_end_times(timeline, 0) == 0


def test_padded_search_uses_virtual_indices(spinner_hit_objects) -> None:
    timeline = Timeline(spinner_hit_objects)
    assert search_end_times_padded(timeline, 200, 1, 0) == 0
    assert search_end_times_padded(timeline, 200, 0, 1) == 1
    assert search_end_times_padded(timeline, 9999, 0, 3) == 3


def test_loaded_window_keeps_first_object_past_the_edge(params) -> None:
    timeline = Timeline([make_point(time) for time in (0, 1000, 2000, 3000, 4000)])
    assert loaded_window(timeline, params, 1500) == (1, 3)


def test_loaded_window_extends_to_the_end(params, spinner_hit_objects) -> None:
    timeline = Timeline(spinner_hit_objects)
    window = loaded_window(timeline, params, 1200)
    assert window == (1, 2)
    assert not window_contains(window, 0)


def test_loaded_window_past_the_end_is_empty(params) -> None:
    timeline = Timeline([make_point(0), make_point(10)])
    low, high = loaded_window(timeline, params, 5000)
    assert low == 2
    assert high < low


def test_zero_padding_is_identical_to_unpadded(params, spinner_hit_objects, two_spinner_hit_objects) -> None:
    for hit_objects in (spinner_hit_objects, two_spinner_hit_objects):
        timeline = Timeline(hit_objects)
        for time in range(-2000, 17000, 13):
            assert loaded_window_padded(timeline, params, time, 0, 0) == loaded_window(timeline, params, time)
