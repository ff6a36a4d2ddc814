# -*- coding: utf-8 -*-
########################
# window_oracle.py
########################
# Purpose:
# - Reproduce the engine's object loading window exactly.
# - The engine binary searches the start-time sorted object list by END time, so an object with
#   an unusually early end time can steer the search past objects that should still be loaded.
#
# Design notes:
# - No Qt usage. Pure functions of a Timeline plus WindowParameters.
# - The search must stay bug-compatible with the engine: exact hits return immediately,
#   misses return the insertion point, and the array is NOT assumed to be sorted by end time.
# - The padded variant pretends `left` objects with end time -inf sit before index 0 and `right`
#   objects with end time +inf sit after the last index. Results use the same virtual
#   coordinates, so real objects keep their indices.
#
########################
# Interfaces:
# Public dataclasses:
# - WindowParameters(approach_time: int, hit_window_50: int, physics_margin: int)
#
# Public functions:
# - adjusted_end_time(hit_object: HitObject, params: WindowParameters) -> int
# - search_end_times(timeline: Timeline, time: int) -> int
# - search_end_times_padded(timeline: Timeline, time: int, left: int, right: int) -> int
# - loaded_window(timeline: Timeline, params: WindowParameters, time: int) -> tuple[int, int]
# - loaded_window_padded(timeline: Timeline, params: WindowParameters, time: int, left: int, right: int) -> tuple[int, int]
# - window_contains(window: tuple[int, int], index: int) -> bool
#
# Inputs:
# - Timeline and integer times in milliseconds.
#
# Outputs:
# - Inclusive (low, high) index ranges. high < low means nothing is loaded.
#
########################

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from hit_object_models import HitObject, HitObjectKind, make_point
from timeline import Timeline


_NEGATIVE_INFINITY = float("-inf")
_POSITIVE_INFINITY = float("inf")


@dataclass(frozen=True)
class WindowParameters:
    approach_time: int
    hit_window_50: int
    physics_margin: int


def adjusted_end_time(hit_object: HitObject, params: WindowParameters) -> int:
    """Time after which the engine may unload the object without consequence."""
    point_end = int(hit_object.start_time) + int(params.hit_window_50) + int(params.physics_margin)
    ranged_end = int(hit_object.end_time) + int(params.physics_margin)

    if hit_object.kind is HitObjectKind.POINT:
        return point_end
    if hit_object.kind in (HitObjectKind.HELD_RANGE, HitObjectKind.CHANNELED_RANGE):
        return ranged_end
    return max(point_end, ranged_end)


def _binary_search(timeline: Timeline, time: int, low: int, high: int) -> int:
    last_index = len(timeline) - 1
    while low <= high:
        middle = low + (high - low) // 2
        if middle < 0:
            probe = _NEGATIVE_INFINITY
        elif middle > last_index:
            probe = _POSITIVE_INFINITY
        else:
            probe = timeline.end_time_at(middle)

        if time == probe:
            return middle
        if time > probe:
            low = middle + 1
        else:
            high = middle - 1

    return low


def search_end_times(timeline: Timeline, time: int) -> int:
    return _binary_search(timeline, int(time), 0, len(timeline) - 1)


def search_end_times_padded(timeline: Timeline, time: int, left: int, right: int) -> int:
    return _binary_search(timeline, int(time), -int(left), len(timeline) - 1 + int(right))


def _upper_index(timeline: Timeline, low: int, latest_start: int, last_virtual_index: int) -> int:
    # The engine keeps the first object past the window edge as well.
    for index in range(max(0, low), len(timeline)):
        if timeline.start_time_at(index) > latest_start:
            return index
    return last_virtual_index


def loaded_window(timeline: Timeline, params: WindowParameters, time: int) -> Tuple[int, int]:
    low = search_end_times(timeline, int(time) - int(params.approach_time))
    high = _upper_index(timeline, low, int(time) + int(params.approach_time), len(timeline) - 1)
    return (low, high)


def loaded_window_padded(
    timeline: Timeline,
    params: WindowParameters,
    time: int,
    left: int,
    right: int,
) -> Tuple[int, int]:
    low = search_end_times_padded(timeline, int(time) - int(params.approach_time), left, right)
    high = _upper_index(timeline, low, int(time) + int(params.approach_time), len(timeline) - 1 + int(right))
    return (low, high)


def window_contains(window: Tuple[int, int], index: int) -> bool:
    low, high = window
    return low <= int(index) <= high


def _run_unit_tests() -> None:
    params = WindowParameters(approach_time=1000, hit_window_50=50, physics_margin=10)
    spinner = HitObject(start_time=100, end_time=5000, kind=HitObjectKind.CHANNELED_RANGE)
    timeline = Timeline([spinner, make_point(200), make_point(300)])

    assert adjusted_end_time(spinner, params) == 5010
    assert adjusted_end_time(make_point(200), params) == 260
    hold = HitObject(start_time=0, end_time=30, kind=HitObjectKind.HOLD_NOTE)
    assert adjusted_end_time(hold, params) == 60

    # End times [5000, 200, 300]: the first probe hits index 1 and skips the spinner.
    assert search_end_times(timeline, 200) == 1
    assert loaded_window(timeline, params, 1200) == (1, 2)

    # One virtual object on the left moves the first probe onto the spinner.
    assert search_end_times_padded(timeline, 200, 1, 0) == 0

    for time in range(-2000, 7000, 37):
        assert loaded_window_padded(timeline, params, time, 0, 0) == loaded_window(timeline, params, time)


if __name__ == "__main__":
    _run_unit_tests()
    print("window_oracle.py: ok")
