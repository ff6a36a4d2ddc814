# -*- coding: utf-8 -*-
########################
# timeline.py
########################
# Purpose:
# - Own the ordered list of hit objects that every detection and solve pass reads.
# - Provide slice and extent queries used by the window oracle and the fix applier.
#
# Design notes:
# - No Qt usage. Pure data structure.
# - Order is deterministic: sort by start_time, stable for equal start times.
# - Malformed input is rejected on the way in, never discovered mid-algorithm.
# - Inserting objects invalidates any DetectionReport computed earlier.
#
########################
# Interfaces:
# Public exceptions:
# - class MalformedTimelineError(ValueError)
#
# Public classes:
# - class Timeline
#   - __init__(hit_objects: Iterable[HitObject])
#   - objects() -> list[HitObject]
#   - insert(hit_objects: Iterable[HitObject]) -> None
#   - range(start_index: int, count: int) -> list[HitObject]
#   - max_end_time() -> int
#   - start_time_at(index: int) -> int
#   - end_time_at(index: int) -> int
#
# Inputs:
# - Any iterable of HitObject, in any order.
#
# Outputs:
# - Sorted views for window_oracle.py, problem_detector.py and fix_guide.py.
#
########################

from __future__ import annotations

from typing import Iterable, Iterator, List

from hit_object_models import HitObject, HitObjectKind, make_point


class MalformedTimelineError(ValueError):
    """Raised when hit objects cannot form a valid timeline (empty, or an end before its start)."""


def _validate_hit_objects(hit_objects: List[HitObject]) -> None:
    for hit_object in hit_objects:
        if not isinstance(hit_object.kind, HitObjectKind):
            raise MalformedTimelineError(f"Hit object at {hit_object.start_time} has unknown kind: {hit_object.kind!r}")
        if int(hit_object.end_time) < int(hit_object.start_time):
            raise MalformedTimelineError(
                f"Hit object at {hit_object.start_time} ends before it starts (end time {hit_object.end_time})."
            )


def _sort_key(hit_object: HitObject) -> int:
    return int(hit_object.start_time)


class Timeline:
    def __init__(self, hit_objects: Iterable[HitObject]) -> None:
        objects_list = list(hit_objects)
        if not objects_list:
            raise MalformedTimelineError("Timeline needs at least one hit object.")
        _validate_hit_objects(objects_list)
        self._hit_objects: List[HitObject] = sorted(objects_list, key=_sort_key)

    def __len__(self) -> int:
        return len(self._hit_objects)

    def __iter__(self) -> Iterator[HitObject]:
        return iter(self._hit_objects)

    def __getitem__(self, index: int) -> HitObject:
        return self._hit_objects[index]

    def objects(self) -> List[HitObject]:
        return list(self._hit_objects)

    def insert(self, hit_objects: Iterable[HitObject]) -> None:
        new_objects = list(hit_objects)
        if not new_objects:
            return
        _validate_hit_objects(new_objects)
        self._hit_objects.extend(new_objects)
        self._hit_objects.sort(key=_sort_key)

    def range(self, start_index: int, count: int) -> List[HitObject]:
        if count <= 0:
            return []
        start = max(0, int(start_index))
        return self._hit_objects[start:start + int(count)]

    def max_end_time(self) -> int:
        return max(int(hit_object.end_time) for hit_object in self._hit_objects)

    def start_time_at(self, index: int) -> int:
        return int(self._hit_objects[index].start_time)

    def end_time_at(self, index: int) -> int:
        return int(self._hit_objects[index].end_time)


def _run_unit_tests() -> None:
    timeline = Timeline([make_point(300), make_point(100), make_point(200)])
    assert [item.start_time for item in timeline] == [100, 200, 300]
    assert timeline.max_end_time() == 300

    timeline.insert([make_point(150)])
    assert [item.start_time for item in timeline.range(0, 3)] == [100, 150, 200]
    assert timeline.range(3, 10) == [make_point(300)]

    try:
        Timeline([])
    except MalformedTimelineError:
        pass
    else:
        raise AssertionError("empty timeline must be rejected")

    try:
        Timeline([HitObject(start_time=10, end_time=5)])
    except MalformedTimelineError:
        pass
    else:
        raise AssertionError("reversed end time must be rejected")


if __name__ == "__main__":
    _run_unit_tests()
    print("timeline.py: ok")
