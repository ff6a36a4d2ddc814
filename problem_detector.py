# -*- coding: utf-8 -*-
########################
# problem_detector.py
########################
# Purpose:
# - Find every object that some later object could push out of the engine's loading window.
# - Confirm which of those candidates the real engine search actually unloads.
#
# Design notes:
# - No Qt usage. Pure analysis over an unchanging Timeline.
# - Candidate areas are reduced while scanning: an area whose adjusted end time or
#   times-to-check are contained in the last accepted area is dropped, because padding
#   that fixes the outer area fixes the inner one too.
# - Candidates that never unload stay in the report; the padding solver still covers them.
#
########################
# Interfaces:
# Public dataclasses:
# - ProblemArea(index: int, unloadable_object: HitObject, adjusted_end_time: int,
#               disruptors: tuple[HitObject, ...], times_to_check: tuple[int, ...])
# - DetectionReport(problem_areas: list[ProblemArea], unloading_objects: list[int],
#                   potential_unloading_objects: list[int], disruptors: list[int])
#   - has_auto_fail -> bool
#
# Public functions:
# - boundary_times(timeline: Timeline, params: WindowParameters) -> list[int]
# - find_problem_areas(timeline: Timeline, params: WindowParameters, *, disruptor_times: Optional[list[int]] = None) -> list[ProblemArea]
# - is_unloaded(timeline: Timeline, params: WindowParameters, problem_area: ProblemArea) -> bool
# - detect_problems(timeline: Timeline, params: WindowParameters) -> DetectionReport
#
# Inputs:
# - Timeline and WindowParameters.
#
# Outputs:
# - DetectionReport consumed by padding_solver.py, fix_guide.py and reporting layers.
#
########################

from __future__ import annotations

import bisect
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from hit_object_models import HitObject, HitObjectKind, make_point
from timeline import Timeline
from window_oracle import WindowParameters, adjusted_end_time, loaded_window, window_contains


@dataclass(frozen=True)
class ProblemArea:
    index: int
    unloadable_object: HitObject
    adjusted_end_time: int
    disruptors: Tuple[HitObject, ...]
    times_to_check: Tuple[int, ...]

    @property
    def start_time(self) -> int:
        return int(self.unloadable_object.start_time)

    @property
    def end_time(self) -> int:
        return int(self.unloadable_object.end_time)


@dataclass(frozen=True)
class DetectionReport:
    problem_areas: List[ProblemArea] = field(default_factory=list)
    unloading_objects: List[int] = field(default_factory=list)
    potential_unloading_objects: List[int] = field(default_factory=list)
    disruptors: List[int] = field(default_factory=list)

    @property
    def has_auto_fail(self) -> bool:
        return len(self.unloading_objects) > 0


def boundary_times(timeline: Timeline, params: WindowParameters) -> List[int]:
    """Sorted unique query times at which the engine's window lower bound can change."""
    times = set()
    for hit_object in timeline:
        boundary = int(hit_object.end_time) + int(params.approach_time)
        times.add(boundary)
        times.add(boundary + 1)
    return sorted(times)


def _times_between(sorted_times: List[int], start: int, end: int) -> Tuple[int, ...]:
    low = bisect.bisect_left(sorted_times, start)
    high = bisect.bisect_right(sorted_times, end)
    return tuple(sorted_times[low:high])


def find_problem_areas(
    timeline: Timeline,
    params: WindowParameters,
    *,
    disruptor_times: Optional[List[int]] = None,
) -> List[ProblemArea]:
    """Scan for objects that a later, earlier-ending object could unload.

    Every scanned disruptor start time is appended to `disruptor_times` when it is given,
    including disruptors of candidates that later turn out to be redundant.
    """
    approach_time = int(params.approach_time)
    checkpoints = boundary_times(timeline, params)
    problem_areas: List[ProblemArea] = []

    for index in range(len(timeline)):
        hit_object = timeline[index]
        adjusted_end = adjusted_end_time(hit_object, params)

        if problem_areas and adjusted_end <= problem_areas[-1].adjusted_end_time:
            continue

        disruptors: List[HitObject] = []
        for later_index in range(index + 1, len(timeline)):
            later_object = timeline[later_index]
            if int(later_object.end_time) < adjusted_end - approach_time:
                disruptors.append(later_object)
                if disruptor_times is not None:
                    disruptor_times.append(int(later_object.start_time))

        if not disruptors:
            continue

        times_to_check = _times_between(checkpoints, int(hit_object.start_time), adjusted_end)

        if problem_areas and set(times_to_check).issubset(problem_areas[-1].times_to_check):
            continue

        problem_areas.append(
            ProblemArea(
                index=index,
                unloadable_object=hit_object,
                adjusted_end_time=adjusted_end,
                disruptors=tuple(disruptors),
                times_to_check=times_to_check,
            )
        )

    return problem_areas


def is_unloaded(timeline: Timeline, params: WindowParameters, problem_area: ProblemArea) -> bool:
    for time in problem_area.times_to_check:
        if not window_contains(loaded_window(timeline, params, time), problem_area.index):
            return True
    return False


def detect_problems(timeline: Timeline, params: WindowParameters) -> DetectionReport:
    disruptor_times: List[int] = []
    problem_areas = find_problem_areas(timeline, params, disruptor_times=disruptor_times)

    unloading_objects = [
        area.start_time for area in problem_areas if is_unloaded(timeline, params, area)
    ]

    return DetectionReport(
        problem_areas=problem_areas,
        unloading_objects=unloading_objects,
        potential_unloading_objects=[area.start_time for area in problem_areas],
        disruptors=disruptor_times,
    )


def _run_unit_tests() -> None:
    params = WindowParameters(approach_time=1000, hit_window_50=50, physics_margin=10)
    spinner = HitObject(start_time=100, end_time=5000, kind=HitObjectKind.CHANNELED_RANGE)
    timeline = Timeline([spinner, make_point(200), make_point(300)])

    report = detect_problems(timeline, params)
    assert report.has_auto_fail
    assert [area.index for area in report.problem_areas] == [0]
    assert report.problem_areas[0].times_to_check == (1200, 1201, 1300, 1301)
    assert report.unloading_objects == [100]
    assert report.disruptors == [200, 300]

    lockstep = Timeline([make_point(time) for time in range(0, 5000, 250)])
    assert detect_problems(lockstep, params) == DetectionReport()


if __name__ == "__main__":
    _run_unit_tests()
    print("problem_detector.py: ok")
