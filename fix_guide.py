# -*- coding: utf-8 -*-
########################
# fix_guide.py
########################
# Purpose:
# - Describe a padding solution as a human-readable placement guide.
# - Apply an accepted solution by inserting filler objects into the Timeline.
#
# Design notes:
# - No Qt usage. Text rendering and Timeline mutation only.
# - Gaps are bounded by problem areas: gap i ends at the start of area i, and the next gap starts
#   where area i stops needing to be loaded (adjusted end time minus approach time).
# - All fillers for one gap share a single safe time; only their count shifts the engine search.
#
########################
# Interfaces:
# Public exceptions:
# - class NoSafePlacementError(Exception)
#
# Public functions:
# - gap_bounds(problem_areas: Sequence[ProblemArea], params: WindowParameters, timeline_end: int) -> list[tuple[int, int]]
# - render_fix_guide(problem_areas: Sequence[ProblemArea], params: WindowParameters, solution: Sequence[int]) -> str
# - safe_placement_time(timeline: Timeline, params: WindowParameters, start: int, end: int) -> int
# - apply_solution(timeline: Timeline, params: WindowParameters, problem_areas: Sequence[ProblemArea], solution: Sequence[int]) -> list[HitObject]
#
# Inputs:
# - Problem areas from problem_detector.py and a solution from padding_solver.py.
#
# Outputs:
# - Guide text for the fix dialogue, and the inserted filler objects.
#
########################

from __future__ import annotations

from typing import List, Sequence, Tuple

from hit_object_models import HitObject, HitObjectKind, make_filler, make_point
from problem_detector import ProblemArea, detect_problems
from timeline import Timeline
from window_oracle import WindowParameters, adjusted_end_time


class NoSafePlacementError(Exception):
    """Raised when every integer time in a gap is covered by an object that must stay loaded."""


def _area_release_time(problem_area: ProblemArea, params: WindowParameters) -> int:
    return int(problem_area.adjusted_end_time) - int(params.approach_time)


def gap_bounds(problem_areas: Sequence[ProblemArea], params: WindowParameters, timeline_end: int) -> List[Tuple[int, int]]:
    bounds: List[Tuple[int, int]] = []
    last_time = 0
    for problem_area in problem_areas:
        bounds.append((last_time, problem_area.start_time))
        last_time = _area_release_time(problem_area, params)
    bounds.append((last_time, int(timeline_end)))
    return bounds


def render_fix_guide(problem_areas: Sequence[ProblemArea], params: WindowParameters, solution: Sequence[int]) -> str:
    lines = ["Auto-fail fix guide. Place these extra objects to fix auto-fail:", ""]
    last_time = 0
    for area_index, problem_area in enumerate(problem_areas):
        if area_index == 0:
            lines.append(f"Extra objects before {problem_area.start_time}: {solution[area_index]}")
        else:
            lines.append(f"Extra objects between {last_time} - {problem_area.start_time}: {solution[area_index]}")
        last_time = _area_release_time(problem_area, params)
    lines.append(f"Extra objects after {last_time}: {solution[-1]}")
    return "\n".join(lines)


def safe_placement_time(timeline: Timeline, params: WindowParameters, start: int, end: int) -> int:
    """Latest time in [start, end) where no object overlapping the gap still needs to be loaded."""
    start = int(start)
    end = int(end)
    approach_time = int(params.approach_time)
    covering: List[Tuple[int, int]] = [
        (int(hit_object.start_time), adjusted_end_time(hit_object, params) - approach_time)
        for hit_object in timeline
        if int(hit_object.end_time) >= start and int(hit_object.start_time) <= end
    ]

    for time in range(end - 1, start - 1, -1):
        if not any(cover_start <= time <= cover_end for cover_start, cover_end in covering):
            return time

    raise NoSafePlacementError(f"Can't find a safe place to place objects between {start} and {end}.")


def apply_solution(
    timeline: Timeline,
    params: WindowParameters,
    problem_areas: Sequence[ProblemArea],
    solution: Sequence[int],
) -> List[HitObject]:
    if len(solution) != len(problem_areas) + 1:
        raise ValueError(f"Solution needs {len(problem_areas) + 1} gap counts, got {len(solution)}.")

    # Placement times are resolved against the unpadded timeline before anything is inserted.
    fillers: List[HitObject] = []
    for (gap_start, gap_end), count in zip(gap_bounds(problem_areas, params, timeline.max_end_time()), solution):
        if int(count) <= 0:
            continue
        time = safe_placement_time(timeline, params, gap_start, gap_end)
        fillers.extend(make_filler(time) for _ in range(int(count)))

    timeline.insert(fillers)
    return fillers


def _run_unit_tests() -> None:
    params = WindowParameters(approach_time=1000, hit_window_50=50, physics_margin=10)
    spinner = HitObject(start_time=100, end_time=5000, kind=HitObjectKind.CHANNELED_RANGE)
    timeline = Timeline([spinner, make_point(200), make_point(300)])
    problem_areas = detect_problems(timeline, params).problem_areas

    guide = render_fix_guide(problem_areas, params, [1, 0])
    assert "Extra objects before 100: 1" in guide
    assert guide.endswith("Extra objects after 4010: 0")

    try:
        safe_placement_time(timeline, params, 200, 300)
    except NoSafePlacementError:
        pass
    else:
        raise AssertionError("gap covered by the spinner must be rejected")

    fillers = apply_solution(timeline, params, problem_areas, [1, 0])
    assert fillers == [make_filler(99)]
    assert timeline[0] == make_filler(99)
    assert not detect_problems(timeline, params).has_auto_fail


if __name__ == "__main__":
    _run_unit_tests()
    print("fix_guide.py: ok")
