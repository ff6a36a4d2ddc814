# -*- coding: utf-8 -*-
########################
# padding_solver.py
########################
# Purpose:
# - Find how many filler objects to insert into each gap between problem areas so that
#   the engine's search never skips a problem area's object.
# - Generate candidate solutions lazily, cheapest total first.
#
# Design notes:
# - No Qt usage. Pure search over the padded window oracle; the Timeline is never mutated.
# - A solution has one count per problem area (the gap before it) plus a trailing gap.
# - Left padding is cumulative: every filler placed before area i is also before area i + 1,
#   so the cumulative left counts of a solution never decrease.
# - The candidate sequence only ends when max_padding_count is reached.
#
########################
# Interfaces:
# Public classes:
# - class PaddingSolver
#   - __init__(timeline: Timeline, params: WindowParameters, problem_areas: Sequence[ProblemArea],
#              *, max_padding_count: Optional[int] = None)
#   - padding_works(problem_area: ProblemArea, left: int, right: int) -> bool
#   - solve_single_problem_area(problem_area: ProblemArea, padding_count: int, minimal_left: int = 0) -> list[int]
#   - solve_for_count(padding_count: int) -> Optional[list[int]]
#   - solve_minimal(padding_start: int = 0) -> Optional[list[int]]
#   - iter_solutions_for_count(padding_count: int) -> Iterator[list[int]]
#   - iter_solutions(initial_padding_count: int = 0) -> Iterator[list[int]]
#
# Inputs:
# - Timeline, WindowParameters and the problem areas from problem_detector.py.
#
# Outputs:
# - Per-gap filler counts for fix_guide.py.
#
########################

from __future__ import annotations

from typing import Iterator, List, Optional, Sequence

from hit_object_models import HitObject, HitObjectKind, make_point
from problem_detector import ProblemArea, find_problem_areas
from timeline import Timeline
from window_oracle import WindowParameters, search_end_times_padded


class PaddingSolver:
    def __init__(
        self,
        timeline: Timeline,
        params: WindowParameters,
        problem_areas: Sequence[ProblemArea],
        *,
        max_padding_count: Optional[int] = None,
    ) -> None:
        self._timeline = timeline
        self._params = params
        self._problem_areas = list(problem_areas)
        self._max_padding_count = None if max_padding_count is None else int(max_padding_count)

    def problem_areas(self) -> List[ProblemArea]:
        return list(self._problem_areas)

    def _within_limit(self, padding_count: int) -> bool:
        return self._max_padding_count is None or padding_count <= self._max_padding_count

    def padding_works(self, problem_area: ProblemArea, left: int, right: int) -> bool:
        approach_time = int(self._params.approach_time)
        return all(
            search_end_times_padded(self._timeline, time - approach_time, left, right) <= problem_area.index
            for time in problem_area.times_to_check
        )

    def solve_single_problem_area(self, problem_area: ProblemArea, padding_count: int, minimal_left: int = 0) -> List[int]:
        """Every left count in [minimal_left, padding_count] that keeps this area loaded."""
        working_lefts: List[int] = []
        for left in range(int(minimal_left), int(padding_count) + 1):
            right = int(padding_count) - left
            if self.padding_works(problem_area, left, right):
                working_lefts.append(left)
        return working_lefts

    def solve_for_count(self, padding_count: int) -> Optional[List[int]]:
        """Greedy solution using exactly padding_count fillers, or None when infeasible."""
        solution = [0] * (len(self._problem_areas) + 1)
        left_padding = 0

        for area_index, problem_area in enumerate(self._problem_areas):
            working_lefts = self.solve_single_problem_area(problem_area, padding_count, left_padding)
            if not working_lefts or working_lefts[-1] < left_padding:
                return None

            lowest = working_lefts[0]
            solution[area_index] = lowest - left_padding
            left_padding = lowest

        solution[-1] = int(padding_count) - left_padding
        return solution

    def solve_minimal(self, padding_start: int = 0) -> Optional[List[int]]:
        padding_count = int(padding_start)
        while self._within_limit(padding_count):
            solution = self.solve_for_count(padding_count)
            if solution is not None:
                return solution
            padding_count += 1
        return None

    def iter_solutions_for_count(self, padding_count: int) -> Iterator[List[int]]:
        all_working_lefts: List[List[int]] = []

        minimal_left = 0
        for problem_area in self._problem_areas:
            working_lefts = self.solve_single_problem_area(problem_area, padding_count, minimal_left)
            if not working_lefts or working_lefts[-1] < minimal_left:
                return
            all_working_lefts.append(working_lefts)
            minimal_left = working_lefts[0]

        # A left count above what any later area can reach can never be part of a solution.
        maximal_left = int(padding_count)
        for area_index in range(len(all_working_lefts) - 1, -1, -1):
            trimmed = [left for left in all_working_lefts[area_index] if left <= maximal_left]
            all_working_lefts[area_index] = trimmed
            maximal_left = trimmed[-1]

        for cumulative_lefts in _enumerate_monotone(all_working_lefts, 0, 0):
            pads: List[int] = []
            previous_left = 0
            for left in cumulative_lefts:
                pads.append(left - previous_left)
                previous_left = left
            pads.append(int(padding_count) - previous_left)
            yield pads

    def iter_solutions(self, initial_padding_count: int = 0) -> Iterator[List[int]]:
        padding_count = int(initial_padding_count)
        while self._within_limit(padding_count):
            yield from self.iter_solutions_for_count(padding_count)
            padding_count += 1


def _enumerate_monotone(all_working_lefts: List[List[int]], depth: int, minimum: int) -> Iterator[List[int]]:
    if not all_working_lefts:
        yield []
        return

    if depth == len(all_working_lefts) - 1:
        for left in all_working_lefts[depth]:
            if left >= minimum:
                yield [left]
        return

    for left in all_working_lefts[depth]:
        if left < minimum:
            continue
        for tail in _enumerate_monotone(all_working_lefts, depth + 1, left):
            yield [left] + tail


def _run_unit_tests() -> None:
    params = WindowParameters(approach_time=1000, hit_window_50=50, physics_margin=10)
    spinner = HitObject(start_time=100, end_time=5000, kind=HitObjectKind.CHANNELED_RANGE)
    timeline = Timeline([spinner, make_point(200), make_point(300)])
    solver = PaddingSolver(timeline, params, find_problem_areas(timeline, params), max_padding_count=3)

    assert solver.solve_for_count(0) is None
    assert solver.solve_minimal() == [1, 0]
    assert list(solver.iter_solutions(1)) == [[1, 0], [2, 0], [2, 1]]


if __name__ == "__main__":
    _run_unit_tests()
    print("padding_solver.py: ok")
