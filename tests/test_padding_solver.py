from __future__ import annotations

from itertools import islice

from padding_solver import PaddingSolver
from problem_detector import find_problem_areas
from timeline import Timeline


def _solver(hit_objects, params, max_padding_count=None) -> PaddingSolver:
    timeline = Timeline(hit_objects)
    return PaddingSolver(timeline, params, find_problem_areas(timeline, params), max_padding_count=max_padding_count)


def test_single_area_working_lefts(params, spinner_hit_objects) -> None:
    solver = _solver(spinner_hit_objects, params)
    area = solver.problem_areas()[0]

    assert solver.solve_single_problem_area(area, 0) == []
    assert solver.solve_single_problem_area(area, 1) == [1]
    assert solver.solve_single_problem_area(area, 3) == [2]
    assert solver.padding_works(area, 2, 0)
    assert not solver.padding_works(area, 0, 2)


def test_minimal_solution(params, spinner_hit_objects) -> None:
    solver = _solver(spinner_hit_objects, params)
    assert solver.solve_for_count(0) is None
    assert solver.solve_minimal() == [1, 0]


def test_candidate_sequence_is_exhaustive_and_cost_ordered(params, spinner_hit_objects) -> None:
    solver = _solver(spinner_hit_objects, params)
    assert list(islice(solver.iter_solutions(1), 3)) == [[1, 0], [2, 0], [2, 1]]


def test_two_areas_share_cumulative_left_padding(params, two_spinner_hit_objects) -> None:
    solver = _solver(two_spinner_hit_objects, params)

    for padding_count in (0, 1, 2):
        assert solver.solve_for_count(padding_count) is None
    assert solver.solve_minimal() == [1, 0, 2]
    assert list(solver.iter_solutions_for_count(3)) == [[1, 0, 2], [1, 2, 0]]


def test_candidates_are_valid_and_never_get_cheaper(params, two_spinner_hit_objects) -> None:
    solver = _solver(two_spinner_hit_objects, params, max_padding_count=12)
    problem_areas = solver.problem_areas()

    previous_total = 0
    for solution in solver.iter_solutions(3):
        total = sum(solution)
        assert total >= previous_total
        previous_total = total

        left = 0
        for area_index, problem_area in enumerate(problem_areas):
            left += solution[area_index]
            assert solver.padding_works(problem_area, left, total - left)
        assert all(count >= 0 for count in solution)


def test_sequence_is_restartable(params, two_spinner_hit_objects) -> None:
    solver = _solver(two_spinner_hit_objects, params, max_padding_count=8)
    first = list(solver.iter_solutions(3))
    second = list(solver.iter_solutions(3))
    assert first == second


def test_padding_limit_ends_the_sequence(params, spinner_hit_objects) -> None:
    solver = _solver(spinner_hit_objects, params, max_padding_count=3)
    assert list(solver.iter_solutions(0)) == [[1, 0], [2, 0], [2, 1]]

    capped = _solver(spinner_hit_objects, params, max_padding_count=0)
    assert capped.solve_minimal() is None
    assert list(capped.iter_solutions(0)) == []
