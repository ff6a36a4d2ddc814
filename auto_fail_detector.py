# -*- coding: utf-8 -*-
########################
# auto_fail_detector.py
########################
# Purpose:
# - Entry point for chart tooling: detect auto-fail and drive the interactive fix dialogue.
# - Owns the Timeline for one chart and the last DetectionReport computed from it.
#
# Design notes:
# - No Qt usage. Decisions come from an injected callback, so CLI and Qt front ends share this flow.
# - Candidates are produced on demand: the solver does no work past the proposal that was accepted
#   or aborted.
# - A fix mutates the Timeline and clears the report; callers run detect() again afterwards.
# - NoSafePlacementError from the applier propagates unchanged. Aborting is a normal outcome.
#
########################
# Interfaces:
# Public enums:
# - class FixDecision(enum.Enum): ACCEPT | REJECT | ABORT
# - class FixOutcome(enum.Enum): APPLIED | ACCEPTED | DECLINED | ABORTED | NO_SOLUTION | NOTHING_TO_FIX
#
# Public dataclasses:
# - FixProposal(number: int, solution: list[int], padding_count: int, guide_text: str)
#
# Public classes:
# - class AutoFailDetector
#   - __init__(hit_objects: Iterable[HitObject], params: WindowParameters, *, max_padding_count: Optional[int] = None)
#   - set_hit_objects(hit_objects: Iterable[HitObject]) -> None
#   - timeline() -> Timeline
#   - report() -> Optional[DetectionReport]
#   - detect() -> bool
#   - unloading_objects / potential_unloading_objects / disruptors -> list[int]
#   - end_time() -> int
#   - proposals() -> Iterator[FixProposal]
#   - run_fix_dialogue(auto_apply: bool, decide: Callable[[FixProposal], FixDecision]) -> FixOutcome
#   - accepted_solution() -> Optional[list[int]]
#
# Inputs:
# - Decoded hit objects and WindowParameters (see difficulty.py and config.py).
#
# Outputs:
# - Detection lists for reporting layers, FixOutcome, and the mutated Timeline.
#
########################

from __future__ import annotations

from dataclasses import dataclass
import enum
from typing import Callable, Iterable, Iterator, List, Optional

from fix_guide import apply_solution, render_fix_guide
from hit_object_models import HitObject, HitObjectKind, make_point
from padding_solver import PaddingSolver
from problem_detector import DetectionReport, detect_problems
from timeline import Timeline
from window_oracle import WindowParameters


class FixDecision(enum.Enum):
    ACCEPT = "accept"
    REJECT = "reject"
    ABORT = "abort"


class FixOutcome(enum.Enum):
    APPLIED = "applied"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    ABORTED = "aborted"
    NO_SOLUTION = "no_solution"
    NOTHING_TO_FIX = "nothing_to_fix"


@dataclass(frozen=True)
class FixProposal:
    number: int
    solution: List[int]
    padding_count: int
    guide_text: str


class AutoFailDetector:
    def __init__(
        self,
        hit_objects: Iterable[HitObject],
        params: WindowParameters,
        *,
        max_padding_count: Optional[int] = None,
    ) -> None:
        self._params = params
        self._max_padding_count = max_padding_count
        self._timeline = Timeline(hit_objects)
        self._report: Optional[DetectionReport] = None
        self._accepted_solution: Optional[List[int]] = None

    def set_hit_objects(self, hit_objects: Iterable[HitObject]) -> None:
        self._timeline = Timeline(hit_objects)
        self._report = None
        self._accepted_solution = None

    def timeline(self) -> Timeline:
        return self._timeline

    def report(self) -> Optional[DetectionReport]:
        return self._report

    def accepted_solution(self) -> Optional[List[int]]:
        return None if self._accepted_solution is None else list(self._accepted_solution)

    def detect(self) -> bool:
        self._report = detect_problems(self._timeline, self._params)
        return self._report.has_auto_fail

    def _require_report(self) -> DetectionReport:
        if self._report is None:
            raise RuntimeError("detect() must run before reading results or fixing.")
        return self._report

    @property
    def unloading_objects(self) -> List[int]:
        return list(self._require_report().unloading_objects)

    @property
    def potential_unloading_objects(self) -> List[int]:
        return list(self._require_report().potential_unloading_objects)

    @property
    def disruptors(self) -> List[int]:
        return list(self._require_report().disruptors)

    def end_time(self) -> int:
        return self._timeline.max_end_time()

    def _solver(self) -> PaddingSolver:
        return PaddingSolver(
            self._timeline,
            self._params,
            self._require_report().problem_areas,
            max_padding_count=self._max_padding_count,
        )

    def proposals(self) -> Iterator[FixProposal]:
        problem_areas = self._require_report().problem_areas
        solver = self._solver()
        minimal = solver.solve_minimal()
        if minimal is None:
            return

        for number, solution in enumerate(solver.iter_solutions(sum(minimal)), start=1):
            yield FixProposal(
                number=number,
                solution=solution,
                padding_count=sum(solution),
                guide_text=render_fix_guide(problem_areas, self._params, solution),
            )

    def run_fix_dialogue(self, auto_apply: bool, decide: Callable[[FixProposal], FixDecision]) -> FixOutcome:
        report = self._require_report()
        if not report.problem_areas:
            return FixOutcome.NOTHING_TO_FIX

        self._accepted_solution = None
        outcome = FixOutcome.NO_SOLUTION
        for proposal in self.proposals():
            outcome = FixOutcome.DECLINED
            decision = decide(proposal)
            if decision is FixDecision.ACCEPT:
                self._accepted_solution = list(proposal.solution)
                outcome = FixOutcome.ACCEPTED
                break
            if decision is FixDecision.ABORT:
                return FixOutcome.ABORTED

        if outcome is not FixOutcome.ACCEPTED or not auto_apply:
            return outcome

        apply_solution(self._timeline, self._params, report.problem_areas, self._accepted_solution)
        self._report = None
        return FixOutcome.APPLIED


def _run_unit_tests() -> None:
    params = WindowParameters(approach_time=1000, hit_window_50=50, physics_margin=10)
    spinner = HitObject(start_time=100, end_time=5000, kind=HitObjectKind.CHANNELED_RANGE)
    hit_objects = [spinner, make_point(200), make_point(300)]

    detector = AutoFailDetector(hit_objects, params, max_padding_count=10)
    assert detector.detect()
    assert detector.unloading_objects == [100]
    assert detector.end_time() == 5000

    decisions = iter([FixDecision.REJECT, FixDecision.ACCEPT])
    outcome = detector.run_fix_dialogue(True, lambda proposal: next(decisions))
    assert outcome is FixOutcome.APPLIED
    assert detector.accepted_solution() == [2, 0]
    assert not detector.detect()

    aborted = AutoFailDetector(hit_objects, params)
    aborted.detect()
    assert aborted.run_fix_dialogue(True, lambda proposal: FixDecision.ABORT) is FixOutcome.ABORTED
    assert len(aborted.timeline()) == 3


if __name__ == "__main__":
    _run_unit_tests()
    print("auto_fail_detector.py: ok")
