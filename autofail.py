"""
autofail.py

Command line entrypoint: detect auto-fail in a chart file and optionally fix it.

Integration
- Loads config and the chart file
- Derives window parameters from the chart difficulty and config overrides
- Runs detection and prints a JSON report
- With --fix, walks the proposed solutions (console prompt, --yes, or a Qt dialog with --gui)
  and writes the fixed chart

Exit codes
- 0: no auto-fail, or a fix was applied
- 1: auto-fail found and not fixed
- 2: error (bad config, bad chart, no safe placement)
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Callable, Dict, Optional, TextIO

import chart_store
from auto_fail_detector import AutoFailDetector, FixDecision, FixOutcome, FixProposal
from config import AppConfig, load_config
from fix_guide import NoSafePlacementError
from timeline import MalformedTimelineError


class ConsoleDecider:
    """Prompt for each proposal on a text stream: y accepts, n shows the next one, c cancels."""

    def __init__(self, *, input_stream: TextIO, output_stream: TextIO) -> None:
        self._input_stream = input_stream
        self._output_stream = output_stream

    def __call__(self, proposal: FixProposal) -> FixDecision:
        self._output_stream.write(f"\nSolution {proposal.number}\n{proposal.guide_text}\n")
        while True:
            self._output_stream.write("Do you want to use this solution? [y]es / [n]o / [c]ancel: ")
            self._output_stream.flush()
            answer_text = self._input_stream.readline()
            if not answer_text:
                return FixDecision.ABORT

            answer = answer_text.strip().lower()
            if answer in ("y", "yes"):
                return FixDecision.ACCEPT
            if answer in ("n", "no"):
                return FixDecision.REJECT
            if answer in ("c", "cancel"):
                return FixDecision.ABORT


def _accept_first(proposal: FixProposal) -> FixDecision:
    return FixDecision.ACCEPT


def _default_output_path(chart_path: Path) -> Path:
    return chart_path.with_name(chart_path.stem + "_fixed" + chart_path.suffix)


def _select_decider(parsed_args: argparse.Namespace) -> Callable[[FixProposal], FixDecision]:
    if parsed_args.yes:
        return _accept_first
    if parsed_args.gui:
        from fix_dialog import QtFixDecider, ensure_application

        ensure_application()
        return QtFixDecider()
    # Prompts go to stderr so stdout stays a single JSON document.
    return ConsoleDecider(input_stream=sys.stdin, output_stream=sys.stderr)


def run(parsed_args: argparse.Namespace, app_config: AppConfig) -> Dict[str, Any]:
    chart_path = Path(parsed_args.chart)
    chart = chart_store.load_chart(chart_path)
    params = app_config.window_parameters(
        approach_rate=chart.approach_rate,
        overall_difficulty=chart.overall_difficulty,
    )

    detector = AutoFailDetector(
        chart.hit_objects,
        params,
        max_padding_count=app_config.solver.max_padding_count,
    )
    has_auto_fail = detector.detect()

    payload: Dict[str, Any] = {
        "ok": True,
        "chart": str(chart_path),
        "auto_fail": has_auto_fail,
        "approach_time": params.approach_time,
        "hit_window_50": params.hit_window_50,
        "physics_margin": params.physics_margin,
        "unloading_objects": detector.unloading_objects,
        "potential_unloading_objects": detector.potential_unloading_objects,
        "disruptors": detector.disruptors,
    }

    if not parsed_args.fix:
        return payload

    outcome = detector.run_fix_dialogue(app_config.solver.auto_apply, _select_decider(parsed_args))
    payload["fix_outcome"] = outcome.value
    payload["solution"] = detector.accepted_solution()

    if outcome is FixOutcome.APPLIED:
        output_path = Path(parsed_args.output) if parsed_args.output else _default_output_path(chart_path)
        chart_store.save_chart(output_path, chart, detector.timeline())
        payload["output"] = str(output_path)
        payload["auto_fail_after_fix"] = detector.detect()

    return payload


def _run_unit_tests() -> None:
    import auto_fail_detector
    import difficulty
    import fix_guide
    import padding_solver
    import problem_detector
    import timeline
    import window_oracle

    for module in (timeline, window_oracle, problem_detector, padding_solver, fix_guide, auto_fail_detector, difficulty):
        module._run_unit_tests()


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Detect and fix auto-fail caused by the engine's object loading window.")
    parser.add_argument("chart", nargs="?", help="JSON chart file to analyze.")
    parser.add_argument("--config", help="Config file path. Overrides the default search.")
    parser.add_argument("--fix", action="store_true", help="Propose padding solutions and apply the accepted one.")
    parser.add_argument("--yes", action="store_true", help="Accept the first proposed solution without asking.")
    parser.add_argument("--gui", action="store_true", help="Ask with a Qt dialog instead of the console.")
    parser.add_argument("--output", help="Where to write the fixed chart. Default: <chart>_fixed.json")
    parser.add_argument(
        "--run-tests",
        action="store_true",
        help="Run pure logic tests.",
    )
    return parser


def main(argv: Optional[list] = None) -> int:
    parsed_args = build_argument_parser().parse_args(argv)
    if parsed_args.run_tests:
        _run_unit_tests()
        print("autofail.py: ok")
        return 0

    if not parsed_args.chart:
        print(json.dumps({"ok": False, "error": "A chart file is required."}, ensure_ascii=False, indent=2))
        return 2

    try:
        app_config, _config_path = load_config(Path(parsed_args.config) if parsed_args.config else None)
        payload = run(parsed_args, app_config)
    except (OSError, ValueError, chart_store.ChartFileError, MalformedTimelineError, NoSafePlacementError) as exception:
        print(json.dumps({"ok": False, "error": str(exception)}, ensure_ascii=False, indent=2))
        return 2

    print(json.dumps(payload, ensure_ascii=False, indent=2))

    if payload.get("fix_outcome") == FixOutcome.APPLIED.value:
        return 1 if payload.get("auto_fail_after_fix") else 0
    return 1 if payload["auto_fail"] else 0


if __name__ == "__main__":
    raise SystemExit(main())
