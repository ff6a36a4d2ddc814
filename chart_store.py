# -*- coding: utf-8 -*-
########################
# chart_store.py
########################
# Purpose:
# - Read and write JSON chart interchange files holding decoded hit objects.
# - Convert between file records and hit_object_models.HitObject.
#
# Design notes:
# - No Qt usage. Pure parsing and serialization.
# - Parsing never silently accepts invalid charts: unknown kinds and reversed end times are errors.
# - Saving writes hit objects in timeline order and keeps every top level key it does not own.
#
########################
# Interfaces:
# Public exceptions:
# - class ChartFileError(Exception)
# - class ChartParseError(ChartFileError)
# - class ChartValidationError(ChartFileError)
#
# Public dataclasses:
# - LoadedChart(title: str, approach_rate: float, overall_difficulty: float,
#               hit_objects: list[HitObject], source_path: pathlib.Path, extra: dict)
#
# Public functions:
# - parse_hit_object(record: dict) -> HitObject
# - hit_object_to_record(hit_object: HitObject) -> dict
# - load_chart(chart_path: pathlib.Path) -> LoadedChart
# - save_chart(output_path: pathlib.Path, chart: LoadedChart, hit_objects: Iterable[HitObject]) -> None
#
# Example file
# {
#   "title": "Example",
#   "approach_rate": 9,
#   "overall_difficulty": 8,
#   "hit_objects": [
#     {"start_time": 100, "end_time": 5000, "kind": "channeled_range", "x": 256, "y": 192},
#     {"start_time": 200, "end_time": 200, "kind": "point", "x": 64, "y": 64}
#   ]
# }
#
########################

from __future__ import annotations

from dataclasses import dataclass, field
import json
import math
from pathlib import Path
from typing import Any, Dict, Iterable, List

from hit_object_models import HitObject, HitObjectKind


class ChartFileError(Exception):
    """Base error for chart file reading and writing."""


class ChartParseError(ChartFileError):
    """Raised when the file is not a readable JSON chart."""


class ChartValidationError(ChartFileError):
    """Raised when the file parses but holds values the detector cannot use."""


@dataclass(frozen=True)
class LoadedChart:
    title: str
    approach_rate: float
    overall_difficulty: float
    hit_objects: List[HitObject]
    source_path: Path
    extra: Dict[str, Any] = field(default_factory=dict)


_OWNED_KEYS = {"title", "approach_rate", "overall_difficulty", "hit_objects"}


def _require_number(record: Dict[str, Any], key_name: str, default_value: Any, owner: str) -> float:
    value = record.get(key_name, default_value)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ChartValidationError(f"{owner} field {key_name!r} must be a number, got: {value!r}")
    if isinstance(value, float) and not math.isfinite(value):
        raise ChartValidationError(f"{owner} field {key_name!r} must be finite, got: {value!r}")
    return value


def _require_int(record: Dict[str, Any], key_name: str) -> int:
    value = _require_number(record, key_name, None, "Hit object")
    if float(value) != int(value):
        raise ChartValidationError(f"Hit object field {key_name!r} must be a whole number of milliseconds, got: {value!r}")
    return int(value)


def _parse_kind(value: Any) -> HitObjectKind:
    text = str(value or "").strip().lower()
    try:
        return HitObjectKind(text)
    except ValueError:
        allowed = ", ".join(kind.value for kind in HitObjectKind)
        raise ChartValidationError(f"Unknown hit object kind {value!r}. Expected one of: {allowed}") from None


def parse_hit_object(record: Dict[str, Any]) -> HitObject:
    if not isinstance(record, dict):
        raise ChartValidationError(f"Hit object record must be a JSON object, got: {record!r}")

    start_time = _require_int(record, "start_time")
    end_time = _require_int(record, "end_time") if "end_time" in record else start_time
    if end_time < start_time:
        raise ChartValidationError(f"Hit object at {start_time} ends before it starts (end time {end_time}).")

    return HitObject(
        start_time=start_time,
        end_time=end_time,
        kind=_parse_kind(record.get("kind", HitObjectKind.POINT.value)),
        position=(
            float(_require_number(record, "x", 0.0, "Hit object")),
            float(_require_number(record, "y", 0.0, "Hit object")),
        ),
    )


def hit_object_to_record(hit_object: HitObject) -> Dict[str, Any]:
    return {
        "start_time": int(hit_object.start_time),
        "end_time": int(hit_object.end_time),
        "kind": hit_object.kind.value,
        "x": float(hit_object.position[0]),
        "y": float(hit_object.position[1]),
    }


def _read_number(payload: Dict[str, Any], key_name: str, default_value: float) -> float:
    return float(_require_number(payload, key_name, default_value, "Chart"))


def load_chart(chart_path: Path) -> LoadedChart:
    try:
        raw_text = Path(chart_path).read_text(encoding="utf-8")
    except OSError as exception:
        raise ChartParseError(f"Failed to read chart file: {chart_path}. Error: {exception}") from exception

    try:
        payload = json.loads(raw_text)
    except json.JSONDecodeError as exception:
        raise ChartParseError(f"Chart file is not valid JSON: {chart_path}. Error: {exception}") from exception

    if not isinstance(payload, dict):
        raise ChartParseError(f"Chart file root must be a JSON object: {chart_path}")

    records = payload.get("hit_objects")
    if not isinstance(records, list) or not records:
        raise ChartValidationError(f"Chart file has no hit_objects list: {chart_path}")

    return LoadedChart(
        title=str(payload.get("title") or "Untitled"),
        approach_rate=_read_number(payload, "approach_rate", 5.0),
        overall_difficulty=_read_number(payload, "overall_difficulty", 5.0),
        hit_objects=[parse_hit_object(record) for record in records],
        source_path=Path(chart_path),
        extra={key: value for key, value in payload.items() if key not in _OWNED_KEYS},
    )


def save_chart(output_path: Path, chart: LoadedChart, hit_objects: Iterable[HitObject]) -> None:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    payload: Dict[str, Any] = dict(chart.extra)
    payload["title"] = chart.title
    payload["approach_rate"] = chart.approach_rate
    payload["overall_difficulty"] = chart.overall_difficulty
    payload["hit_objects"] = [hit_object_to_record(hit_object) for hit_object in hit_objects]

    output_path.write_text(json.dumps(payload, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
