"""
config.py

Typed configuration loading and validation for the auto-fail detector.

Design goals
- Load at most one UTF-8 JSON config file
- Validate with pydantic (defaults included)
- Support environment variable overrides
- No other I/O beyond reading the config file (no directory creation)

Config file location
- If AUTOFAIL_CONFIG_PATH is set, that file is used.
- Otherwise these paths are searched in order and the first one that exists is used:
  1) ./autofail_config.json (current working directory)
  2) <user config dir>/AutoFailFix/AutoFailFix/autofail_config.json
  3) <user config dir>/AutoFailFix/AutoFailFix/config.json
- If none exists, the defaults below apply.

Example config file (autofail_config.json)
{
  "detector": {
    "physics_margin_ms": 9,
    "approach_time_ms": null,
    "hit_window_50_ms": null
  },
  "solver": {
    "max_padding_count": 2000,
    "auto_apply": true
  }
}
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from platformdirs import user_config_dir
from pydantic import BaseModel, Field, ValidationError

import difficulty
from window_oracle import WindowParameters


class DetectorConfig(BaseModel):
    physics_margin_ms: int = Field(default=9, ge=0, description="Extra time the engine needs after an object ends.")
    approach_time_ms: Optional[int] = Field(default=None, ge=0, description="Overrides the chart approach rate.")
    hit_window_50_ms: Optional[int] = Field(default=None, ge=0, description="Overrides the chart overall difficulty.")


class SolverConfig(BaseModel):
    max_padding_count: Optional[int] = Field(
        default=2000, ge=0, description="Largest total filler count to try. null searches without a limit."
    )
    auto_apply: bool = Field(default=True, description="Insert fillers for an accepted solution.")


class AppConfig(BaseModel):
    detector: DetectorConfig = Field(default_factory=DetectorConfig)
    solver: SolverConfig = Field(default_factory=SolverConfig)

    def window_parameters(self, *, approach_rate: float, overall_difficulty: float) -> WindowParameters:
        derived = difficulty.window_parameters_for(
            approach_rate=approach_rate,
            overall_difficulty=overall_difficulty,
            physics_margin=self.detector.physics_margin_ms,
        )
        return WindowParameters(
            approach_time=derived.approach_time if self.detector.approach_time_ms is None else self.detector.approach_time_ms,
            hit_window_50=derived.hit_window_50 if self.detector.hit_window_50_ms is None else self.detector.hit_window_50_ms,
            physics_margin=derived.physics_margin,
        )


def _default_config_candidates() -> List[Path]:
    config_directory = Path(user_config_dir("AutoFailFix", "AutoFailFix"))
    return [
        Path.cwd() / "autofail_config.json",
        config_directory / "autofail_config.json",
        config_directory / "config.json",
    ]


def _resolve_config_path() -> Optional[Path]:
    explicit_path_text = os.environ.get("AUTOFAIL_CONFIG_PATH", "").strip()
    if explicit_path_text:
        return Path(explicit_path_text)

    for candidate_path in _default_config_candidates():
        if candidate_path.exists():
            return candidate_path

    return None


def _read_json_file_utf8(config_path: Path) -> Dict[str, Any]:
    try:
        raw_text = config_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise
    except OSError as exception:
        raise OSError(f"Failed to read config file: {config_path}. Error: {exception}") from exception

    try:
        parsed = json.loads(raw_text)
    except json.JSONDecodeError as exception:
        raise ValueError(f"Config file is not valid JSON: {config_path}. Error: {exception}") from exception

    if not isinstance(parsed, dict):
        raise ValueError(f"Config file root must be a JSON object: {config_path}")

    return parsed


def _apply_environment_overrides(config_dict: Dict[str, Any]) -> Dict[str, Any]:
    """
    Environment overrides are optional. The config file is the primary source of truth.

    Override variables:
    - AUTOFAIL_PHYSICS_MARGIN_MS
    - AUTOFAIL_APPROACH_TIME_MS
    - AUTOFAIL_HIT_WINDOW_50_MS
    - AUTOFAIL_MAX_PADDING_COUNT
    - AUTOFAIL_AUTO_APPLY
    """
    def ensure_nested(config_root: Dict[str, Any], section_name: str) -> Dict[str, Any]:
        section = config_root.get(section_name)
        if isinstance(section, dict):
            return section
        section = {}
        config_root[section_name] = section
        return section

    updated_config = dict(config_dict)

    detector_section = ensure_nested(updated_config, "detector")
    solver_section = ensure_nested(updated_config, "solver")

    def override_int(env_name: str, target_dict: Dict[str, Any], key_name: str) -> None:
        value_text = os.environ.get(env_name, "").strip()
        if not value_text:
            return
        try:
            target_dict[key_name] = int(value_text)
        except ValueError:
            return

    def override_bool(env_name: str, target_dict: Dict[str, Any], key_name: str) -> None:
        value_text = os.environ.get(env_name, "").strip().lower()
        if not value_text:
            return
        truthy = {"1", "true", "yes", "on"}
        falsy = {"0", "false", "no", "off"}
        if value_text in truthy:
            target_dict[key_name] = True
        elif value_text in falsy:
            target_dict[key_name] = False

    override_int("AUTOFAIL_PHYSICS_MARGIN_MS", detector_section, "physics_margin_ms")
    override_int("AUTOFAIL_APPROACH_TIME_MS", detector_section, "approach_time_ms")
    override_int("AUTOFAIL_HIT_WINDOW_50_MS", detector_section, "hit_window_50_ms")

    override_int("AUTOFAIL_MAX_PADDING_COUNT", solver_section, "max_padding_count")
    override_bool("AUTOFAIL_AUTO_APPLY", solver_section, "auto_apply")

    return updated_config


def load_config(config_path: Optional[Path] = None) -> Tuple[AppConfig, Optional[Path]]:
    resolved_path = config_path if config_path is not None else _resolve_config_path()
    json_dict = _read_json_file_utf8(resolved_path) if resolved_path is not None else {}
    json_dict = _apply_environment_overrides(json_dict)

    try:
        config = AppConfig.model_validate(json_dict)
    except ValidationError as exception:
        raise ValueError(f"Config validation failed for {resolved_path or '(defaults)'}:\n{exception}") from exception

    return config, resolved_path


def to_json(config: AppConfig) -> str:
    return json.dumps(config.model_dump(), ensure_ascii=False, indent=2)


def main() -> int:
    try:
        config, resolved_path = load_config()
    except Exception as exception:
        error_payload = {"ok": False, "error": str(exception)}
        print(json.dumps(error_payload, ensure_ascii=False, indent=2))
        return 2

    output_payload = {
        "ok": True,
        "config_path": None if resolved_path is None else str(resolved_path),
        "config": json.loads(to_json(config)),
    }
    print(json.dumps(output_payload, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
