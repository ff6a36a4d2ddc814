from __future__ import annotations

import json

import pytest

import config as config_module
from window_oracle import WindowParameters


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch) -> None:
    for name in (
        "AUTOFAIL_CONFIG_PATH",
        "AUTOFAIL_PHYSICS_MARGIN_MS",
        "AUTOFAIL_APPROACH_TIME_MS",
        "AUTOFAIL_HIT_WINDOW_50_MS",
        "AUTOFAIL_MAX_PADDING_COUNT",
        "AUTOFAIL_AUTO_APPLY",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults_when_file_is_empty_object(tmp_path) -> None:
    config_path = tmp_path / "autofail_config.json"
    config_path.write_text("{}", encoding="utf-8")

    config, resolved_path = config_module.load_config(config_path)
    assert resolved_path == config_path
    assert config.detector.physics_margin_ms == 9
    assert config.detector.approach_time_ms is None
    assert config.solver.max_padding_count == 2000
    assert config.solver.auto_apply is True


def test_explicit_path_from_environment(tmp_path, monkeypatch) -> None:
    config_path = tmp_path / "custom.json"
    config_path.write_text(json.dumps({"solver": {"max_padding_count": None}}), encoding="utf-8")
    monkeypatch.setenv("AUTOFAIL_CONFIG_PATH", str(config_path))

    config, resolved_path = config_module.load_config()
    assert resolved_path == config_path
    assert config.solver.max_padding_count is None


def test_environment_overrides(tmp_path, monkeypatch) -> None:
    config_path = tmp_path / "autofail_config.json"
    config_path.write_text(json.dumps({"detector": {"physics_margin_ms": 5}}), encoding="utf-8")
    monkeypatch.setenv("AUTOFAIL_PHYSICS_MARGIN_MS", "12")
    monkeypatch.setenv("AUTOFAIL_AUTO_APPLY", "off")
    monkeypatch.setenv("AUTOFAIL_MAX_PADDING_COUNT", "not a number")

    config, _ = config_module.load_config(config_path)
    assert config.detector.physics_margin_ms == 12
    assert config.solver.auto_apply is False
    assert config.solver.max_padding_count == 2000


def test_invalid_values_raise_value_error(tmp_path) -> None:
    config_path = tmp_path / "autofail_config.json"
    config_path.write_text(json.dumps({"detector": {"physics_margin_ms": -1}}), encoding="utf-8")
    with pytest.raises(ValueError):
        config_module.load_config(config_path)


def test_invalid_json_raises_value_error(tmp_path) -> None:
    config_path = tmp_path / "autofail_config.json"
    config_path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        config_module.load_config(config_path)


def test_window_parameters_apply_overrides() -> None:
    config = config_module.AppConfig.model_validate({"detector": {"approach_time_ms": 1000, "physics_margin_ms": 10}})
    params = config.window_parameters(approach_rate=9, overall_difficulty=8)
    assert params == WindowParameters(approach_time=1000, hit_window_50=120, physics_margin=10)


def test_main_prints_resolved_config(tmp_path, monkeypatch, capsys) -> None:
    config_path = tmp_path / "autofail_config.json"
    config_path.write_text(json.dumps({"solver": {"auto_apply": False}}), encoding="utf-8")
    monkeypatch.setenv("AUTOFAIL_CONFIG_PATH", str(config_path))

    assert config_module.main() == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["config_path"] == str(config_path)
    assert payload["config"]["solver"]["auto_apply"] is False
    assert not hasattr(config_module, "get_config")
