from __future__ import annotations

import json

import pytest

from surveymap.config import MapConfig, load_config
from surveymap.errors import ConfigError


def test_defaults_without_file(monkeypatch) -> None:
    monkeypatch.delenv("SURVEYMAP_API_URL", raising=False)
    monkeypatch.delenv("SURVEYMAP_REQUEST_TIMEOUT", raising=False)
    monkeypatch.delenv("SURVEYMAP_DECAY_HALFLIFE_DAYS", raising=False)

    cfg = load_config()

    assert cfg == MapConfig()
    assert cfg.request_timeout_s is None
    assert cfg.decay_halflife_ms == 30 * 24 * 60 * 60 * 1000


def test_file_then_environment_overrides(tmp_path, monkeypatch) -> None:
    path = tmp_path / "surveymap.json"
    path.write_text(json.dumps({"api_url": "http://file/api", "decay_opacity": True}))
    monkeypatch.setenv("SURVEYMAP_API_URL", "http://env/api")
    monkeypatch.setenv("SURVEYMAP_REQUEST_TIMEOUT", "7.5")

    cfg = load_config(path)

    assert cfg.api_url == "http://env/api"
    assert cfg.request_timeout_s == 7.5
    assert cfg.decay_opacity is True


def test_unknown_keys_rejected(tmp_path) -> None:
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"decay_colour": True}))

    with pytest.raises(ConfigError):
        load_config(path)


def test_bad_env_value_rejected(monkeypatch) -> None:
    monkeypatch.setenv("SURVEYMAP_DECAY_HALFLIFE_DAYS", "a month")

    with pytest.raises(ConfigError):
        load_config()


def test_missing_file_rejected(tmp_path) -> None:
    with pytest.raises(ConfigError):
        load_config(tmp_path / "nope.json")


def test_wrong_typed_values_rejected(tmp_path, monkeypatch) -> None:
    for var in ("SURVEYMAP_API_URL", "SURVEYMAP_REQUEST_TIMEOUT", "SURVEYMAP_DECAY_HALFLIFE_DAYS"):
        monkeypatch.delenv(var, raising=False)
    path = tmp_path / "typed.json"

    for data in (
        {"expired_saturation": "10"},
        {"decay_saturation": "false"},
        {"decay_opacity": 1},
        {"expired_lightness": True},
        {"request_timeout_s": "5"},
        {"default_marker_options": []},
        {"decay_halflife_days": 0},
    ):
        path.write_text(json.dumps(data))
        with pytest.raises(ConfigError):
            load_config(path)


def test_numeric_values_accept_int_or_float(tmp_path, monkeypatch) -> None:
    monkeypatch.delenv("SURVEYMAP_REQUEST_TIMEOUT", raising=False)
    monkeypatch.delenv("SURVEYMAP_DECAY_HALFLIFE_DAYS", raising=False)
    path = tmp_path / "numbers.json"
    path.write_text(json.dumps({"expired_saturation": 12.5, "decay_halflife_days": 7,
                                "request_timeout_s": 3}))

    cfg = load_config(path)

    assert cfg.expired_saturation == 12.5
    assert cfg.decay_halflife_days == 7
    assert cfg.request_timeout_s == 3
