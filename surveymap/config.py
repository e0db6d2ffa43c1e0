"""
Session configuration.

Defaults live on :class:`MapConfig`.  A JSON file may override any field,
and ``SURVEYMAP_*`` environment variables override the file.

Example config file
-------------------
    {
        "api_url": "https://surveys.example.org/api",
        "decay_opacity": true,
        "expired_lightness": 70
    }
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import ConfigError

log = logging.getLogger(__name__)

_DAY_MS = 24 * 60 * 60 * 1000

# env var → (field name, converter)
_ENV_OVERRIDES = {
    "SURVEYMAP_API_URL": ("api_url", str),
    "SURVEYMAP_REQUEST_TIMEOUT": ("request_timeout_s", float),
    "SURVEYMAP_DECAY_HALFLIFE_DAYS": ("decay_halflife_days", float),
}


@dataclass(frozen=True)
class MapConfig:
    api_url: str = "http://localhost:8080/api"
    request_timeout_s: Optional[float] = None   # None = wait indefinitely

    # Decay: which colour dimensions fade towards the "expired" look
    decay_saturation: bool = True
    decay_lightness: bool = True
    decay_opacity: bool = False
    expired_saturation: int = 10
    expired_lightness: int = 75
    decay_halflife_days: float = 30.0

    default_marker_options: Dict[str, Any] = field(
        default_factory=lambda: {"radius": 6, "weight": 1, "stroke": True}
    )

    @property
    def decay_halflife_ms(self) -> float:
        return self.decay_halflife_days * _DAY_MS


def _field_names() -> set:
    return {f.name for f in fields(MapConfig)}


_BOOL_FIELDS = ("decay_saturation", "decay_lightness", "decay_opacity")
_NUMBER_FIELDS = ("expired_saturation", "expired_lightness", "decay_halflife_days")


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a number here
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _validate(cfg: MapConfig) -> None:
    """Raise ConfigError if any field has the wrong type."""
    bad = []
    if not isinstance(cfg.api_url, str):
        bad.append("api_url")
    if cfg.request_timeout_s is not None and not _is_number(cfg.request_timeout_s):
        bad.append("request_timeout_s")
    bad.extend(n for n in _BOOL_FIELDS if not isinstance(getattr(cfg, n), bool))
    bad.extend(n for n in _NUMBER_FIELDS if not _is_number(getattr(cfg, n)))
    if not isinstance(cfg.default_marker_options, dict):
        bad.append("default_marker_options")
    if bad:
        raise ConfigError(f"Invalid config values: {', '.join(bad)}")
    if cfg.decay_halflife_days <= 0:
        raise ConfigError("decay_halflife_days must be positive")


def load_config(path: Optional[Path] = None) -> MapConfig:
    """Build a :class:`MapConfig` from defaults, *path* and the environment."""
    overrides: Dict[str, Any] = {}

    if path is not None:
        try:
            with Path(path).open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise ConfigError(f"Cannot read config {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"Config {path} must contain a JSON object")
        unknown = set(data) - _field_names()
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(sorted(unknown))}")
        overrides.update(data)

    for var, (name, convert) in _ENV_OVERRIDES.items():
        raw = os.environ.get(var)
        if raw is None:
            continue
        try:
            overrides[name] = convert(raw)
        except ValueError as exc:
            raise ConfigError(f"{var}={raw!r}: {exc}") from exc

    cfg = replace(MapConfig(), **overrides)
    _validate(cfg)
    log.debug("Loaded config: %s", cfg)
    return cfg
