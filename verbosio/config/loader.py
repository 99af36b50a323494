"""Configuration loading and normalization."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, List

from verbosio.config.merge import merge_sections
from verbosio.config.models import (
    COLOR_MODES,
    DEFAULT_FRAMES,
    OutputConfig,
    Settings,
    StatusConfig,
    VerbosityConfig,
)
from verbosio.gate import MAX_LEVEL


def _as_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    return default


def _as_int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _as_float(value: Any, default: float) -> float:
    if isinstance(value, bool):
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _as_str(value: Any, default: str) -> str:
    if isinstance(value, str) and value:
        return value
    return default


def _as_frames(value: Any) -> List[str]:
    if isinstance(value, str) and value:
        return list(value)
    if isinstance(value, list):
        frames = [str(v) for v in value if str(v)]
        if frames:
            return frames
    return list(DEFAULT_FRAMES)


def _as_color(value: Any, default: str) -> str:
    if value is True:
        return "always"
    if value is False:
        return "never"
    if isinstance(value, str) and value.lower() in COLOR_MODES:
        return value.lower()
    return default


def _load_json(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Config root must be a JSON object: {path}")
    return data


def config_from_dict(raw: Dict[str, Any]) -> Settings:
    """Build a Settings instance from a raw dictionary.

    Unknown keys are ignored and values of the wrong type fall back to the
    defaults, so a malformed file never changes more than it names.
    """
    verbosity_raw = raw.get("verbosity", {}) or {}
    output_raw = raw.get("output", {}) or {}
    status_raw = raw.get("status", {}) or {}

    default_level = _as_int(verbosity_raw.get("default_level", 1), 1)
    verbosity = VerbosityConfig(
        env_var=_as_str(verbosity_raw.get("env_var"), "VERBOSE"),
        default_level=min(max(default_level, 0), MAX_LEVEL),
    )
    output = OutputConfig(
        color=_as_color(output_raw.get("color"), "auto"),
        timestamps=_as_bool(output_raw.get("timestamps"), False),
        time_format=_as_str(output_raw.get("time_format"), "%Y-%m-%d %H:%M:%S"),
    )
    interval = _as_float(status_raw.get("interval", 0.1), 0.1)
    status = StatusConfig(
        enabled=_as_bool(status_raw.get("enabled"), True),
        interval=interval if interval > 0 else 0.1,
        frames=_as_frames(status_raw.get("frames")),
        show_elapsed=_as_bool(status_raw.get("show_elapsed"), False),
    )
    return Settings(verbosity=verbosity, output=output, status=status)


def load_config(path: Path | None) -> Settings:
    """Load config data into a Settings instance.

    Args:
        path: Optional path to a JSON file containing overrides.

    Returns:
        Parsed Settings instance.
    """
    raw: Dict[str, Any] = asdict(Settings())
    if path is not None:
        raw = merge_sections(raw, _load_json(path))
    return config_from_dict(raw)
