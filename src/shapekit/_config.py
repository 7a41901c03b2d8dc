from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

CONFIG_DIR = Path.home() / ".shapekit"
CONFIG_FILE = CONFIG_DIR / "shapekit.cfg"
DEFAULT_SEGMENTS_PER_CIRCLE = 64
DEFAULT_CONFIG = {
    "_comment": "Valid units: millimeters (default), meters, inches. segments_per_circle controls outline sampling.",
    "units": "millimeters",
    "segments_per_circle": DEFAULT_SEGMENTS_PER_CIRCLE,
}
_UNIT_INFO: Dict[str, Dict[str, Any]] = {
    "millimeters": {"label": "mm", "scale_to_mm": 1.0},
    "meters": {"label": "m", "scale_to_mm": 1000.0},
    "inches": {"label": "in", "scale_to_mm": 25.4},
}
_UNIT_ALIASES = {
    "millimeter": "millimeters",
    "mm": "millimeters",
    "meter": "meters",
    "m": "meters",
    "inch": "inches",
    "in": "inches",
}


@dataclass(frozen=True)
class UnitSettings:
    """Resolved units from shapekit.cfg."""

    name: str
    label: str
    scale_to_mm: float


@dataclass(frozen=True)
class SamplingSettings:
    """How curved outlines are flattened for preview and export."""

    segments_per_circle: int


def ensure_user_config() -> None:
    """Ensure ~/.shapekit/shapekit.cfg exists with sane defaults."""

    try:
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    except OSError:
        return

    if CONFIG_FILE.exists():
        return

    try:
        CONFIG_FILE.write_text(json.dumps(DEFAULT_CONFIG, indent=2) + "\n")
    except OSError:
        return


def _load_user_config() -> Dict[str, Any]:
    ensure_user_config()
    try:
        data = json.loads(CONFIG_FILE.read_text())
    except (OSError, json.JSONDecodeError):
        return DEFAULT_CONFIG.copy()
    if not isinstance(data, dict):
        return DEFAULT_CONFIG.copy()
    return data


def _normalize_units(value: str) -> str | None:
    key = value.strip().lower()
    if key in _UNIT_INFO:
        return key
    return _UNIT_ALIASES.get(key)


def get_unit_settings() -> UnitSettings:
    """Return the configured units and the conversion to millimeters."""

    raw_config = _load_user_config()
    raw_units = str(raw_config.get("units", DEFAULT_CONFIG["units"]))
    normalized = _normalize_units(raw_units)
    if normalized is None:
        normalized = DEFAULT_CONFIG["units"]

    info = _UNIT_INFO[normalized]
    return UnitSettings(name=normalized, label=info["label"], scale_to_mm=info["scale_to_mm"])


def get_sampling_settings() -> SamplingSettings:
    raw_config = _load_user_config()
    raw = raw_config.get("segments_per_circle", DEFAULT_SEGMENTS_PER_CIRCLE)
    if isinstance(raw, bool):
        return SamplingSettings(segments_per_circle=DEFAULT_SEGMENTS_PER_CIRCLE)
    try:
        segments = int(raw)
    except (TypeError, ValueError):
        segments = DEFAULT_SEGMENTS_PER_CIRCLE
    return SamplingSettings(segments_per_circle=max(segments, 3))
