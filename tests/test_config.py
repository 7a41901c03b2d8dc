from __future__ import annotations

import json
from pathlib import Path

import pytest

from shapekit import _config


def _write_config(config_home: Path, data) -> None:
    config_home.mkdir(parents=True, exist_ok=True)
    (config_home / "shapekit.cfg").write_text(json.dumps(data))


def test_defaults_are_written_on_first_use(config_home: Path):
    settings = _config.get_unit_settings()
    assert settings == _config.UnitSettings(name="millimeters", label="mm", scale_to_mm=1.0)
    stored = json.loads((config_home / "shapekit.cfg").read_text())
    assert stored["units"] == "millimeters"
    assert stored["segments_per_circle"] == 64


@pytest.mark.parametrize(
    "raw, name, scale",
    [("in", "inches", 25.4), ("Meters", "meters", 1000.0), (" mm ", "millimeters", 1.0), ("parsecs", "millimeters", 1.0)],
)
def test_unit_aliases(config_home: Path, raw: str, name: str, scale: float):
    _write_config(config_home, {"units": raw})
    settings = _config.get_unit_settings()
    assert settings.name == name
    assert settings.scale_to_mm == scale


@pytest.mark.parametrize("raw, expected", [(128, 128), ("16", 16), (1, 3), ("lots", 64), (True, 64), (None, 64)])
def test_sampling_settings(config_home: Path, raw, expected: int):
    _write_config(config_home, {"segments_per_circle": raw})
    assert _config.get_sampling_settings().segments_per_circle == expected


def test_invalid_json_falls_back_to_defaults(config_home: Path):
    config_home.mkdir(parents=True, exist_ok=True)
    (config_home / "shapekit.cfg").write_text("{not json")
    assert _config.get_unit_settings().name == "millimeters"
    assert _config.get_sampling_settings().segments_per_circle == 64
