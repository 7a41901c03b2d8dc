from __future__ import annotations

import os
from pathlib import Path

import pytest

from shapekit import _config
from shapekit.modeling.builder import PathRecorder

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def pytest_configure():
    os.environ.setdefault("PYVISTA_OFF_SCREEN", "true")
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(autouse=True)
def config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the user config at a throwaway directory."""
    config_dir = tmp_path / ".shapekit"
    monkeypatch.setattr(_config, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(_config, "CONFIG_FILE", config_dir / "shapekit.cfg")
    return config_dir


@pytest.fixture
def recorder() -> PathRecorder:
    return PathRecorder()


@pytest.fixture
def project_root() -> Path:
    return PROJECT_ROOT


@pytest.fixture
def examples_dir(project_root: Path) -> Path:
    return project_root / "docs" / "examples" / "shapes"
