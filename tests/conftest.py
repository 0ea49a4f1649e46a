"""Shared fixtures: headless Qt and point helpers."""

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt6.QtGui import QGuiApplication

from vector_ink.core.geometry import VectorPoint


@pytest.fixture(scope="session", autouse=True)
def qt_app():
    """QImage painting and font metrics need a GUI application."""
    app = QGuiApplication.instance()
    if app is None:
        app = QGuiApplication([])
    yield app


@pytest.fixture(autouse=True)
def isolated_data_dir(tmp_path, monkeypatch):
    """Keep Config's per-user folders inside the test's temp dir."""
    monkeypatch.setenv("VECTOR_INK_DATA_DIR", str(tmp_path / "user_data"))


def pts(*coords, pressure=1.0):
    """Build points from (x, y) pairs with fixed timestamps."""
    return [VectorPoint(x, y, pressure, i * 10) for i, (x, y) in enumerate(coords)]
