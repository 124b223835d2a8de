"""Pytest configuration and shared fixtures for cofi tests."""

import json
from pathlib import Path
from typing import Callable, List

import pytest

from cofi.models.window import WindowDescriptor, WindowSnapshot, WindowType

from .helpers import make_window


@pytest.fixture
def window() -> Callable[..., WindowDescriptor]:
    """Factory fixture for WindowDescriptor."""
    return make_window


@pytest.fixture
def sample_windows() -> List[WindowDescriptor]:
    """A small desktop: browser, terminal, editor, a dialog and a sticky panel."""
    return [
        make_window(1, "Mozilla Firefox", "firefox", "Navigator", desktop=0),
        make_window(2, "Terminal - bash", "Alacritty", "alacritty", desktop=0),
        make_window(3, "main.py - Visual Studio Code", "Code", "code", desktop=1),
        make_window(4, "Save As", "Gimp", "gimp", type=WindowType.SPECIAL, desktop=0),
        make_window(5, "Volume", "Pavucontrol", "pavucontrol", desktop=-1),
    ]


@pytest.fixture
def sample_snapshot(sample_windows) -> WindowSnapshot:
    """Snapshot of sample_windows with Firefox active on workspace 1."""
    return WindowSnapshot(
        windows=sample_windows,
        active_id=1,
        current_desktop=0,
        desktop_count=3,
        desktop_names=["web", "code", ""],
    )


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Temporary directory standing in for ~/.config/cofi."""
    directory = tmp_path / "cofi"
    directory.mkdir()
    return directory


@pytest.fixture
def harpoon_file(config_dir: Path) -> Path:
    return config_dir / "harpoon.json"


@pytest.fixture
def names_file(config_dir: Path) -> Path:
    return config_dir / "names.json"


@pytest.fixture
def write_json():
    """Write a JSON document to a path and return the path."""
    def _write(path: Path, data) -> Path:
        path.write_text(json.dumps(data, indent=2))
        return path
    return _write
