"""Shared test fixtures for the osd test suite."""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Add the osd package to sys.path so imports work without installation
_OSD_ROOT = Path(__file__).resolve().parent.parent / "usr" / "share" / "osd"
if str(_OSD_ROOT.parent) not in sys.path:
    sys.path.insert(0, str(_OSD_ROOT.parent))


@pytest.fixture(autouse=True)
def isolated_home(tmp_path_factory, monkeypatch):
    """Keep tests away from the real ~/.config/osd and OSD_* variables."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    for var in ("OSD_API_KEY", "OSD_USERNAME", "OSD_PASSWORD", "OSD_LANGUAGE",
                "OSD_USER_AGENT", "XDG_CURRENT_DESKTOP"):
        monkeypatch.delenv(var, raising=False)
    return home


@pytest.fixture
def make_response():
    """Build a fake requests.Response."""
    def _make(status=200, json_data=None, text="", chunks=None):
        response = MagicMock()
        response.status_code = status
        response.text = text
        if isinstance(json_data, Exception):
            response.json.side_effect = json_data
        else:
            response.json.return_value = json_data
        response.iter_content.return_value = chunks or []
        return response
    return _make


@pytest.fixture
def movie_file(tmp_path):
    """200 KiB movie file filled with 0x01 bytes."""
    path = tmp_path / "movie.mkv"
    path.write_bytes(b"\x01" * (200 * 1024))
    return path
