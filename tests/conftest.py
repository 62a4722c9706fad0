"""Shared test fixtures for subselect."""

import json
import logging
import os
from pathlib import Path

import pytest

from subselect.config import clear_config_cache
from subselect.tracks import TrackRegistry


@pytest.fixture(autouse=True)
def isolate_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Keep tests away from the user's config file and SUBSELECT_* env."""
    for name in list(os.environ):
        if name.startswith("SUBSELECT_"):
            monkeypatch.delenv(name)
    monkeypatch.setenv("SUBSELECT_CONFIG_PATH", str(tmp_path / "no-config.toml"))
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture(autouse=True)
def reset_root_logger():
    """Save and restore root logger state between tests."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    root.handlers[:] = original_handlers
    root.setLevel(original_level)


@pytest.fixture
def anime_track_list() -> list[dict]:
    """mpv track list of a typical anime release."""
    return [
        {"id": 1, "type": "video", "codec": "h264"},
        {"id": 1, "type": "audio", "lang": "jpn", "default": True, "codec": "aac"},
        {"id": 2, "type": "audio", "lang": "eng", "codec": "aac"},
        {"id": 1, "type": "sub", "lang": "eng", "title": "Signs & Songs"},
        {"id": 2, "type": "sub", "lang": "eng", "title": "Full Subtitles"},
        {"id": 3, "type": "sub", "lang": "jpn"},
    ]


@pytest.fixture
def anime_registry(anime_track_list: list[dict]) -> TrackRegistry:
    """Registry built from anime_track_list."""
    return TrackRegistry.from_track_list(anime_track_list)


@pytest.fixture
def write_json(tmp_path: Path):
    """Write data as JSON to a file under tmp_path and return its path."""

    def _write(name: str, data) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
