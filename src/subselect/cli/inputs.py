"""Input loading shared by CLI commands.

Each helper converts library errors into CLI exits with the matching
ExitCode, so command bodies only deal with successfully loaded data.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import click

from subselect.cli.exit_codes import ExitCode
from subselect.cli.output import error_exit
from subselect.config import SelectionConfig, get_config
from subselect.exceptions import ConfigError
from subselect.policy import PreferenceError, PreferenceRule, load_preferences
from subselect.tracks import TrackListError, TrackRegistry

logger = logging.getLogger(__name__)


def load_selection_config(
    ctx: click.Context, json_output: bool, **overrides: Any
) -> SelectionConfig:
    """Load the selection config for the current invocation."""
    config_path = (ctx.obj or {}).get("config_path")
    try:
        return get_config(config_path=config_path, **overrides).selection
    except ConfigError as e:
        error_exit(str(e), ExitCode.CONFIG_ERROR, json_output)


def read_tracks(path: Path, json_output: bool) -> TrackRegistry:
    """Read a track list file (mpv track list or ffprobe JSON)."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        error_exit(f"Track file not found: {path}", ExitCode.INPUT_ERROR, json_output)
    except (OSError, UnicodeDecodeError) as e:
        error_exit(
            f"Cannot read track file {path}: {e}", ExitCode.INPUT_ERROR, json_output
        )
    except json.JSONDecodeError as e:
        error_exit(
            f"Invalid JSON in track file {path}: {e}", ExitCode.INPUT_ERROR, json_output
        )

    try:
        return TrackRegistry.from_json_data(data)
    except TrackListError as e:
        error_exit(str(e), ExitCode.INPUT_ERROR, json_output)


def read_preferences(path: Path, json_output: bool) -> tuple[PreferenceRule, ...]:
    """Load the preference file, exiting on any load or validation error."""
    try:
        return load_preferences(path)
    except PreferenceError as e:
        error_exit(str(e), ExitCode.PREFERENCE_VALIDATION_ERROR, json_output)


def registry_to_track_list(registry: TrackRegistry) -> list[dict[str, Any]]:
    """Render a registry back into an mpv-style track list."""
    return [track.as_record() for track in (*registry.audio, *registry.subtitles)]
