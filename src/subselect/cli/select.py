"""CLI command that runs a full selection against a simulated player.

The command loads a track list and the preference file, then replays the
events a player emits while opening a file (preload, playback start)
against an in-memory host. It prints the selection and every property
write the controller made.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import click

from subselect.cli.inputs import (
    load_selection_config,
    read_preferences,
    read_tracks,
    registry_to_track_list,
)
from subselect.cli.output import echo_json, format_option
from subselect.controller import InMemoryHost, SelectionController
from subselect.domain import SelectionResult, Track, TrackDecision, TrackState
from subselect.selection import predict_audio
from subselect.tracks import TrackRegistry

logger = logging.getLogger(__name__)


@click.command("select")
@click.argument("tracks_json", type=click.Path(path_type=Path))
@click.option(
    "--prefs",
    "prefs_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Preference file (default: <config_dir>/sub-select.json).",
)
@click.option(
    "--aid",
    default="auto",
    show_default=True,
    help="Player audio option: auto, no or a track id.",
)
@click.option(
    "--alang",
    default="",
    help="Preferred audio languages, highest first, comma separated.",
)
@click.option(
    "--mode",
    type=click.Choice(["preload", "async"]),
    default=None,
    help="Select before playback (preload) or after it starts (async).",
)
@click.option(
    "--select-audio/--no-select-audio",
    default=None,
    help="Also select the audio track from the preferences.",
)
@click.option(
    "--explicit-forced-subs/--no-explicit-forced-subs",
    default=None,
    help="Only pick forced subtitles when a rule asks for 'forced'.",
)
@format_option
@click.pass_context
def select_command(
    ctx: click.Context,
    tracks_json: Path,
    prefs_path: Path | None,
    aid: str,
    alang: str,
    mode: str | None,
    select_audio: bool | None,
    explicit_forced_subs: bool | None,
    output_format: str,
) -> None:
    """Select subtitle (and optionally audio) tracks for a track list.

    TRACKS_JSON is an mpv track-list dump or ffprobe -show_streams JSON.
    A track list that matches no rule is not an error: nothing is
    written and the command exits 0.

    Examples:

        # Select with the default preference file
        subselect select tracks.json

        # Japanese first, select after playback starts
        subselect select tracks.json --alang jpn,eng --mode async

        # JSON output for tooling
        subselect select tracks.json --prefs prefs.json --format json
    """
    json_output = output_format == "json"
    config = load_selection_config(
        ctx,
        json_output,
        preload=None if mode is None else mode == "preload",
        select_audio=select_audio,
        explicit_forced_subs=explicit_forced_subs,
    )
    registry = read_tracks(tracks_json, json_output)
    rules = read_preferences(prefs_path or config.preferences_path, json_output)

    host = InMemoryHost(
        {
            "track-list": registry_to_track_list(registry),
            "options/aid": aid,
            "options/sid": "auto",
            "alang": alang,
            "track-auto-selection": True,
        }
    )
    controller = SelectionController(host, rules, config)

    controller.on_preloaded()
    _start_playback(host, registry)
    controller.on_file_loaded()

    result = controller.last_result or SelectionResult.unset()
    if json_output:
        echo_json(
            {
                "mode": "preload" if config.preload else "async",
                "predicted_audio": _track_id(controller.session.predicted_audio),
                "result": result.to_dict(),
                "writes": [
                    {"property": name, "value": value} for name, value in host.writes
                ],
            }
        )
        return

    _output_human(registry, result, host.writes)


def _start_playback(host: InMemoryHost, registry: TrackRegistry) -> None:
    """Resolve the audio track the way the player would on playback start."""
    if host.get_property("aid") is not None:
        return
    audio = predict_audio(
        registry.audio, host.get_property("options/aid"), host.get_property("alang")
    )
    # Direct assignment: the player's own choice is not a controller write
    host.properties["aid"] = audio.id if audio else "no"
    logger.debug("Player started with audio %s", host.properties["aid"])


def _track_id(track: Track | None) -> int | None:
    return track.id if track else None


def _describe(decision: TrackDecision, track: Track | None) -> str:
    if decision is TrackState.UNSET:
        return "not set"
    if decision is TrackState.DISABLED:
        return "disabled"
    return track.describe() if track else f"#{decision}"


def _output_human(
    registry: TrackRegistry,
    result: SelectionResult,
    writes: list[tuple[str, Any]],
) -> None:
    if not result.matched:
        click.echo("No preference matched; player defaults kept.")
    else:
        click.echo(
            "Audio:               "
            + _describe(result.audio_id, registry.audio_by_id(result.audio_id))
        )
        click.echo(
            "Subtitles:           "
            + _describe(result.sub_id, registry.subtitle_by_id(result.sub_id))
        )
        click.echo(
            "Secondary subtitles: "
            + _describe(
                result.secondary_sub_id,
                registry.subtitle_by_id(result.secondary_sub_id),
            )
        )

    click.echo()
    if not writes:
        click.echo("No properties changed.")
        return
    click.echo("Properties set:")
    for name, value in writes:
        click.echo(f"  {name} = {value}")
