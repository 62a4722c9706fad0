"""CLI command that predicts the player's default audio track."""

from __future__ import annotations

from dataclasses import astuple
from pathlib import Path

import click

from subselect.cli.inputs import read_tracks
from subselect.cli.output import echo_json, format_option
from subselect.selection import (
    normalize_language_priority,
    parse_aid_option,
    predict_audio,
    prediction_key,
)


@click.command("predict")
@click.argument("tracks_json", type=click.Path(path_type=Path))
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
@format_option
def predict_command(tracks_json: Path, aid: str, alang: str, output_format: str) -> None:
    """Predict which audio track the player selects by default.

    Examples:

        subselect predict tracks.json --alang jpn,eng
    """
    json_output = output_format == "json"
    registry = read_tracks(tracks_json, json_output)
    priorities = normalize_language_priority(alang)
    audio = predict_audio(registry.audio, parse_aid_option(aid), priorities)

    if json_output:
        echo_json(
            {
                "audio_id": audio.id if audio else None,
                "track": audio.as_record() if audio else None,
                "candidates": [
                    {
                        "id": track.id,
                        "lang": track.lang,
                        "key": list(
                            astuple(
                                prediction_key(track, priorities, len(registry.audio))
                            )
                        ),
                    }
                    for track in registry.audio
                ],
            }
        )
        return

    if audio is None:
        click.echo("Predicted audio: none")
    else:
        click.echo(f"Predicted audio: {audio.describe()}")
