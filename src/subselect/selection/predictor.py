"""Default audio track prediction.

When subtitles are selected before the host has resolved its default
audio track (preload mode), the engine has to guess which audio track
the host will pick. The heuristic mirrors how players choose:

1. An explicit audio option wins (``no`` or a track id).
2. With zero or one audio track the answer is obvious.
3. A forced track is chosen immediately.
4. Otherwise the track with the greatest PredictionKey wins: language
   priority first, then the default flag, then earlier position.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from subselect.domain import Track

logger = logging.getLogger(__name__)

AidOption = Literal["auto", "no"] | int


@dataclass(frozen=True, order=True)
class PredictionKey:
    """Composite ranking key, compared as an ordered tuple.

    Attributes:
        priority_rank: n - j for a language at zero-based position j of an
            n-entry priority list, 0 when the language is not listed.
        is_default: 1 if the track carries the default flag.
        reverse_position: total track count minus the track id, so earlier
            tracks win ties.
    """

    priority_rank: int
    is_default: int
    reverse_position: int


def parse_aid_option(value: object) -> AidOption:
    """Normalize the host's audio-selection option.

    Args:
        value: ``"auto"``, ``"no"``, a track id (int or numeric string),
            or None (treated as auto).

    Returns:
        ``"auto"``, ``"no"`` or an int track id.
    """
    if value is None:
        return "auto"
    if isinstance(value, bool):
        return "no" if value is False else "auto"
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if text in ("auto", "no"):
        return text  # type: ignore[return-value]
    try:
        return int(text)
    except ValueError:
        logger.warning("Unrecognized audio option %r, assuming 'auto'", value)
        return "auto"


def normalize_language_priority(value: object) -> tuple[str, ...]:
    """Normalize the host's alang option (list or comma-separated string)."""
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(part.strip() for part in value.split(",") if part.strip())
    if isinstance(value, (list, tuple)):
        return tuple(str(part) for part in value if part)
    logger.warning("Ignoring alang option of type %s", type(value).__name__)
    return ()


def prediction_key(
    track: Track, alang_priority: Sequence[str], total_tracks: int
) -> PredictionKey:
    """Compute the ranking key for one audio track."""
    num_prefs = len(alang_priority)
    rank = 0
    for position, lang in enumerate(alang_priority):
        if track.lang == lang:
            rank = num_prefs - position
            break

    return PredictionKey(
        priority_rank=rank,
        is_default=1 if track.default else 0,
        reverse_position=max(total_tracks - track.id, 0),
    )


def predict_audio(
    audio_tracks: Sequence[Track],
    aid_option: object = "auto",
    alang_priority: object = (),
) -> Track | None:
    """Predict which audio track the host will select by default.

    Args:
        audio_tracks: Audio tracks in host list order.
        aid_option: Host audio-selection option (see parse_aid_option()).
        alang_priority: Host preferred audio languages, highest first.

    Returns:
        The predicted track, or None for "no audio".
    """
    option = parse_aid_option(aid_option)
    if option == "no":
        return None
    if option != "auto":
        for track in audio_tracks:
            if track.id == option:
                return track
        logger.debug("Audio option selects missing track %s", option)
        return None

    num_tracks = len(audio_tracks)
    if num_tracks == 0:
        return None
    if num_tracks == 1:
        return audio_tracks[0]

    priorities = normalize_language_priority(alang_priority)
    best: Track | None = None
    best_key: PredictionKey | None = None

    for track in audio_tracks:
        if track.forced:
            logger.debug("Predicted audio track %d (forced)", track.id)
            return track

        key = prediction_key(track, priorities, num_tracks)
        logger.debug("Audio track %d ranking key: %s", track.id, key)
        # Strict increase only: the first occurrence of the maximum wins
        if best_key is None or key > best_key:
            best_key = key
            best = track

    if best is not None:
        logger.info("Predicted audio track is %d", best.id)
    return best
