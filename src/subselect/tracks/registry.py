"""Track registry: the per-session snapshot of audio and subtitle tracks."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from subselect.domain import Track, TrackType
from subselect.tracks.parsers import parse_ffprobe_streams, parse_track_list

logger = logging.getLogger(__name__)


class TrackListError(ValueError):
    """Raised when raw track data has the wrong overall shape."""


@dataclass(frozen=True)
class TrackRegistry:
    """Ordered audio and subtitle tracks for the current file.

    The registry is never mutated; hosts build a new one on every file
    load and every track-count change.
    """

    audio: tuple[Track, ...] = ()
    subtitles: tuple[Track, ...] = ()

    @classmethod
    def from_tracks(cls, tracks: list[Track]) -> TrackRegistry:
        """Split already-parsed tracks by type, keeping list order."""
        return cls(
            audio=tuple(t for t in tracks if t.track_type is TrackType.AUDIO),
            subtitles=tuple(t for t in tracks if t.track_type is TrackType.SUBTITLE),
        )

    @classmethod
    def from_track_list(cls, raw: Any) -> TrackRegistry:
        """Build a registry from an mpv-style ``track-list`` value.

        Raises:
            TrackListError: If raw is not a list.
        """
        if raw is None:
            return cls()
        if not isinstance(raw, list):
            raise TrackListError(
                f"Track list must be a list, got {type(raw).__name__}"
            )
        registry = cls.from_tracks(parse_track_list(raw))
        logger.debug(
            "Track registry built: %d audio, %d subtitle tracks",
            len(registry.audio),
            len(registry.subtitles),
        )
        return registry

    @classmethod
    def from_ffprobe(cls, data: Any) -> TrackRegistry:
        """Build a registry from ``ffprobe -show_streams -of json`` output.

        Raises:
            TrackListError: If data has no ``streams`` list.
        """
        if not isinstance(data, dict) or not isinstance(data.get("streams"), list):
            raise TrackListError("ffprobe output must contain a 'streams' list")
        return cls.from_tracks(parse_ffprobe_streams(data["streams"]))

    @classmethod
    def from_json_data(cls, data: Any) -> TrackRegistry:
        """Build a registry from either supported JSON shape.

        A top-level list is an mpv track list; a mapping with ``streams``
        is ffprobe output; a mapping with ``track-list`` wraps an mpv list.
        """
        if isinstance(data, dict):
            if "streams" in data:
                return cls.from_ffprobe(data)
            if "track-list" in data:
                return cls.from_track_list(data["track-list"])
            raise TrackListError(
                "Track data must be a list, or a mapping with 'streams' or 'track-list'"
            )
        return cls.from_track_list(data)

    def audio_by_id(self, track_id: Any) -> Track | None:
        """Return the audio track with the given id, or None."""
        return _find_by_id(self.audio, track_id)

    def subtitle_by_id(self, track_id: Any) -> Track | None:
        """Return the subtitle track with the given id, or None."""
        return _find_by_id(self.subtitles, track_id)


def _find_by_id(tracks: tuple[Track, ...], track_id: Any) -> Track | None:
    if isinstance(track_id, str):
        try:
            track_id = int(track_id)
        except ValueError:
            return None
    for track in tracks:
        if track.id == track_id:
            return track
    return None
