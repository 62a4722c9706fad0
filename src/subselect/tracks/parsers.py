"""Pure parsing functions for host track lists.

These functions transform raw track data (an mpv-style ``track-list`` or
ffprobe ``-show_streams`` JSON) into subselect Track objects.
All functions are pure (no I/O, no side effects) for easy testing.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any

from subselect.domain import UNDEFINED_LANGUAGE, Track, TrackType

logger = logging.getLogger(__name__)

# Fields normalized into Track attributes; everything else lands in extra.
_CORE_FIELDS = frozenset(
    {"id", "type", "lang", "title", "default", "forced", "codec"}
)


def sanitize_string(value: Any) -> str | None:
    """Return value as a UTF-8 safe string, or None for missing/non-string."""
    if value is None or not isinstance(value, str):
        return None
    return value.encode("utf-8", errors="replace").decode("utf-8")


def _parse_track_id(value: Any) -> int | None:
    # bool is an int subclass; a flag is never a track id
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    if value <= 0:
        return None
    return value


def parse_track_entry(entry: Any) -> Track | None:
    """Parse one entry of an mpv-style track list.

    Args:
        entry: Mapping with ``id``, ``type``, ``lang``, ``title``,
            ``default``, ``forced``, ``codec`` and any other host fields.

    Returns:
        Track, or None if the entry is not an audio/subtitle track or is
        malformed (a warning is logged for malformed entries).
    """
    if not isinstance(entry, dict):
        logger.warning("Ignoring track entry that is not a mapping: %r", entry)
        return None

    track_type = TrackType.from_host(entry.get("type"))
    if track_type is None:
        return None

    track_id = _parse_track_id(entry.get("id"))
    if track_id is None:
        logger.warning(
            "Ignoring %s track with invalid id: %r",
            track_type.value,
            entry.get("id"),
        )
        return None

    lang = sanitize_string(entry.get("lang")) or UNDEFINED_LANGUAGE
    extra = {key: value for key, value in entry.items() if key not in _CORE_FIELDS}

    return Track(
        id=track_id,
        track_type=track_type,
        lang=lang,
        title=sanitize_string(entry.get("title")),
        default=bool(entry.get("default", False)),
        forced=bool(entry.get("forced", False)),
        codec=sanitize_string(entry.get("codec")),
        extra=MappingProxyType(extra),
    )


def parse_track_list(entries: list[Any]) -> list[Track]:
    """Parse an mpv-style track list, keeping list order.

    Duplicate ids within one track type are skipped with a warning; the
    first occurrence wins.
    """
    tracks: list[Track] = []
    seen: set[tuple[TrackType, int]] = set()

    for entry in entries:
        track = parse_track_entry(entry)
        if track is None:
            continue
        key = (track.track_type, track.id)
        if key in seen:
            logger.warning(
                "Duplicate %s track id %d, skipping", track.track_type.value, track.id
            )
            continue
        seen.add(key)
        tracks.append(track)

    return tracks


def parse_ffprobe_streams(streams: list[Any]) -> list[Track]:
    """Parse ffprobe stream dicts into Tracks.

    Audio and subtitle streams are numbered per type starting at 1, in
    stream order, matching how players assign track ids.

    Args:
        streams: The ``streams`` list from ``ffprobe -show_streams`` JSON.

    Returns:
        Audio and subtitle tracks in stream order.
    """
    tracks: list[Track] = []
    counters = {TrackType.AUDIO: 0, TrackType.SUBTITLE: 0}

    for stream in streams:
        if not isinstance(stream, dict):
            logger.warning("Ignoring ffprobe stream that is not a mapping")
            continue
        track_type = TrackType.from_host(stream.get("codec_type"))
        if track_type is None:
            continue

        counters[track_type] += 1
        disposition = stream.get("disposition") or {}
        tags = stream.get("tags") or {}

        extra: dict[str, Any] = {"ff-index": stream.get("index")}
        for key in ("channels", "channel_layout", "sample_rate", "bit_rate"):
            if stream.get(key) is not None:
                extra[key] = stream[key]

        tracks.append(
            Track(
                id=counters[track_type],
                track_type=track_type,
                lang=sanitize_string(tags.get("language")) or UNDEFINED_LANGUAGE,
                title=sanitize_string(tags.get("title")),
                default=disposition.get("default", 0) == 1,
                forced=disposition.get("forced", 0) == 1,
                codec=sanitize_string(stream.get("codec_name")),
                extra=MappingProxyType(extra),
            )
        )

    return tracks
