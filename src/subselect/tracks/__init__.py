"""Track list parsing and the per-session track registry."""

from subselect.tracks.parsers import parse_ffprobe_streams, parse_track_list
from subselect.tracks.registry import TrackListError, TrackRegistry

__all__ = [
    "TrackListError",
    "TrackRegistry",
    "parse_ffprobe_streams",
    "parse_track_list",
]
