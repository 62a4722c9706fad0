"""Per-file session state owned by the selection controller."""

from __future__ import annotations

from dataclasses import dataclass, field

from subselect.domain import Track
from subselect.tracks import TrackRegistry


@dataclass
class SessionState:
    """Mutable state for the file currently loaded in the host.

    Attributes:
        enabled: Whether automatic selection is switched on. Survives
            file changes; only toggle() changes it.
        registry: Track snapshot for the current file.
        latest_audio: Audio track current in the host after the last
            applied selection (None for no audio).
        predicted_audio: Audio track predicted during preload, if any.
        track_auto_selection: Mirror of the host's track-auto-selection
            flag.
    """

    enabled: bool = True
    registry: TrackRegistry = field(default_factory=TrackRegistry)
    latest_audio: Track | None = None
    predicted_audio: Track | None = None
    track_auto_selection: bool = True

    def reset_file(self) -> None:
        """Forget everything tied to the previous file."""
        self.registry = TrackRegistry()
        self.latest_audio = None
        self.predicted_audio = None
