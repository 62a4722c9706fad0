"""Domain models for subselect.

These models describe the immutable track snapshot the engine works on and
the selection it produces. They are independent of any particular host.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from subselect.domain.enums import TrackState, TrackType

# A track decision is either a concrete track id or one of the TrackState
# sentinels. Id 0 is reserved by hosts to mean "disabled".
TrackDecision = int | TrackState

UNDEFINED_LANGUAGE = "und"


def _empty_extra() -> Mapping[str, Any]:
    return MappingProxyType({})


@dataclass(frozen=True)
class Track:
    """An audio or subtitle track taken from the host's track list."""

    id: int
    track_type: TrackType
    lang: str = UNDEFINED_LANGUAGE
    title: str | None = None
    default: bool = False
    forced: bool = False
    codec: str | None = None
    # Every other host-supplied field (channels, external, ...), read-only.
    extra: Mapping[str, Any] = field(default_factory=_empty_extra, hash=False)

    def as_record(self) -> dict[str, Any]:
        """Return the track as a flat field dict, as hosts report it.

        Host-supplied extra fields are included, but never shadow the
        normalized core fields.
        """
        record = dict(self.extra)
        record.update(
            {
                "id": self.id,
                "type": self.track_type.value,
                "lang": self.lang,
                "title": self.title,
                "default": self.default,
                "forced": self.forced,
                "codec": self.codec,
            }
        )
        return record

    def describe(self) -> str:
        """Short human-readable label used in log messages."""
        label = f"#{self.id} {self.lang}"
        if self.title:
            label += f" ({self.title})"
        return label


@dataclass(frozen=True)
class SelectionResult:
    """Outcome of one run of the rule matcher.

    Each id field is a track id, TrackState.DISABLED or TrackState.UNSET.
    Visibility flags are None when the winning rule does not set them.
    """

    audio_id: TrackDecision = TrackState.UNSET
    sub_id: TrackDecision = TrackState.UNSET
    secondary_sub_id: TrackDecision = TrackState.UNSET
    sub_visibility: bool | None = None
    secondary_sub_visibility: bool | None = None

    @classmethod
    def unset(cls) -> SelectionResult:
        """Result returned when no rule matches: defer everything to the host."""
        return cls()

    @property
    def matched(self) -> bool:
        """True if a rule produced a primary subtitle decision."""
        return self.sub_id is not TrackState.UNSET

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "audio_id": _decision_value(self.audio_id),
            "sub_id": _decision_value(self.sub_id),
            "secondary_sub_id": _decision_value(self.secondary_sub_id),
            "sub_visibility": self.sub_visibility,
            "secondary_sub_visibility": self.secondary_sub_visibility,
        }


def _decision_value(decision: TrackDecision) -> int | str:
    if isinstance(decision, TrackState):
        return decision.value
    return decision


def decision_to_property(decision: TrackDecision) -> int | str | None:
    """Convert a decision to the value written to a host track property.

    Returns:
        The track id, ``"no"`` for DISABLED, or None for UNSET (no write).
    """
    if decision is TrackState.UNSET:
        return None
    if decision is TrackState.DISABLED:
        return "no"
    return decision
