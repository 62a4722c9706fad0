"""Domain models and enums for subselect.

Usage:
    from subselect.domain import Track, SelectionResult, TrackState
"""

from .enums import TrackState, TrackType
from .models import (
    UNDEFINED_LANGUAGE,
    SelectionResult,
    Track,
    TrackDecision,
    decision_to_property,
)

__all__ = [
    # Models
    "SelectionResult",
    "Track",
    "TrackDecision",
    "UNDEFINED_LANGUAGE",
    "decision_to_property",
    # Enums
    "TrackState",
    "TrackType",
]
