"""Secondary subtitle resolution for the winning rule."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from subselect.domain import Track, TrackDecision, TrackState
from subselect.policy.types import NO, PreferenceRule

if TYPE_CHECKING:
    from subselect.selection.matcher import RuleMatcher

logger = logging.getLogger(__name__)


def resolve_secondary(
    matcher: RuleMatcher,
    rule: PreferenceRule,
    audio: Track | None,
    primary: Track | None,
    primary_id: TrackDecision,
    subtitles: Sequence[Track],
) -> tuple[TrackDecision, Track | None]:
    """Pick the secondary subtitle once a primary decision exists.

    Args:
        matcher: Matcher providing the subtitle predicate and conditions.
        rule: The rule that produced the primary decision.
        audio: Audio candidate of the match (None for "no audio").
        primary: Chosen primary subtitle, None when it was disabled.
        primary_id: Primary decision; that track is never chosen again.
        subtitles: Subtitle tracks in host list order.

    Returns:
        (decision, track). UNSET when the rule has no secondary_slang or
        nothing matches; DISABLED when a ``no`` entry is reached first.
    """
    if rule.secondary_slang is None:
        return TrackState.UNSET, None

    for slang in rule.secondary_slang:
        if slang == NO:
            return TrackState.DISABLED, None

        logger.debug("Checking for secondary sub: %s", slang)
        for sub in subtitles:
            if sub.id == primary_id:
                continue
            if not matcher.is_valid_sub(
                sub, slang, rule.secondary_whitelist, rule.secondary_blacklist
            ):
                continue
            if matcher.conditions.check(
                rule.secondary_condition,
                audio=audio,
                sub=primary,
                secondary_sub=sub,
                secondary=True,
            ):
                return sub.id, sub

    return TrackState.UNSET, None
