"""Rule matcher: finds the first valid audio/subtitle combination.

The search is depth-first and strictly ordered:

    for each rule (list order)
      for each audio candidate (real tracks, then "no audio")
        if the audio matches the rule's alang
          for each slang entry (declared order)
            find the primary subtitle (track list order)
            if found: resolve the secondary subtitle and return

The first rule that yields a primary subtitle decision wins, regardless
of how good a later rule's audio match would be. When nothing matches,
every field of the result is UNSET and the host keeps its defaults.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from subselect.domain import SelectionResult, Track, TrackDecision, TrackState
from subselect.policy.conditions import ConditionEvaluator
from subselect.policy.matchers import PatternMatcher
from subselect.policy.types import ANY, DEFAULT, FORCED, NO, PreferenceRule
from subselect.selection.secondary import resolve_secondary

logger = logging.getLogger(__name__)


class _NotGiven:
    """Marker type for "no manual audio was passed"."""

    def __repr__(self) -> str:
        return "NOT_GIVEN"


NOT_GIVEN = _NotGiven()


class RuleMatcher:
    """Matches preference rules against a track snapshot.

    The matcher holds no per-file state; the same instance can be reused
    across files and calls.
    """

    def __init__(
        self,
        explicit_forced_subs: bool = False,
        patterns: PatternMatcher | None = None,
        conditions: ConditionEvaluator | None = None,
    ) -> None:
        """Initialize the matcher.

        Args:
            explicit_forced_subs: Only select forced subtitles when a rule
                asks for them with the ``forced`` slang token.
            patterns: Pattern matcher (a private one is created if omitted).
            conditions: Condition evaluator (a private one is created if
                omitted).
        """
        self.explicit_forced_subs = explicit_forced_subs
        self.patterns = patterns or PatternMatcher()
        self.conditions = conditions or ConditionEvaluator()

    def is_valid_audio(self, audio: Track | None, alangs: Sequence[str]) -> bool:
        """Check an audio candidate (None for "no audio") against alang entries."""
        for lang in alangs:
            logger.debug("Checking for valid audio: %s", lang)
            if lang == NO:
                if audio is None:
                    return True
                continue
            if audio is None:
                continue
            if lang == ANY:
                return True
            if lang == FORCED:
                if audio.forced:
                    return True
            elif lang == DEFAULT:
                if audio.default:
                    return True
            elif self.patterns.matches(audio.lang, lang):
                return True
        return False

    def is_valid_sub(
        self,
        sub: Track,
        slang: str,
        whitelist: Sequence[str] | None = None,
        blacklist: Sequence[str] | None = None,
    ) -> bool:
        """Check a subtitle track against one slang entry and title filters."""
        if slang == DEFAULT:
            if not sub.default:
                return False
        elif slang == FORCED:
            if not sub.forced:
                return False
        else:
            if sub.forced and self.explicit_forced_subs:
                return False
            if slang != ANY and not self.patterns.matches(sub.lang, slang):
                return False

        passes_whitelist = whitelist is None or self.patterns.title_matches(
            sub.title, whitelist
        )
        passes_blacklist = blacklist is None or not self.patterns.title_matches(
            sub.title, blacklist
        )

        logger.debug(
            "%s %s whitelist: %s | %s blacklist: %s",
            sub.title,
            "passed" if passes_whitelist else "failed",
            whitelist,
            "passed" if passes_blacklist else "failed",
            blacklist,
        )
        return passes_whitelist and passes_blacklist

    def find_primary(
        self,
        rule: PreferenceRule,
        audio: Track | None,
        slang: str,
        subtitles: Sequence[Track],
    ) -> tuple[TrackDecision, Track | None] | None:
        """Resolve the primary subtitle for one slang entry.

        Returns:
            (decision, track) on success, where decision is a track id or
            DISABLED (track is None then), or None if nothing satisfies
            the entry.
        """
        if slang == NO:
            if self.conditions.check(rule.condition, audio=audio):
                return TrackState.DISABLED, None
            return None

        for sub in subtitles:
            if self.is_valid_sub(
                sub, slang, rule.whitelist, rule.blacklist
            ) and self.conditions.check(rule.condition, audio=audio, sub=sub):
                return sub.id, sub
        return None

    def select(
        self,
        rules: Sequence[PreferenceRule],
        audio_tracks: Sequence[Track],
        subtitles: Sequence[Track],
        manual_audio: Track | None | _NotGiven = NOT_GIVEN,
    ) -> SelectionResult:
        """Find the first rule combination that matches the tracks.

        Args:
            rules: Preference rules in priority order.
            audio_tracks: Audio tracks in host list order.
            subtitles: Subtitle tracks in host list order.
            manual_audio: When given, the only audio candidate (None means
                "no audio"). When omitted, every audio track is tried,
                followed by "no audio".

        Returns:
            The selection; all fields UNSET when no rule matches.
        """
        candidates: list[Track | None]
        if isinstance(manual_audio, _NotGiven):
            candidates = [*audio_tracks, None]
            logger.debug("Selecting audio and subtitles")
        else:
            candidates = [manual_audio]
            logger.debug(
                "Selecting subtitles for audio %s",
                manual_audio.describe() if manual_audio else "none",
            )

        for rule in rules:
            logger.debug("Checking preference: %s", rule.to_dict())

            for audio in candidates:
                if not self.is_valid_audio(audio, rule.alang):
                    continue
                logger.debug("Valid audio preference found: %s", list(rule.alang))
                audio_id: TrackDecision = (
                    audio.id if audio is not None else TrackState.DISABLED
                )

                for slang in rule.slang:
                    logger.debug("Checking for valid sub: %s", slang)
                    primary = self.find_primary(rule, audio, slang, subtitles)
                    if primary is None:
                        continue

                    sub_id, sub_track = primary
                    secondary_id, secondary_track = resolve_secondary(
                        self, rule, audio, sub_track, sub_id, subtitles
                    )
                    result = SelectionResult(
                        audio_id=audio_id,
                        sub_id=sub_id,
                        secondary_sub_id=secondary_id,
                        sub_visibility=rule.sub_visibility,
                        secondary_sub_visibility=rule.secondary_sub_visibility,
                    )
                    _log_selection(result, audio, sub_track, secondary_track)
                    return result

        logger.info("No valid subtitles matching the preferences found")
        return SelectionResult.unset()


def _describe(decision: TrackDecision, track: Track | None) -> str:
    if decision is TrackState.UNSET:
        return "not set"
    if decision is TrackState.DISABLED:
        return "disabled"
    if track is None:
        return f"#{decision}"
    return track.describe()


def _log_selection(
    result: SelectionResult,
    audio: Track | None,
    sub: Track | None,
    secondary: Track | None,
) -> None:
    logger.info(
        "Tracks selected: audio => %s; subtitles => %s; secondary subtitles => %s",
        _describe(result.audio_id, audio),
        _describe(result.sub_id, sub),
        _describe(result.secondary_sub_id, secondary),
    )
