"""Tests for secondary subtitle resolution."""

from subselect.domain import Track, TrackState, TrackType
from subselect.policy.types import PreferenceRule
from subselect.selection import RuleMatcher, resolve_secondary


def _audio(track_id, lang="und", **kwargs):
    return Track(id=track_id, track_type=TrackType.AUDIO, lang=lang, **kwargs)


def _sub(track_id, lang="und", **kwargs):
    return Track(id=track_id, track_type=TrackType.SUBTITLE, lang=lang, **kwargs)


SUBS = [
    _sub(1, "eng", title="Full"),
    _sub(2, "eng", title="Signs"),
    _sub(3, "jpn"),
]


def _resolve(rule, primary=SUBS[0], audio=None, matcher=None):
    return resolve_secondary(
        matcher or RuleMatcher(),
        rule,
        audio or _audio(1, "jpn"),
        primary,
        primary.id if primary else TrackState.DISABLED,
        SUBS,
    )


class TestResolveSecondary:
    def test_absent_secondary_slang_is_unset(self):
        assert _resolve(PreferenceRule(slang=("eng",))) == (TrackState.UNSET, None)

    def test_no_disables(self):
        rule = PreferenceRule(slang=("eng",), secondary_slang=("no", "jpn"))
        assert _resolve(rule) == (TrackState.DISABLED, None)

    def test_no_after_unmatched_entry(self):
        rule = PreferenceRule(slang=("eng",), secondary_slang=("ger", "no"))
        assert _resolve(rule)[0] is TrackState.DISABLED

    def test_match_found(self):
        rule = PreferenceRule(slang=("eng",), secondary_slang=("jpn",))
        assert _resolve(rule) == (3, SUBS[2])

    def test_primary_track_excluded(self):
        rule = PreferenceRule(slang=("eng",), secondary_slang=("eng",))
        assert _resolve(rule)[0] == 2

    def test_secondary_filters(self):
        rule = PreferenceRule(
            slang=("jpn",),
            secondary_slang=("eng",),
            secondary_blacklist=("full",),
        )
        assert _resolve(rule, primary=SUBS[2])[0] == 2

    def test_secondary_blacklist_overrides_whitelist(self):
        subs = [
            _sub(1, "jpn"),
            _sub(2, "eng", title="Full Signs"),
            _sub(3, "eng", title="Full"),
        ]
        rule = PreferenceRule(
            slang=("jpn",),
            secondary_slang=("eng",),
            secondary_whitelist=("full",),
            secondary_blacklist=("sign",),
        )
        result = resolve_secondary(
            RuleMatcher(), rule, _audio(1, "jpn"), subs[0], 1, subs
        )
        assert result == (3, subs[2])

    def test_condition_sees_primary_and_candidate(self):
        rule = PreferenceRule(
            slang=("eng",),
            secondary_slang=("*",),
            secondary_condition="secondary_sub.lang != sub.lang",
        )
        assert _resolve(rule)[0] == 3

    def test_condition_with_disabled_primary(self):
        rule = PreferenceRule(
            slang=("no",),
            secondary_slang=("*",),
            secondary_condition="sub == nil and secondary_sub.lang == 'jpn'",
        )
        assert _resolve(rule, primary=None)[0] == 3

    def test_nothing_matches_is_unset(self):
        rule = PreferenceRule(slang=("eng",), secondary_slang=("ger",))
        assert _resolve(rule) == (TrackState.UNSET, None)

    def test_explicit_forced_subs_applies(self):
        subs_rule = PreferenceRule(slang=("jpn",), secondary_slang=("eng",))
        forced = _sub(4, "eng", forced=True)
        result = resolve_secondary(
            RuleMatcher(explicit_forced_subs=True),
            subs_rule,
            _audio(1),
            SUBS[2],
            3,
            [SUBS[2], forced],
        )
        assert result == (TrackState.UNSET, None)
