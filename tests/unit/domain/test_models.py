"""Tests for domain models."""

from types import MappingProxyType

import pytest

from subselect.domain import (
    SelectionResult,
    Track,
    TrackState,
    TrackType,
    decision_to_property,
)


class TestTrackType:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("audio", TrackType.AUDIO),
            ("sub", TrackType.SUBTITLE),
            ("subtitle", TrackType.SUBTITLE),
            ("AUDIO", TrackType.AUDIO),
            ("video", None),
            (None, None),
        ],
    )
    def test_from_host(self, value, expected):
        assert TrackType.from_host(value) is expected


class TestTrack:
    def test_defaults(self):
        track = Track(id=1, track_type=TrackType.AUDIO)
        assert track.lang == "und"
        assert track.title is None
        assert track.default is False
        assert track.forced is False

    def test_is_immutable(self):
        track = Track(id=1, track_type=TrackType.AUDIO)
        with pytest.raises(AttributeError):
            track.lang = "eng"  # type: ignore[misc]

    def test_as_record_includes_core_and_extra_fields(self):
        track = Track(
            id=2,
            track_type=TrackType.SUBTITLE,
            lang="eng",
            title="Signs",
            forced=True,
            extra=MappingProxyType({"external": True}),
        )
        record = track.as_record()
        assert record["id"] == 2
        assert record["type"] == "sub"
        assert record["lang"] == "eng"
        assert record["title"] == "Signs"
        assert record["forced"] is True
        assert record["external"] is True

    def test_extra_never_shadows_core_fields(self):
        track = Track(
            id=1,
            track_type=TrackType.AUDIO,
            lang="jpn",
            extra=MappingProxyType({"lang": "xxx"}),
        )
        assert track.as_record()["lang"] == "jpn"

    def test_describe(self):
        assert Track(id=3, track_type=TrackType.SUBTITLE, lang="eng").describe() == (
            "#3 eng"
        )
        titled = Track(id=3, track_type=TrackType.SUBTITLE, lang="eng", title="Full")
        assert titled.describe() == "#3 eng (Full)"


class TestSelectionResult:
    def test_unset_is_not_matched(self):
        result = SelectionResult.unset()
        assert result.audio_id is TrackState.UNSET
        assert result.sub_id is TrackState.UNSET
        assert result.secondary_sub_id is TrackState.UNSET
        assert not result.matched

    def test_disabled_subtitles_count_as_matched(self):
        result = SelectionResult(audio_id=1, sub_id=TrackState.DISABLED)
        assert result.matched

    def test_to_dict(self):
        result = SelectionResult(
            audio_id=TrackState.DISABLED, sub_id=3, sub_visibility=False
        )
        assert result.to_dict() == {
            "audio_id": "disabled",
            "sub_id": 3,
            "secondary_sub_id": "unset",
            "sub_visibility": False,
            "secondary_sub_visibility": None,
        }


class TestDecisionToProperty:
    def test_track_id(self):
        assert decision_to_property(4) == 4

    def test_disabled(self):
        assert decision_to_property(TrackState.DISABLED) == "no"

    def test_unset(self):
        assert decision_to_property(TrackState.UNSET) is None
