"""Tests for the select and predict commands."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from subselect.cli import main
from subselect.cli.exit_codes import ExitCode

PREFS = [
    {"alang": "jpn", "slang": "eng", "blacklist": "sign"},
    {"alang": "eng", "slang": "no"},
]


@pytest.fixture
def tracks_file(write_json, anime_track_list) -> Path:
    return write_json("tracks.json", anime_track_list)


@pytest.fixture
def prefs_file(write_json) -> Path:
    return write_json("sub-select.json", PREFS)


def _select(*args: str):
    runner = CliRunner()
    return runner.invoke(main, ["--log-level", "error", "select", *args])


class TestSelectCommand:
    def test_help(self) -> None:
        result = CliRunner().invoke(main, ["select", "--help"])
        assert result.exit_code == 0
        assert "--prefs" in result.output
        assert "--mode" in result.output

    def test_text_output(self, tracks_file: Path, prefs_file: Path) -> None:
        result = _select(str(tracks_file), "--prefs", str(prefs_file), "--alang", "jpn")
        assert result.exit_code == 0, result.output
        assert "Audio:               #1 jpn" in result.output
        assert "Subtitles:           #2 eng (Full Subtitles)" in result.output
        assert "Secondary subtitles: not set" in result.output
        assert "sid = 2" in result.output

    def test_json_output(self, tracks_file: Path, prefs_file: Path) -> None:
        result = _select(
            str(tracks_file), "--prefs", str(prefs_file), "--alang", "jpn",
            "--format", "json",
        )
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["mode"] == "preload"
        assert data["predicted_audio"] == 1
        assert data["result"]["sub_id"] == 2
        assert data["result"]["secondary_sub_id"] == "unset"
        assert data["writes"] == [{"property": "sid", "value": 2}]

    def test_alang_changes_prediction(self, tracks_file: Path, prefs_file: Path) -> None:
        result = _select(
            str(tracks_file), "--prefs", str(prefs_file), "--alang", "eng,jpn",
            "--format", "json",
        )
        data = json.loads(result.stdout)
        assert data["predicted_audio"] == 2
        assert data["result"]["sub_id"] == "disabled"
        assert data["writes"] == [{"property": "sid", "value": "no"}]

    def test_async_mode_uses_player_audio(
        self, tracks_file: Path, prefs_file: Path
    ) -> None:
        result = _select(
            str(tracks_file), "--prefs", str(prefs_file), "--aid", "2",
            "--mode", "async", "--format", "json",
        )
        data = json.loads(result.stdout)
        assert data["mode"] == "async"
        assert data["predicted_audio"] is None
        assert data["writes"] == [{"property": "sid", "value": "no"}]

    def test_select_audio(self, tracks_file: Path, prefs_file: Path) -> None:
        result = _select(
            str(tracks_file), "--prefs", str(prefs_file), "--alang", "eng",
            "--select-audio", "--format", "json",
        )
        data = json.loads(result.stdout)
        assert data["writes"] == [
            {"property": "sid", "value": 2},
            {"property": "aid", "value": 1},
        ]

    def test_no_match_exits_zero(self, tracks_file: Path, write_json) -> None:
        prefs = write_json("none.json", [{"slang": "ger"}])
        result = _select(str(tracks_file), "--prefs", str(prefs))
        assert result.exit_code == ExitCode.SUCCESS
        assert "No preference matched" in result.output
        assert "No properties changed." in result.output

    def test_ffprobe_input(self, write_json, prefs_file: Path) -> None:
        tracks = write_json(
            "probe.json",
            {
                "streams": [
                    {"index": 0, "codec_type": "video"},
                    {"index": 1, "codec_type": "audio", "tags": {"language": "jpn"}},
                    {"index": 2, "codec_type": "subtitle", "tags": {"language": "eng"}},
                ]
            },
        )
        result = _select(str(tracks), "--prefs", str(prefs_file), "--format", "json")
        assert result.exit_code == 0
        assert json.loads(result.stdout)["result"]["sub_id"] == 1

    def test_default_preferences_from_config_dir(
        self, tracks_file: Path, write_json, tmp_path: Path, monkeypatch
    ) -> None:
        prefs_dir = tmp_path / "conf"
        prefs_dir.mkdir()
        (prefs_dir / "sub-select.json").write_text(json.dumps(PREFS))
        monkeypatch.setenv("SUBSELECT_CONFIG_DIR", str(prefs_dir))
        result = _select(str(tracks_file), "--alang", "jpn", "--format", "json")
        assert result.exit_code == 0
        assert json.loads(result.stdout)["result"]["sub_id"] == 2


class TestSelectErrors:
    def test_missing_tracks_file(self, tmp_path: Path, prefs_file: Path) -> None:
        result = _select(str(tmp_path / "missing.json"), "--prefs", str(prefs_file))
        assert result.exit_code == ExitCode.INPUT_ERROR
        assert "Track file not found" in result.output

    def test_invalid_tracks_json(self, tmp_path: Path, prefs_file: Path) -> None:
        path = tmp_path / "tracks.json"
        path.write_text("{not json")
        result = _select(str(path), "--prefs", str(prefs_file))
        assert result.exit_code == ExitCode.INPUT_ERROR

    def test_wrong_track_shape(self, write_json, prefs_file: Path) -> None:
        path = write_json("tracks.json", {"tracks": []})
        result = _select(str(path), "--prefs", str(prefs_file), "--format", "json")
        assert result.exit_code == ExitCode.INPUT_ERROR
        error = json.loads(result.stderr)
        assert error["error"]["code"] == "INPUT_ERROR"

    def test_missing_preferences(self, tracks_file: Path, tmp_path: Path) -> None:
        result = _select(str(tracks_file), "--prefs", str(tmp_path / "nope.json"))
        assert result.exit_code == ExitCode.PREFERENCE_VALIDATION_ERROR
        assert "Preference file not found" in result.output

    def test_invalid_preferences(self, tracks_file: Path, write_json) -> None:
        prefs = write_json("bad.json", [{"alang": "jpn"}])
        result = _select(str(tracks_file), "--prefs", str(prefs))
        assert result.exit_code == ExitCode.PREFERENCE_VALIDATION_ERROR
        assert "rule[0].slang" in result.output

    def test_config_error(self, tracks_file: Path, prefs_file: Path, tmp_path: Path):
        config = tmp_path / "config.toml"
        config.write_text('[selection]\npreload = "yes"\n')
        result = CliRunner().invoke(
            main,
            ["--config", str(config), "select", str(tracks_file), "--prefs", str(prefs_file)],
        )
        assert result.exit_code == ExitCode.CONFIG_ERROR


class TestPredictCommand:
    def test_text_output(self, tracks_file: Path) -> None:
        result = CliRunner().invoke(
            main, ["--log-level", "error", "predict", str(tracks_file), "--alang", "eng"]
        )
        assert result.exit_code == 0
        assert "Predicted audio: #2 eng" in result.output

    def test_json_output(self, tracks_file: Path) -> None:
        result = CliRunner().invoke(
            main,
            ["--log-level", "error", "predict", str(tracks_file), "--format", "json"],
        )
        data = json.loads(result.stdout)
        assert data["audio_id"] == 1
        assert data["track"]["lang"] == "jpn"
        assert data["candidates"] == [
            {"id": 1, "lang": "jpn", "key": [0, 1, 1]},
            {"id": 2, "lang": "eng", "key": [0, 0, 0]},
        ]

    def test_aid_no(self, tracks_file: Path) -> None:
        result = CliRunner().invoke(
            main, ["--log-level", "error", "predict", str(tracks_file), "--aid", "no"]
        )
        assert "Predicted audio: none" in result.output
