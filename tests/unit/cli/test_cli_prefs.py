"""Tests for the prefs command group."""

import json
from pathlib import Path

from click.testing import CliRunner

from subselect.cli import main
from subselect.cli.exit_codes import ExitCode


def _invoke(*args: str):
    return CliRunner().invoke(main, ["--log-level", "error", "prefs", *args])


class TestValidatePrefs:
    def test_valid_file(self, write_json) -> None:
        path = write_json("prefs.json", [{"alang": "jpn", "slang": "eng"}])
        result = _invoke("validate", str(path))
        assert result.exit_code == 0
        assert "Valid" in result.output
        assert "1 rule(s) valid" in result.output

    def test_valid_json_output(self, write_json) -> None:
        path = write_json("prefs.json", [{"slang": "eng"}, {"slang": "no"}])
        result = _invoke("validate", str(path), "--format", "json")
        data = json.loads(result.stdout)
        assert data["valid"] is True
        assert data["rules"] == 2
        assert data["errors"] == []

    def test_invalid_rule(self, write_json) -> None:
        path = write_json("prefs.json", [{"slang": "eng"}, {"alang": "jpn"}])
        result = _invoke("validate", str(path), "--format", "json")
        assert result.exit_code == ExitCode.PREFERENCE_VALIDATION_ERROR
        data = json.loads(result.stdout)
        assert data["valid"] is False
        assert data["errors"][0]["rule_index"] == 1
        assert data["errors"][0]["field"] == "slang"
        assert data["errors"][0]["code"] == "validation_error"

    def test_unknown_key_is_invalid(self, write_json) -> None:
        path = write_json("prefs.json", [{"slang": "eng", "slangs": "jpn"}])
        result = _invoke("validate", str(path))
        assert result.exit_code == ExitCode.PREFERENCE_VALIDATION_ERROR
        assert "Invalid" in result.output

    def test_missing_file(self, tmp_path: Path) -> None:
        result = _invoke("validate", str(tmp_path / "missing.json"), "--format", "json")
        assert result.exit_code == ExitCode.PREFERENCE_VALIDATION_ERROR
        data = json.loads(result.stdout)
        assert data["errors"][0]["code"] == "load_error"

    def test_pattern_and_condition_warnings(self, write_json) -> None:
        path = write_json(
            "prefs.json",
            [{"slang": "eng", "whitelist": "[", "condition": "sub.lang =="}],
        )
        result = _invoke("validate", str(path), "--format", "json")
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["valid"] is True
        assert len(data["warnings"]) == 2
        assert all(w.startswith("rule[0]: ") for w in data["warnings"])
        assert any("Invalid regex pattern" in w for w in data["warnings"])
        assert any("will always be false" in w for w in data["warnings"])

    def test_default_file_from_config_dir(self, tmp_path: Path, monkeypatch) -> None:
        (tmp_path / "sub-select.json").write_text(json.dumps([{"slang": "eng"}]))
        monkeypatch.setenv("SUBSELECT_CONFIG_DIR", str(tmp_path))
        result = _invoke("validate")
        assert result.exit_code == 0
        assert str(tmp_path / "sub-select.json") in result.output


class TestShowPrefs:
    def test_text_output(self, write_json) -> None:
        path = write_json(
            "prefs.json",
            [{"alang": ["jpn", "chi"], "slang": "eng", "blacklist": "sign"}],
        )
        result = _invoke("show", str(path))
        assert result.exit_code == 0
        assert "[0] slang=eng alang=jpn,chi blacklist=sign" in result.output

    def test_json_output(self, write_json) -> None:
        path = write_json("prefs.json", [{"slang": "eng", "sub_visibility": False}])
        result = _invoke("show", str(path), "--format", "json")
        data = json.loads(result.stdout)
        assert data["rules"] == [{"slang": ["eng"], "sub_visibility": False}]

    def test_empty_file(self, write_json) -> None:
        path = write_json("prefs.json", [])
        result = _invoke("show", str(path))
        assert "(no rules)" in result.output

    def test_invalid_file_exits(self, write_json) -> None:
        path = write_json("prefs.json", {"slang": "eng"})
        result = _invoke("show", str(path))
        assert result.exit_code == ExitCode.PREFERENCE_VALIDATION_ERROR
        assert "must be a JSON array" in result.output
