"""Tests for EnvReader."""

from pathlib import Path

import pytest

from subselect.config.env import EnvReader


class TestGetBool:
    @pytest.mark.parametrize("value", ["true", "1", "YES", "on", " True "])
    def test_true_values(self, value):
        assert EnvReader({"FLAG": value}).get_bool("FLAG") is True

    @pytest.mark.parametrize("value", ["false", "0", "no", "OFF"])
    def test_false_values(self, value):
        assert EnvReader({"FLAG": value}).get_bool("FLAG") is False

    def test_unset_returns_default(self):
        assert EnvReader({}).get_bool("FLAG") is None
        assert EnvReader({}).get_bool("FLAG", True) is True

    def test_invalid_returns_default(self, caplog):
        assert EnvReader({"FLAG": "maybe"}).get_bool("FLAG", False) is False
        assert "Invalid boolean" in caplog.text


class TestOtherTypes:
    def test_get_str(self):
        reader = EnvReader({"NAME": "value"})
        assert reader.get_str("NAME") == "value"
        assert reader.get_str("OTHER", "x") == "x"

    def test_get_path_expands_user(self):
        path = EnvReader({"P": "~/prefs.json"}).get_path("P")
        assert path == Path.home() / "prefs.json"

    def test_get_path_empty_is_default(self):
        assert EnvReader({"P": ""}).get_path("P") is None

    def test_reads_os_environ_by_default(self, monkeypatch):
        monkeypatch.setenv("SUBSELECT_TEST_VALUE", "abc")
        assert EnvReader().get_str("SUBSELECT_TEST_VALUE") == "abc"
