"""Unit tests for logging configuration and the JSON formatter."""

import json
import logging
import sys
from pathlib import Path
from unittest.mock import patch

from subselect.config import configure_logging_from_cli
from subselect.config.models import LoggingConfig
from subselect.logging import JSONFormatter, configure_logging


class TestConfigureLogging:
    """Tests for configure_logging()."""

    def test_configure_default_level(self) -> None:
        configure_logging(LoggingConfig(level="info"))
        assert logging.getLogger().level == logging.INFO

    def test_configure_debug_level(self) -> None:
        configure_logging(LoggingConfig(level="DEBUG"))
        assert logging.getLogger().level == logging.DEBUG

    def test_stderr_handler_by_default(self) -> None:
        configure_logging(LoggingConfig())
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.StreamHandler)
        assert not isinstance(root.handlers[0].formatter, JSONFormatter)

    def test_json_format(self) -> None:
        configure_logging(LoggingConfig(format="json"))
        root = logging.getLogger()
        assert isinstance(root.handlers[0].formatter, JSONFormatter)

    def test_file_handler(self, tmp_path: Path) -> None:
        log_file = tmp_path / "logs" / "subselect.log"
        configure_logging(LoggingConfig(file=log_file))
        logging.getLogger("subselect.test").info("hello file")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "hello file" in log_file.read_text()

    def test_file_with_stderr(self, tmp_path: Path) -> None:
        configure_logging(
            LoggingConfig(file=tmp_path / "subselect.log", include_stderr=True)
        )
        assert len(logging.getLogger().handlers) == 2

    def test_unwritable_file_falls_back_to_stderr(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        configure_logging(LoggingConfig(file=blocker / "subselect.log"))
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.StreamHandler)

    def test_reconfigure_replaces_handlers(self) -> None:
        configure_logging(LoggingConfig())
        configure_logging(LoggingConfig())
        assert len(logging.getLogger().handlers) == 1


class TestJSONFormatter:
    """Tests for JSONFormatter output."""

    def _record(self, **extra) -> logging.LogRecord:
        record = logging.LogRecord(
            name="subselect.selection.matcher",
            level=logging.INFO,
            pathname=__file__,
            lineno=1,
            msg="Tracks selected: %s",
            args=("sid 2",),
            exc_info=None,
        )
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_basic_fields(self) -> None:
        entry = json.loads(JSONFormatter().format(self._record()))
        assert entry["level"] == "INFO"
        assert entry["message"] == "Tracks selected: sid 2"
        assert entry["logger"] == "subselect.selection.matcher"
        assert "timestamp" in entry
        assert "context" not in entry

    def test_extra_fields_in_context(self) -> None:
        entry = json.loads(JSONFormatter().format(self._record(rule_index=3)))
        assert entry["context"] == {"rule_index": 3}

    def test_record_attributes_not_treated_as_context(self) -> None:
        record = self._record()
        record.message = "already formatted"
        record.asctime = "2026-01-01T00:00:00"
        entry = json.loads(JSONFormatter().format(record))
        assert "context" not in entry

    def test_exception_included(self) -> None:
        try:
            raise ValueError("bad")
        except ValueError:
            record = self._record()
            record.exc_info = sys.exc_info()
        entry = json.loads(JSONFormatter().format(record))
        assert "ValueError: bad" in entry["exception"]


class TestConfigureLoggingFromCli:
    def test_cli_overrides_applied(self, tmp_path: Path) -> None:
        with patch("subselect.logging.configure_logging") as mock_configure:
            configure_logging_from_cli(
                config_path=tmp_path / "missing.toml", level="debug", format="json"
            )
        config = mock_configure.call_args.args[0]
        assert config.level == "debug"
        assert config.format == "json"

    def test_config_file_used_as_base(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text('[logging]\nlevel = "warning"\n')
        with patch("subselect.logging.configure_logging") as mock_configure:
            configure_logging_from_cli(config_path=path)
        assert mock_configure.call_args.args[0].level == "warning"
