"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (passed directly to get_config)
2. Environment variables (SUBSELECT_*)
3. Config file (~/.config/subselect/config.toml)
4. Default values

Environment variables:
- SUBSELECT_CONFIG_PATH: Path to config file (overrides default location)
- SUBSELECT_CONFIG_DIR: Directory holding sub-select.json
- SUBSELECT_PREFERENCES: Explicit path to the preference file
- SUBSELECT_FORCE_ENABLE, SUBSELECT_PRELOAD, SUBSELECT_SELECT_AUDIO,
  SUBSELECT_FORCE_PREDICTION, SUBSELECT_DETECT_INCORRECT_PREDICTIONS,
  SUBSELECT_OBSERVE_AUDIO_SWITCHES, SUBSELECT_EXPLICIT_FORCED_SUBS:
  boolean selection options
- SUBSELECT_LOG_LEVEL, SUBSELECT_LOG_FILE, SUBSELECT_LOG_FORMAT: logging
"""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from subselect.config.env import EnvReader
from subselect.config.models import LoggingConfig, SelectionConfig, SubSelectConfig
from subselect.exceptions import ConfigError

logger = logging.getLogger(__name__)

# Default config location
DEFAULT_CONFIG_DIR = Path.home() / ".config" / "subselect"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"

# Boolean options of SelectionConfig, settable from file, env and CLI
_BOOL_OPTIONS = (
    "force_enable",
    "preload",
    "select_audio",
    "force_prediction",
    "detect_incorrect_predictions",
    "observe_audio_switches",
    "explicit_forced_subs",
)

_config_cache: dict[Path | None, SubSelectConfig] = {}


def get_default_config_path(env: EnvReader | None = None) -> Path:
    """Get the default config file path.

    Can be overridden by the SUBSELECT_CONFIG_PATH environment variable.
    """
    reader = env or EnvReader()
    return reader.get_path("SUBSELECT_CONFIG_PATH") or DEFAULT_CONFIG_FILE


def load_config_file(path: Path | None = None) -> dict[str, Any]:
    """Load configuration from a TOML file.

    Args:
        path: Path to config file. If None, uses default location.

    Returns:
        Parsed configuration dict. Empty dict if the file doesn't exist or
        cannot be parsed (a warning is logged).
    """
    if path is None:
        path = get_default_config_path()

    if not path.exists():
        logger.debug("Config file not found: %s", path)
        return {}

    try:
        with path.open("rb") as f:
            config = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Failed to load config file %s: %s", path, e)
        return {}

    logger.debug("Loaded config from %s", path)
    return config


def _section(file_config: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = file_config.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"[{name}] must be a table in the config file")
    return section


def _file_bool(section: Mapping[str, Any], key: str) -> bool | None:
    value = section.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        raise ConfigError(f"selection.{key} must be a boolean, got {value!r}")
    return value


def _file_path(section: Mapping[str, Any], key: str) -> Path | None:
    value = section.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"{key} must be a path string, got {value!r}")
    return Path(value).expanduser()


def _first(*values: Any) -> Any:
    """Return the first value that is not None."""
    for value in values:
        if value is not None:
            return value
    return None


def build_selection_config(
    file_config: Mapping[str, Any],
    env: EnvReader,
    overrides: Mapping[str, Any],
) -> SelectionConfig:
    """Merge selection options from CLI overrides, env, file and defaults."""
    section = _section(file_config, "selection")
    defaults = SelectionConfig()

    options: dict[str, Any] = {}
    for name in _BOOL_OPTIONS:
        options[name] = _first(
            overrides.get(name),
            env.get_bool(f"SUBSELECT_{name.upper()}"),
            _file_bool(section, name),
            getattr(defaults, name),
        )

    options["config_dir"] = _first(
        overrides.get("config_dir"),
        env.get_path("SUBSELECT_CONFIG_DIR"),
        _file_path(section, "config_dir"),
        defaults.config_dir,
    )
    options["preferences_file"] = _first(
        overrides.get("preferences_file"),
        env.get_path("SUBSELECT_PREFERENCES"),
        _file_path(section, "preferences_file"),
    )
    return SelectionConfig(**options)


def merge_logging_config(
    file_config: Mapping[str, Any],
    env: EnvReader,
) -> LoggingConfig:
    """Merge logging options from env, file and defaults."""
    section = _section(file_config, "logging")
    defaults = LoggingConfig()
    try:
        return LoggingConfig(
            level=_first(
                env.get_str("SUBSELECT_LOG_LEVEL"), section.get("level"), defaults.level
            ),
            file=_first(env.get_path("SUBSELECT_LOG_FILE"), _file_path(section, "file")),
            format=_first(
                env.get_str("SUBSELECT_LOG_FORMAT"),
                section.get("format"),
                defaults.format,
            ),
            include_stderr=bool(
                section.get("include_stderr", defaults.include_stderr)
            ),
            max_bytes=section.get("max_bytes", defaults.max_bytes),
            backup_count=section.get("backup_count", defaults.backup_count),
        )
    except (TypeError, ValueError, AttributeError) as e:
        raise ConfigError(f"Invalid logging configuration: {e}") from e


def get_config(
    config_path: Path | None = None,
    env: Mapping[str, str] | None = None,
    **overrides: Any,
) -> SubSelectConfig:
    """Get subselect configuration with full precedence handling.

    Args:
        config_path: Path to config file (overrides SUBSELECT_CONFIG_PATH).
        env: Environment mapping to read instead of os.environ.
        **overrides: CLI overrides for SelectionConfig fields; None values
            are ignored.

    Returns:
        Merged configuration. Results without env injection or overrides
        are cached per config path.

    Raises:
        ConfigError: If the config file holds invalid values.
    """
    overrides = {k: v for k, v in overrides.items() if v is not None}
    cacheable = env is None and not overrides
    if cacheable and config_path in _config_cache:
        return _config_cache[config_path]

    reader = EnvReader(env)
    path = config_path or get_default_config_path(reader)
    file_config = load_config_file(path)

    config = SubSelectConfig(
        selection=build_selection_config(file_config, reader, overrides),
        logging=merge_logging_config(file_config, reader),
    )

    if cacheable:
        _config_cache[config_path] = config
    return config


def clear_config_cache() -> None:
    """Forget cached configurations (used by tests)."""
    _config_cache.clear()
