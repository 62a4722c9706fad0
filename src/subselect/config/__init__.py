"""Configuration management for subselect.

Configuration is loaded with precedence handling:
1. CLI flags (highest priority)
2. Environment variables (SUBSELECT_*)
3. Config file (~/.config/subselect/config.toml)
4. Default values (lowest priority)
"""

from subselect.config.env import EnvReader
from subselect.config.logging_factory import (
    build_logging_config,
    configure_logging_from_cli,
)
from subselect.config.loader import (
    clear_config_cache,
    get_config,
    get_default_config_path,
    load_config_file,
)
from subselect.config.models import (
    PREFERENCES_FILENAME,
    LoggingConfig,
    SelectionConfig,
    SubSelectConfig,
)

__all__ = [
    # Models
    "LoggingConfig",
    "PREFERENCES_FILENAME",
    "SelectionConfig",
    "SubSelectConfig",
    # Loader
    "build_logging_config",
    "configure_logging_from_cli",
    "EnvReader",
    "clear_config_cache",
    "get_config",
    "get_default_config_path",
    "load_config_file",
]
