"""Environment variable reader with dependency injection support.

This module provides the EnvReader class for reading and parsing
environment variables with type conversion. It accepts an optional env
mapping so code that depends on the environment can be tested without
touching os.environ.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("true", "1", "yes", "on")
_FALSE_VALUES = ("false", "0", "no", "off")


class EnvReader:
    """Environment variable reader with type conversion.

    Example:
        reader = EnvReader(env={"SUBSELECT_PRELOAD": "no"})
        reader.get_bool("SUBSELECT_PRELOAD")  # False
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        """Initialize the environment reader.

        Args:
            env: Optional mapping to use instead of os.environ.
        """
        self._env: Mapping[str, str] = env if env is not None else os.environ

    def get_str(self, var: str, default: str | None = None) -> str | None:
        """Get a string from environment variable, or default if unset."""
        value = self._env.get(var)
        if value is None:
            return default
        return value

    def get_bool(self, var: str, default: bool | None = None) -> bool | None:
        """Get a boolean from environment variable.

        Recognizes true/1/yes/on and false/0/no/off (case-insensitive).
        Other values log a warning and return default.
        """
        value = self._env.get(var)
        if value is None:
            return default
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        logger.warning("Invalid boolean value for %s: %s", var, value)
        return default

    def get_path(self, var: str, default: Path | None = None) -> Path | None:
        """Get a path (with ~ expanded) from environment variable."""
        value = self._env.get(var)
        if not value:
            return default
        return Path(value).expanduser()
