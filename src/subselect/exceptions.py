"""Base exception types shared across subselect packages."""


class SubSelectError(Exception):
    """Base class for all subselect errors."""


class ConfigError(SubSelectError):
    """Raised when the configuration file holds invalid values."""
