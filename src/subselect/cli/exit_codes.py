"""Centralized exit codes for all CLI commands.

Exit code ranges:
    0: Success
    1-9: General errors
    10-19: Validation errors (preferences, config)
    20-29: Input errors
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for subselect CLI commands.

    A selection that matches no rule is not an error and exits with
    SUCCESS.
    """

    # Success (0)
    SUCCESS = 0

    # General errors (1-9)
    GENERAL_ERROR = 1

    # Validation errors (10-19)
    PREFERENCE_VALIDATION_ERROR = 10
    CONFIG_ERROR = 11

    # Input errors (20-29)
    INPUT_ERROR = 20
