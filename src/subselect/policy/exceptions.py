"""Custom exceptions for preference loading.

Condition and pattern problems are never raised out of the engine; they
are logged and treated as non-matching. Only configuration problems that
make the engine unusable are exceptions.
"""

from __future__ import annotations

from subselect.exceptions import SubSelectError


class PreferenceError(SubSelectError):
    """Base class for preference file errors."""


class PreferenceLoadError(PreferenceError):
    """Raised when the preference file cannot be read or is not valid JSON.

    This is a fatal startup error: the engine does not run without
    preferences.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        self.path = path
        if path:
            message = f"{message} (file: {path})"
        super().__init__(message)


class PreferenceValidationError(PreferenceError):
    """Raised when a preference rule fails validation.

    Carries the zero-based position of the offending rule so users can
    find it in the JSON array.
    """

    def __init__(
        self,
        message: str,
        rule_index: int | None = None,
        field: str | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            message: Description of the problem.
            rule_index: Position of the rule in the preference list.
            field: Name of the invalid field, if known.
        """
        self.message = message
        self.rule_index = rule_index
        self.field = field

        location = ""
        if rule_index is not None:
            location = f"rule[{rule_index}]"
            if field:
                location += f".{field}"
            location += ": "
        super().__init__(f"Preference validation failed: {location}{message}")
