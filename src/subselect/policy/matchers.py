"""Pattern matching utilities for language codes and track titles.

Language and title filters in preference rules are regular expressions
searched anywhere in the value (``"en"`` matches ``"eng"``), never plain
equality. Language matching is case-sensitive; title matching lower-cases
the title and ignores case in the pattern.

Patterns are compiled once and reused. An invalid pattern is logged a
single time and then treated as non-matching; it never aborts selection.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from re import Pattern

logger = logging.getLogger(__name__)


class PatternMatcher:
    """Regex-search predicate with a compiled-pattern cache."""

    def __init__(self) -> None:
        self._compiled: dict[tuple[str, int], Pattern[str] | None] = {}

    def _compile(self, pattern: str, flags: int = 0) -> Pattern[str] | None:
        key = (pattern, flags)
        if key in self._compiled:
            return self._compiled[key]

        try:
            compiled: Pattern[str] | None = re.compile(pattern, flags)
        except (re.error, TypeError) as e:
            logger.warning("Invalid pattern %r treated as non-matching: %s", pattern, e)
            compiled = None

        self._compiled[key] = compiled
        return compiled

    def matches(self, text: str | None, pattern: str) -> bool:
        """Check whether pattern is found anywhere in text.

        Args:
            text: Value to search, e.g. a track language. None never matches.
            pattern: Regular expression.

        Returns:
            True if the pattern matches; False on no match or invalid pattern.
        """
        if text is None:
            return False
        compiled = self._compile(pattern)
        if compiled is None:
            return False
        return compiled.search(text) is not None

    def title_matches(self, title: str | None, patterns: Iterable[str]) -> bool:
        """Check whether a lower-cased title matches any of the patterns.

        Args:
            title: Track title. A missing title never matches.
            patterns: Whitelist or blacklist entries.

        Returns:
            True if at least one valid pattern matches.
        """
        if title is None:
            return False
        lowered = title.lower()
        for pattern in patterns:
            compiled = self._compile(pattern, re.IGNORECASE)
            if compiled is not None and compiled.search(lowered):
                return True
        return False


_default_matcher = PatternMatcher()


def matches(text: str | None, pattern: str) -> bool:
    """Module-level shortcut for PatternMatcher.matches()."""
    return _default_matcher.matches(text, pattern)


def title_matches(title: str | None, patterns: Iterable[str]) -> bool:
    """Module-level shortcut for PatternMatcher.title_matches()."""
    return _default_matcher.title_matches(title, patterns)


def validate_regex_patterns(
    patterns: Iterable[str], pattern_name: str = "patterns"
) -> list[str]:
    """Validate a list of regex patterns and return error messages.

    Args:
        patterns: Pattern strings to validate.
        pattern_name: Name for error messages.

    Returns:
        List of error messages (empty if all patterns are valid).
    """
    errors = []
    for pattern in patterns:
        try:
            re.compile(pattern)
        except re.error as e:
            errors.append(f"Invalid regex pattern {pattern!r} in {pattern_name}: {e}")
    return errors
