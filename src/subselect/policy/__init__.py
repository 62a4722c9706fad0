"""Preference rules: types, loading, pattern matching and conditions."""

from subselect.policy.conditions import ConditionEvaluator, build_bindings
from subselect.policy.exceptions import (
    PreferenceError,
    PreferenceLoadError,
    PreferenceValidationError,
    SubSelectError,
)
from subselect.policy.loader import (
    PREFERENCES_FILENAME,
    load_preferences,
    load_preferences_from_data,
    rule_warnings,
)
from subselect.policy.matchers import PatternMatcher, matches, title_matches
from subselect.policy.types import PreferenceRule

__all__ = [
    "ConditionEvaluator",
    "PREFERENCES_FILENAME",
    "PatternMatcher",
    "PreferenceError",
    "PreferenceLoadError",
    "PreferenceRule",
    "PreferenceValidationError",
    "SubSelectError",
    "build_bindings",
    "load_preferences",
    "load_preferences_from_data",
    "matches",
    "rule_warnings",
    "title_matches",
]
