"""Preference file loading and validation.

The preference file is a JSON array of rule objects. Loading is strict:
a missing or unreadable file, invalid JSON, or a rule that fails
validation aborts startup. Invalid regex patterns and unparsable
conditions are only warned about here; at match time they behave as
non-matching.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from subselect.config.models import PREFERENCES_FILENAME
from subselect.policy.conditions import ConditionEvaluator
from subselect.policy.exceptions import (
    PreferenceLoadError,
    PreferenceValidationError,
)
from subselect.policy.matchers import validate_regex_patterns
from subselect.policy.pydantic_models import PreferenceRuleModel
from subselect.policy.types import DEFAULT_ALANG, PreferenceRule

logger = logging.getLogger(__name__)

# Fields whose entries are regular expressions (sentinels are skipped)
_PATTERN_FIELDS = (
    "alang",
    "slang",
    "whitelist",
    "blacklist",
    "secondary_slang",
    "secondary_whitelist",
    "secondary_blacklist",
)
_SENTINELS = frozenset({"*", "no", "default", "forced"})


def load_preferences(path: Path) -> tuple[PreferenceRule, ...]:
    """Load and validate preference rules from a JSON file.

    Args:
        path: Path to the preference file.

    Returns:
        Rules in priority order.

    Raises:
        PreferenceLoadError: If the file is missing, unreadable or not JSON.
        PreferenceValidationError: If any rule is invalid.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise PreferenceLoadError("Preference file not found", str(path)) from e
    except (OSError, UnicodeDecodeError) as e:
        raise PreferenceLoadError(
            f"Cannot read preference file: {e}", str(path)
        ) from e

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise PreferenceLoadError(
            f"Invalid JSON format in preference file: {e}", str(path)
        ) from e

    rules = load_preferences_from_data(data)
    logger.debug("Loaded %d preference rule(s) from %s", len(rules), path)
    return rules


def load_preferences_from_data(data: Any) -> tuple[PreferenceRule, ...]:
    """Validate already-decoded preference data.

    Args:
        data: Decoded JSON; must be a list of rule objects.

    Returns:
        Rules in priority order.

    Raises:
        PreferenceLoadError: If data is not a list.
        PreferenceValidationError: If any rule is invalid; the error
            names the rule's position.
    """
    if not isinstance(data, list):
        raise PreferenceLoadError(
            f"Preferences must be a JSON array, got {type(data).__name__}"
        )

    rules = []
    for index, entry in enumerate(data):
        rule = _load_rule(index, entry)
        for warning in rule_warnings(rule):
            logger.warning("rule[%d]: %s", index, warning)
        rules.append(rule)
    return tuple(rules)


def _load_rule(index: int, entry: Any) -> PreferenceRule:
    if not isinstance(entry, dict):
        raise PreferenceValidationError(
            f"rule must be a JSON object, got {type(entry).__name__}",
            rule_index=index,
        )

    try:
        model = PreferenceRuleModel.model_validate(entry)
    except ValidationError as e:
        field, message = _format_validation_error(e)
        raise PreferenceValidationError(message, rule_index=index, field=field) from e

    return _convert_to_rule(model)


def _tuple_or_none(values: list[str] | None) -> tuple[str, ...] | None:
    return tuple(values) if values is not None else None


def _convert_to_rule(model: PreferenceRuleModel) -> PreferenceRule:
    """Convert a validated model to the frozen PreferenceRule dataclass."""
    return PreferenceRule(
        alang=tuple(model.alang) if model.alang is not None else DEFAULT_ALANG,
        slang=tuple(model.slang),
        whitelist=_tuple_or_none(model.whitelist),
        blacklist=_tuple_or_none(model.blacklist),
        condition=model.condition,
        secondary_slang=_tuple_or_none(model.secondary_slang),
        secondary_whitelist=_tuple_or_none(model.secondary_whitelist),
        secondary_blacklist=_tuple_or_none(model.secondary_blacklist),
        secondary_condition=model.secondary_condition,
        sub_visibility=model.sub_visibility,
        secondary_sub_visibility=model.secondary_sub_visibility,
    )


def rule_warnings(rule: PreferenceRule) -> list[str]:
    """Return problems that make parts of a rule never match.

    Invalid regex patterns and unparsable conditions do not fail loading;
    they are reported so users can fix them.
    """
    warnings = []
    for field_name in _PATTERN_FIELDS:
        values = getattr(rule, field_name)
        if not values:
            continue
        patterns = [v for v in values if v not in _SENTINELS]
        warnings.extend(validate_regex_patterns(patterns, field_name))

    evaluator = ConditionEvaluator()
    for field_name in ("condition", "secondary_condition"):
        expression = getattr(rule, field_name)
        if expression is None:
            continue
        error = evaluator.validate(expression)
        if error is not None:
            warnings.append(f"{field_name} will always be false: {error}")
    return warnings


def _format_validation_error(error: ValidationError) -> tuple[str | None, str]:
    """Extract the first error's field and message from a pydantic error."""
    errors = error.errors()
    if not errors:
        return None, str(error)
    first_error = errors[0]
    loc = first_error.get("loc", ())
    field = str(loc[0]) if loc else None
    return field, first_error.get("msg", str(error))
