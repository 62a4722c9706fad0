"""Condition evaluation for preference rules.

A rule's ``condition`` (and ``secondary_condition``) is an expression in
the language of subselect.policy.expressions, evaluated against the
candidate tracks of the current match attempt:

    audio          candidate audio track, nil when matching "no audio"
    sub            candidate primary subtitle, nil for a "no" slang entry
    secondary_sub  candidate secondary subtitle (secondary conditions only)

Each call builds a fresh, read-only binding table; expressions can only
read the bound track fields and never see or change engine state.
Only a literal ``True`` result passes. Any other value, and any lex,
parse or evaluation error, counts as ``False`` and is logged.

Usage:
    from subselect.policy.conditions import ConditionEvaluator

    evaluator = ConditionEvaluator()
    evaluator.evaluate("audio.lang == 'jpn'", {"audio": track})
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from subselect.domain import Track
from subselect.policy.expressions import (
    ExpressionError,
    evaluate,
    parse_expression,
)
from subselect.policy.expressions.nodes import Expression

logger = logging.getLogger(__name__)

# Bound only for secondary conditions
SECONDARY_NAME = "secondary_sub"


def record_view(track: Track | None) -> Mapping[str, Any] | None:
    """Return a read-only field mapping for a track, or None if absent."""
    if track is None:
        return None
    return MappingProxyType(track.as_record())


def build_bindings(
    audio: Track | None = None,
    sub: Track | None = None,
    secondary_sub: Track | None = None,
    *,
    secondary: bool = False,
) -> Mapping[str, Any]:
    """Build the binding table for one condition evaluation.

    Args:
        audio: Candidate audio track.
        sub: Candidate (or chosen) primary subtitle.
        secondary_sub: Candidate secondary subtitle.
        secondary: Bind ``secondary_sub``; only secondary conditions may
            reference it.

    Returns:
        A new read-only mapping.
    """
    table: dict[str, Any] = {
        "audio": record_view(audio),
        "sub": record_view(sub),
    }
    if secondary:
        table[SECONDARY_NAME] = record_view(secondary_sub)
    return MappingProxyType(table)


class ConditionEvaluator:
    """Parses and evaluates rule conditions with a per-source parse cache."""

    def __init__(self) -> None:
        self._parsed: dict[str, Expression | ExpressionError] = {}

    def _parse(self, expression: str) -> Expression:
        cached = self._parsed.get(expression)
        if cached is None:
            try:
                cached = parse_expression(expression)
            except ExpressionError as e:
                cached = e
            self._parsed[expression] = cached
        if isinstance(cached, ExpressionError):
            raise cached
        return cached

    def evaluate(self, expression: str, bindings: Mapping[str, Any]) -> bool:
        """Evaluate a condition expression.

        Args:
            expression: Condition source text.
            bindings: Mapping of bound names to track records (see
                build_bindings()). Track objects are converted to
                read-only record views.

        Returns:
            True only if the expression evaluates to the boolean True.
        """
        table = MappingProxyType(
            {
                name: record_view(value) if isinstance(value, Track) else value
                for name, value in bindings.items()
            }
        )
        try:
            result = evaluate(self._parse(expression), table)
        except (ExpressionError, RecursionError) as e:
            logger.error(
                "Condition %r failed, treating as false: %s", expression, e
            )
            return False

        if result is not True:
            logger.debug("Condition %r evaluated to %r", expression, result)
            return False
        return True

    def check(
        self,
        expression: str | None,
        audio: Track | None = None,
        sub: Track | None = None,
        secondary_sub: Track | None = None,
        *,
        secondary: bool = False,
    ) -> bool:
        """Evaluate an optional condition for a candidate combination.

        A missing condition always passes.
        """
        if expression is None:
            return True
        bindings = build_bindings(audio, sub, secondary_sub, secondary=secondary)
        return self.evaluate(expression, bindings)

    def validate(self, expression: str) -> str | None:
        """Return a formatted parse error for expression, or None if valid."""
        try:
            self._parse(expression)
        except ExpressionError as e:
            return e.format_error()
        return None
