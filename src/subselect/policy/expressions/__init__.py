"""Expression language for preference rule conditions.

Provides parse_expression() to convert strings like
``audio.lang == 'jpn' and not find(sub.title, 'sign')`` into an
immutable syntax tree, and evaluate() to run a tree against bound
track records.
"""

from subselect.policy.expressions.errors import (
    EvaluationError,
    ExpressionError,
    LexError,
    ParseError,
)
from subselect.policy.expressions.evaluator import evaluate
from subselect.policy.expressions.parser import parse_expression

__all__ = [
    "EvaluationError",
    "ExpressionError",
    "LexError",
    "ParseError",
    "evaluate",
    "parse_expression",
]
