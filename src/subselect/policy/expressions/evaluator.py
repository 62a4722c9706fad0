"""Tree-walking evaluator for parsed condition expressions.

Evaluation semantics follow Python: ``and``/``or`` short-circuit and
return an operand, ``not`` uses truthiness, ``==``/``!=`` never fail.
Field access on nil yields nil, so ``audio.lang == nil`` is safe when no
audio track is bound. Ordering comparisons between incompatible values,
unknown names and field access on non-record values raise
EvaluationError.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from subselect.policy.expressions.errors import EvaluationError
from subselect.policy.expressions.nodes import (
    And,
    Attribute,
    Call,
    Compare,
    CompareOp,
    Expression,
    ListLiteral,
    Literal,
    Name,
    Not,
    Or,
)


def evaluate(node: Expression, bindings: Mapping[str, Any]) -> Any:
    """Evaluate an expression tree against a table of bound names.

    Args:
        node: Root of a parsed expression.
        bindings: Read-only mapping of names to values. Records are
            mappings of field name to value; None stands for an absent
            record.

    Returns:
        The expression's value (callers decide how to interpret it).

    Raises:
        EvaluationError: If the expression cannot be evaluated.
    """
    if isinstance(node, Literal):
        return node.value

    if isinstance(node, ListLiteral):
        return [evaluate(item, bindings) for item in node.items]

    if isinstance(node, Name):
        if node.name not in bindings:
            raise EvaluationError(f"Unknown name: '{node.name}'")
        return bindings[node.name]

    if isinstance(node, Attribute):
        target = evaluate(node.target, bindings)
        if target is None:
            return None
        if not isinstance(target, Mapping):
            raise EvaluationError(
                f"Cannot read field '{node.field}' of {type(target).__name__} value"
            )
        return target.get(node.field)

    if isinstance(node, Compare):
        return _compare(
            node.op, evaluate(node.left, bindings), evaluate(node.right, bindings)
        )

    if isinstance(node, And):
        value: Any = True
        for operand in node.operands:
            value = evaluate(operand, bindings)
            if not value:
                return value
        return value

    if isinstance(node, Or):
        value = False
        for operand in node.operands:
            value = evaluate(operand, bindings)
            if value:
                return value
        return value

    if isinstance(node, Not):
        return not evaluate(node.operand, bindings)

    if isinstance(node, Call):
        args = [evaluate(arg, bindings) for arg in node.args]
        return _call(node.function, args)

    raise EvaluationError(f"Unsupported expression node: {type(node).__name__}")


def _compare(op: CompareOp, left: Any, right: Any) -> bool:
    if op is CompareOp.EQ:
        return left == right
    if op is CompareOp.NEQ:
        return left != right

    if op is CompareOp.IN:
        if not isinstance(right, (list, tuple, str)):
            raise EvaluationError(
                f"Right side of 'in' must be a list or string, got {_type_name(right)}"
            )
        if isinstance(right, str) and not isinstance(left, str):
            raise EvaluationError(
                f"'in <string>' requires a string on the left, got {_type_name(left)}"
            )
        return left in right

    if left is None or right is None:
        raise EvaluationError(f"Cannot compare nil with '{op.value}'")
    try:
        if op is CompareOp.LT:
            return left < right
        if op is CompareOp.LTE:
            return left <= right
        if op is CompareOp.GT:
            return left > right
        return left >= right
    except TypeError as e:
        raise EvaluationError(
            f"Cannot compare {_type_name(left)} with {_type_name(right)}"
            f" using '{op.value}'"
        ) from e


def _call(function: str, args: list[Any]) -> Any:
    if function == "find":
        text, pattern = args
        if text is None:
            return False
        if not isinstance(text, str) or not isinstance(pattern, str):
            raise EvaluationError("find() expects string arguments")
        try:
            return re.search(pattern, text) is not None
        except re.error as e:
            raise EvaluationError(f"Invalid pattern in find(): {e}") from e

    if function in ("lower", "upper"):
        (text,) = args
        if text is None:
            return None
        if not isinstance(text, str):
            raise EvaluationError(f"{function}() expects a string")
        return text.lower() if function == "lower" else text.upper()

    if function == "len":
        (value,) = args
        if value is None:
            return 0
        try:
            return len(value)
        except TypeError as e:
            raise EvaluationError(f"len() of {_type_name(value)} value") from e

    raise EvaluationError(f"Unknown function: '{function}'")


def _type_name(value: Any) -> str:
    if value is None:
        return "nil"
    return type(value).__name__
