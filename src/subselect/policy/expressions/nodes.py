"""Immutable syntax tree nodes produced by the expression parser."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class CompareOp(Enum):
    """Binary comparison operators."""

    EQ = "=="
    NEQ = "!="
    LT = "<"
    LTE = "<="
    GT = ">"
    GTE = ">="
    IN = "in"


@dataclass(frozen=True)
class Literal:
    """A constant: string, number, boolean or nil (None)."""

    value: Any


@dataclass(frozen=True)
class ListLiteral:
    """A list of expressions, e.g. ``['eng', 'enm']``."""

    items: tuple[Expression, ...]


@dataclass(frozen=True)
class Name:
    """A bound name such as ``audio`` or ``sub``."""

    name: str


@dataclass(frozen=True)
class Attribute:
    """Field access: ``audio.lang``."""

    target: Expression
    field: str


@dataclass(frozen=True)
class Call:
    """Built-in function call: ``find(sub.title, 'sign')``."""

    function: str
    args: tuple[Expression, ...]


@dataclass(frozen=True)
class Compare:
    """Binary comparison between two operands."""

    op: CompareOp
    left: Expression
    right: Expression


@dataclass(frozen=True)
class And:
    """Short-circuit conjunction of two or more operands."""

    operands: tuple[Expression, ...]


@dataclass(frozen=True)
class Or:
    """Short-circuit disjunction of two or more operands."""

    operands: tuple[Expression, ...]


@dataclass(frozen=True)
class Not:
    """Logical negation."""

    operand: Expression


Expression = Union[Literal, ListLiteral, Name, Attribute, Call, Compare, And, Or, Not]
