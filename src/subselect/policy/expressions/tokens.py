"""Lexical vocabulary of rule conditions.

Conditions are short boolean expressions over track fields:
``audio.lang == 'jpn' and not sub.forced``. Both ``!=`` and ``~=`` mean
"not equal", and ``nil``/``none`` both spell the absent value.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenType(Enum):
    """Token kinds; each value is how the kind is named in error messages."""

    IDENT = "name"  # audio, lang, demux-channel-count
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NIL = "nil"

    LPAREN = "'('"
    RPAREN = "')'"
    LBRACKET = "'['"
    RBRACKET = "']'"
    COMMA = "','"
    DOT = "'.'"

    OP_EQ = "'=='"
    OP_NEQ = "'!='"
    OP_LT = "'<'"
    OP_LTE = "'<='"
    OP_GT = "'>'"
    OP_GTE = "'>='"

    OP_IN = "'in'"
    KW_AND = "'and'"
    KW_OR = "'or'"
    KW_NOT = "'not'"

    EOF = "end of input"


KEYWORDS: dict[str, TokenType] = {
    "and": TokenType.KW_AND,
    "or": TokenType.KW_OR,
    "not": TokenType.KW_NOT,
    "in": TokenType.OP_IN,
    "true": TokenType.BOOLEAN,
    "false": TokenType.BOOLEAN,
    "nil": TokenType.NIL,
    "none": TokenType.NIL,
}


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: str
    # Offset into the condition string; line and column are 1-based
    position: int
    line: int
    column: int
