"""Lexer (tokenizer) for the condition expression language.

Converts a source string into a list of tokens via a single-pass
character scanner.
"""

from __future__ import annotations

from subselect.policy.expressions.errors import LexError
from subselect.policy.expressions.tokens import KEYWORDS, Token, TokenType

# Lookup tables for operator and punctuation tokens
_TWO_CHAR_OPS: dict[str, TokenType] = {
    "==": TokenType.OP_EQ,
    "!=": TokenType.OP_NEQ,
    "~=": TokenType.OP_NEQ,
    "<=": TokenType.OP_LTE,
    ">=": TokenType.OP_GTE,
}

_SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "<": TokenType.OP_LT,
    ">": TokenType.OP_GT,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
}


def tokenize(source: str) -> list[Token]:
    """Tokenize a condition expression string.

    Args:
        source: The expression string to tokenize.

    Returns:
        List of tokens, always ending with an EOF token.

    Raises:
        LexError: On invalid characters or unterminated strings.
    """
    tokens: list[Token] = []
    pos = 0
    line = 1
    col = 1
    length = len(source)

    while pos < length:
        ch = source[pos]

        # Skip whitespace
        if ch in " \t\r\n":
            if ch == "\n":
                line += 1
                col = 1
            else:
                col += 1
            pos += 1
            continue

        start_pos = pos
        start_col = col

        # Two-character operators (check before single-char)
        if pos + 1 < length:
            two = source[pos : pos + 2]
            two_type = _TWO_CHAR_OPS.get(two)
            if two_type is not None:
                tokens.append(Token(two_type, two, start_pos, line, start_col))
                pos += 2
                col += 2
                continue

        # Numbers
        if ch.isdigit():
            token = _scan_number(source, pos, line, start_col)
            tokens.append(token)
            consumed = len(token.value)
            pos += consumed
            col += consumed
            continue

        single_type = _SINGLE_CHAR_TOKENS.get(ch)
        if single_type is not None:
            tokens.append(Token(single_type, ch, start_pos, line, start_col))
            pos += 1
            col += 1
            continue

        # Quoted strings
        if ch in ('"', "'"):
            token = _scan_string(source, pos, line, start_col)
            tokens.append(token)
            consumed = len(token.value) + 2  # +2 for quotes
            pos += consumed
            col += consumed
            continue

        # Identifiers and keywords
        if ch.isalpha() or ch == "_":
            token = _scan_identifier(source, pos, line, start_col)
            tokens.append(token)
            consumed = len(token.value)
            pos += consumed
            col += consumed
            continue

        raise LexError(
            f"Unexpected character: '{ch}'",
            source=source,
            position=start_pos,
            line=line,
            column=start_col,
        )

    tokens.append(Token(TokenType.EOF, "", pos, line, col))
    return tokens


def _scan_string(source: str, pos: int, line: int, col: int) -> Token:
    """Scan a quoted string starting at pos.

    Backslashes are kept verbatim so regex patterns can be written
    without double escaping.
    """
    quote = source[pos]
    start = pos + 1
    end = start
    while end < len(source):
        if source[end] == quote:
            value = source[start:end]
            return Token(TokenType.STRING, value, pos, line, col)
        end += 1
    raise LexError(
        f"Unterminated string starting with {quote}",
        source=source,
        position=pos,
        line=line,
        column=col,
    )


def _scan_number(source: str, pos: int, line: int, col: int) -> Token:
    """Scan an integer or float starting at pos.

    A dot is part of the number only when a digit follows it.
    """
    end = pos
    while end < len(source) and source[end].isdigit():
        end += 1
    if (
        end + 1 < len(source)
        and source[end] == "."
        and source[end + 1].isdigit()
    ):
        end += 1
        while end < len(source) and source[end].isdigit():
            end += 1

    if end < len(source) and (source[end].isalpha() or source[end] == "_"):
        raise LexError(
            f"Invalid number literal: '{source[pos:end + 1]}'",
            source=source,
            position=pos,
            line=line,
            column=col,
        )

    return Token(TokenType.NUMBER, source[pos:end], pos, line, col)


def _scan_identifier(source: str, pos: int, line: int, col: int) -> Token:
    """Scan an identifier or keyword starting at pos.

    Identifiers: [a-zA-Z_][a-zA-Z0-9_-]*
    Keywords: and, or, not, in, true, false, nil, none
    """
    end = pos
    while end < len(source) and (source[end].isalnum() or source[end] in ("_", "-")):
        end += 1
    value = source[pos:end]

    # Keywords are lowercase only
    keyword_type = KEYWORDS.get(value)
    if keyword_type is not None:
        return Token(keyword_type, value, pos, line, col)

    return Token(TokenType.IDENT, value, pos, line, col)
