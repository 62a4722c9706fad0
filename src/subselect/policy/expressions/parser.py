"""Recursive descent parser for the condition expression language.

Parses expression strings into the immutable nodes of
subselect.policy.expressions.nodes. The grammar is:

    expression = or_expr
    or_expr    = and_expr ('or' and_expr)*
    and_expr   = not_expr ('and' not_expr)*
    not_expr   = 'not' not_expr | comparison
    comparison = operand (op operand)?
    operand    = primary ('.' IDENT)*
    primary    = '(' expression ')' | list | literal | IDENT '(' args? ')' | IDENT
    args       = expression (',' expression)*
    op         = '==' | '!=' | '~=' | '<' | '<=' | '>' | '>=' | 'in'
    literal    = STRING | NUMBER | BOOLEAN | NIL
    list       = '[' (expression (',' expression)*)? ']'
"""

from __future__ import annotations

from subselect.policy.expressions.errors import ParseError
from subselect.policy.expressions.lexer import tokenize
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
from subselect.policy.expressions.tokens import Token, TokenType

# Mapping from operator tokens to CompareOp
_COMPARISON_OPS: dict[TokenType, CompareOp] = {
    TokenType.OP_EQ: CompareOp.EQ,
    TokenType.OP_NEQ: CompareOp.NEQ,
    TokenType.OP_LT: CompareOp.LT,
    TokenType.OP_LTE: CompareOp.LTE,
    TokenType.OP_GT: CompareOp.GT,
    TokenType.OP_GTE: CompareOp.GTE,
    TokenType.OP_IN: CompareOp.IN,
}

# Built-in functions and their accepted argument counts
FUNCTION_ARITY: dict[str, int] = {
    "find": 2,
    "lower": 1,
    "upper": 1,
    "len": 1,
}


def parse_expression(source: str) -> Expression:
    """Parse an expression string into a syntax tree.

    Args:
        source: The expression string to parse.

    Returns:
        Root node of the parsed expression.

    Raises:
        LexError: If the source cannot be tokenized.
        ParseError: If the expression is invalid.
    """
    if not source or not source.strip():
        raise ParseError(
            "Empty expression",
            source=source,
            position=0,
        )

    tokens = tokenize(source)
    parser = _Parser(tokens, source)
    result = parser.parse_expression()

    # Ensure all tokens consumed
    if parser.current().type != TokenType.EOF:
        tok = parser.current()
        raise ParseError(
            f"Unexpected token '{tok.value}' after expression",
            source=source,
            position=tok.position,
            line=tok.line,
            column=tok.column,
        )

    return result


_MAX_DEPTH = 50  # Guard against pathological nesting


class _Parser:
    """Recursive descent parser for condition expressions."""

    def __init__(self, tokens: list[Token], source: str) -> None:
        self._tokens = tokens
        self._source = source
        self._pos = 0
        self._depth = 0

    def current(self) -> Token:
        """Return the current token without consuming it."""
        return self._tokens[self._pos]

    def advance(self) -> Token:
        """Consume and return the current token."""
        tok = self._tokens[self._pos]
        if tok.type != TokenType.EOF:
            self._pos += 1
        return tok

    def expect(self, token_type: TokenType) -> Token:
        """Consume the current token, raising if it doesn't match."""
        tok = self.current()
        if tok.type != token_type:
            raise self._error(f"Expected {token_type.value}, got '{tok.value}'")
        return self.advance()

    def _error(self, message: str, tok: Token | None = None) -> ParseError:
        """Create a ParseError at the given token (default: current)."""
        tok = tok or self.current()
        return ParseError(
            message,
            source=self._source,
            position=tok.position,
            line=tok.line,
            column=tok.column,
        )

    def _enter(self) -> None:
        self._depth += 1
        if self._depth > _MAX_DEPTH:
            raise self._error(
                f"Expression nesting exceeds maximum depth of {_MAX_DEPTH}"
            )

    def _leave(self) -> None:
        self._depth -= 1

    # --- Grammar productions ---

    def parse_expression(self) -> Expression:
        """expression = or_expr"""
        self._enter()
        try:
            return self._parse_or_expr()
        finally:
            self._leave()

    def _parse_or_expr(self) -> Expression:
        """or_expr = and_expr ('or' and_expr)*"""
        parts = [self._parse_and_expr()]
        while self.current().type == TokenType.KW_OR:
            self.advance()
            parts.append(self._parse_and_expr())
        if len(parts) == 1:
            return parts[0]
        return Or(operands=tuple(parts))

    def _parse_and_expr(self) -> Expression:
        """and_expr = not_expr ('and' not_expr)*"""
        parts = [self._parse_not_expr()]
        while self.current().type == TokenType.KW_AND:
            self.advance()
            parts.append(self._parse_not_expr())
        if len(parts) == 1:
            return parts[0]
        return And(operands=tuple(parts))

    def _parse_not_expr(self) -> Expression:
        """not_expr = 'not' not_expr | comparison"""
        if self.current().type == TokenType.KW_NOT:
            self.advance()
            self._enter()
            try:
                return Not(operand=self._parse_not_expr())
            finally:
                self._leave()
        return self._parse_comparison()

    def _parse_comparison(self) -> Expression:
        """comparison = operand (op operand)?"""
        left = self._parse_operand()
        op = _COMPARISON_OPS.get(self.current().type)
        if op is None:
            return left
        self.advance()
        right = self._parse_operand()

        if self.current().type in _COMPARISON_OPS:
            raise self._error("Chained comparisons are not supported; use 'and'")
        return Compare(op=op, left=left, right=right)

    def _parse_operand(self) -> Expression:
        """operand = primary ('.' IDENT)*"""
        node = self._parse_primary()
        # Each field access nests the tree one level deeper
        steps = 0
        try:
            while self.current().type == TokenType.DOT:
                steps += 1
                self._enter()
                self.advance()
                field_tok = self.current()
                if field_tok.type != TokenType.IDENT:
                    raise self._error(
                        f"Expected field name after '.', got '{field_tok.value}'"
                    )
                self.advance()
                node = Attribute(target=node, field=field_tok.value)
        finally:
            self._depth -= steps
        return node

    def _parse_primary(self) -> Expression:
        """primary = '(' expression ')' | list | literal | call | IDENT"""
        tok = self.current()

        if tok.type == TokenType.LPAREN:
            self.advance()
            expr = self.parse_expression()
            self.expect(TokenType.RPAREN)
            return expr

        if tok.type == TokenType.LBRACKET:
            return self._parse_list()

        if tok.type == TokenType.STRING:
            self.advance()
            return Literal(tok.value)

        if tok.type == TokenType.NUMBER:
            self.advance()
            if "." in tok.value:
                return Literal(float(tok.value))
            return Literal(int(tok.value))

        if tok.type == TokenType.BOOLEAN:
            self.advance()
            return Literal(tok.value == "true")

        if tok.type == TokenType.NIL:
            self.advance()
            return Literal(None)

        if tok.type == TokenType.IDENT:
            self.advance()
            if self.current().type == TokenType.LPAREN:
                return self._parse_call(tok)
            return Name(tok.value)

        raise self._error(f"Expected value, got '{tok.value or 'end of input'}'")

    def _parse_call(self, name_tok: Token) -> Call:
        """call = IDENT '(' args? ')'"""
        name = name_tok.value
        arity = FUNCTION_ARITY.get(name)
        if arity is None:
            raise self._error(
                f"Unknown function: '{name}'. "
                f"Expected one of: {', '.join(sorted(FUNCTION_ARITY))}",
                name_tok,
            )

        self.expect(TokenType.LPAREN)
        args: list[Expression] = []
        if self.current().type != TokenType.RPAREN:
            args.append(self.parse_expression())
            while self.current().type == TokenType.COMMA:
                self.advance()
                args.append(self.parse_expression())
        self.expect(TokenType.RPAREN)

        if len(args) != arity:
            raise self._error(
                f"{name}() takes {arity} argument(s), got {len(args)}", name_tok
            )
        return Call(function=name, args=tuple(args))

    def _parse_list(self) -> ListLiteral:
        """list = '[' (expression (',' expression)*)? ']'"""
        self.expect(TokenType.LBRACKET)
        items: list[Expression] = []
        if self.current().type != TokenType.RBRACKET:
            items.append(self.parse_expression())
            while self.current().type == TokenType.COMMA:
                self.advance()
                items.append(self.parse_expression())
        self.expect(TokenType.RBRACKET)
        return ListLiteral(items=tuple(items))
