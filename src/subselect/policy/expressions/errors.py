"""Errors raised while lexing, parsing or evaluating a rule condition.

The condition evaluator catches all of them and treats the condition as
false; ``prefs validate`` shows the formatted message to the user.
"""

from __future__ import annotations


class ExpressionError(Exception):
    """A condition that cannot be used, with its location in the source."""

    def __init__(
        self,
        message: str,
        source: str = "",
        position: int = 0,
        line: int = 1,
        column: int = 1,
    ) -> None:
        super().__init__(message)
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def format_error(self) -> str:
        """Return the message followed by the condition and a ``^`` marker.

        Example::

            Expected value, got 'end of input'
              sub.lang ==
                         ^
        """
        if not self.source:
            return str(self)
        marker = "^".rjust(self.column)
        return f"{self}\n  {self.source}\n  {marker}"


class LexError(ExpressionError):
    pass


class ParseError(ExpressionError):
    pass


class EvaluationError(ExpressionError):
    """The condition parsed but failed against the bound tracks.

    For example ``audio.lang > 3``, an unknown name, or a field read on
    a value that is not a track.
    """
