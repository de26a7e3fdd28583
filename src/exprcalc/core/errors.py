"""
Error types for exprcalc tokenizing, parsing, and evaluation.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class CalcError(Exception):
    """Base exception for all exprcalc errors."""

    def __init__(self, message: str, context: ErrorContext | None = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.message}\n{self.context.format()}"
        return self.message


class ExpressionTokenError(CalcError):
    """
    Raised when input text cannot be tokenized.

    Examples:
    - Unrecognized character (letters, punctuation)
    - Numeric literal that does not fit in 64 bits unsigned
    """

    def __init__(self, message: str, index: int, context: ErrorContext | None = None):
        self.index = index
        super().__init__(message, context)


class ExpressionParseError(CalcError):
    """
    Raised when a token sequence does not match the grammar.

    ``position`` is the 1-based index of the offending token, or None when
    the input ended early.
    """

    def __init__(self, message: str, position: int | None = None):
        self.position = position
        super().__init__(message)

    @property
    def at_end(self) -> bool:
        return self.position is None


class EvalErrorKind(StrEnum):
    """Failure modes of unsigned integer evaluation."""

    DIVISION_BY_ZERO = "division_by_zero"
    OVERFLOW = "overflow"
    UNDERFLOW = "underflow"


class ExpressionEvalError(CalcError):
    """Raised when an expression tree cannot be reduced to a value."""

    def __init__(self, message: str, kind: EvalErrorKind):
        self.kind = kind
        super().__init__(message)


class InputError(CalcError):
    """Raised when the input source itself cannot be read."""

    pass


class ConfigError(CalcError):
    """Raised when a configuration file is missing, malformed, or invalid."""

    pass


@dataclass
class ErrorContext:
    """
    Source line and column of an error, for display under the message.

    Attributes:
        line: The input line being processed
        column: Column number (1-indexed)
    """

    line: str
    column: int

    def format(self) -> str:
        """
        Format the source line with an error marker under the column.

        Returns:
            Two lines like "  1+asd" and "    ^"
        """
        prefix = "  "
        marker = " " * (len(prefix) + self.column - 1) + "^"
        return f"{prefix}{self.line}\n{marker}"


def make_token_error(message: str, line: str, index: int) -> ExpressionTokenError:
    """
    Helper to create an ExpressionTokenError with a caret context.

    Args:
        message: Error description
        line: The text being tokenized (trailing newline is dropped)
        index: Offending character index (1-indexed)

    Returns:
        ExpressionTokenError with context attached
    """
    context = ErrorContext(line=line.rstrip("\r\n"), column=index)
    return ExpressionTokenError(message, index, context)
