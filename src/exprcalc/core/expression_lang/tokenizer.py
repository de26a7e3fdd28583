"""
Tokenizer for the exprcalc arithmetic language.

Converts one line of text into a sequence of typed tokens.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from enum import StrEnum, auto

from exprcalc.core.errors import make_token_error
from exprcalc.core.ir.expressions import U64_MAX

logger = logging.getLogger(__name__)


class TokenKind(StrEnum):
    """Token types for the arithmetic language."""

    # Literals
    NUMBER = auto()

    # Operators
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()

    # Punctuation
    LPAREN = auto()
    RPAREN = auto()


_SOURCE_TEXT: dict[TokenKind, str] = {
    TokenKind.PLUS: "+",
    TokenKind.MINUS: "-",
    TokenKind.STAR: "*",
    TokenKind.SLASH: "/",
    TokenKind.LPAREN: "(",
    TokenKind.RPAREN: ")",
}

_SINGLE_MAP: dict[str, TokenKind] = {text: kind for kind, text in _SOURCE_TEXT.items()}


class Token:
    """A single token from the tokenizer. Only NUMBER tokens carry a value."""

    __slots__ = ("kind", "value")

    def __init__(self, kind: TokenKind, value: int | None = None) -> None:
        if (kind == TokenKind.NUMBER) != (value is not None):
            raise ValueError(f"{kind} token cannot have value {value!r}")
        self.kind = kind
        self.value = value

    @classmethod
    def number(cls, value: int) -> Token:
        return cls(TokenKind.NUMBER, value)

    def __setattr__(self, name: str, value: object) -> None:
        if hasattr(self, name):
            raise AttributeError(f"Token is immutable, cannot set {name!r}")
        object.__setattr__(self, name, value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return self.kind == other.kind and self.value == other.value

    def __hash__(self) -> int:
        return hash((self.kind, self.value))

    def __repr__(self) -> str:
        if self.kind == TokenKind.NUMBER:
            return f"Token({self.kind}, {self.value})"
        return f"Token({self.kind})"

    def __str__(self) -> str:
        """The source text this token was scanned from."""
        if self.kind == TokenKind.NUMBER:
            return str(self.value)
        return _SOURCE_TEXT[self.kind]


# Maximal run of ASCII digits
_NUMBER_RE = re.compile(r"[0-9]+")
_U64_DIGITS = len(str(U64_MAX))


def tokenize(source: str) -> list[Token]:
    """Tokenize a line of text into a list of tokens.

    Character indexes in errors are 1-based. No end-of-input token is
    appended.

    Raises:
        ExpressionTokenError: On an unrecognized character, or a numeric
            literal larger than 2**64 - 1 (reported at the literal's first
            digit).
    """
    tokens: list[Token] = []
    i = 0
    n = len(source)

    while i < n:
        c = source[i]

        # Skip whitespace
        if c.isspace():
            i += 1
            continue

        # Numbers
        if "0" <= c <= "9":
            m = _NUMBER_RE.match(source, i)
            assert m is not None
            # Leading zeros do not count toward the 20 digits of 2**64 - 1
            digits = m.group(0).lstrip("0") or "0"
            if len(digits) > _U64_DIGITS or int(digits) > U64_MAX:
                raise make_token_error(
                    f"Number too large at index: {i + 1}", source, i + 1
                )
            tokens.append(Token.number(int(digits)))
            i = m.end()
            continue

        # Single-character operators and punctuation
        if c in _SINGLE_MAP:
            tokens.append(Token(_SINGLE_MAP[c]))
            i += 1
            continue

        raise make_token_error(f"Invalid token {c!r} at index: {i + 1}", source, i + 1)

    logger.debug("Tokenized %r into %d tokens", source, len(tokens))
    return tokens


def render_tokens(tokens: Iterable[Token]) -> str:
    """Render tokens back to source text, separated by single spaces."""
    return " ".join(str(tok) for tok in tokens)
