"""
Recursive descent parser for the exprcalc arithmetic language.

Grammar (precedence low to high):
    expression  → term (("+"|"-") term)*
    term        → factor (("*"|"/") factor)*
    factor      → NUMBER | "(" expression ")"

Positions in errors are 1-based token indexes; a position of None means
the input ended where more tokens were required.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from exprcalc.core.errors import ExpressionParseError
from exprcalc.core.expression_lang.tokenizer import Token, TokenKind, tokenize
from exprcalc.core.ir.expressions import BinaryExpr, BinaryOp, Expr, Literal

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 200

_ADDITIVE_OPS: dict[TokenKind, BinaryOp] = {
    TokenKind.PLUS: BinaryOp.ADD,
    TokenKind.MINUS: BinaryOp.SUB,
}

_MULTIPLICATIVE_OPS: dict[TokenKind, BinaryOp] = {
    TokenKind.STAR: BinaryOp.MUL,
    TokenKind.SLASH: BinaryOp.DIV,
}


class _Parser:
    """Recursive descent parser over a finite token sequence."""

    def __init__(self, tokens: Sequence[Token], max_depth: int) -> None:
        self.tokens = tokens
        self.pos = 0
        self.depth = 0
        self.max_depth = max_depth

    @property
    def current(self) -> Token | None:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    @property
    def position(self) -> int | None:
        """1-based index of the current token, None at end of input."""
        if self.pos < len(self.tokens):
            return self.pos + 1
        return None

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok

    def expect(self, kind: TokenKind) -> Token:
        tok = self.current
        if tok is None:
            raise ExpressionParseError(
                f"Unexpected end of input, expected '{Token(kind)}'", None
            )
        if tok.kind != kind:
            raise ExpressionParseError(
                f"Expected '{Token(kind)}', got '{tok}' at position {self.position}",
                self.position,
            )
        return self.advance()

    # -- Grammar rules --

    def parse_expression(self) -> Expr:
        """term (('+' | '-') term)*"""
        left = self.parse_term()
        while self.current is not None and self.current.kind in _ADDITIVE_OPS:
            op = _ADDITIVE_OPS[self.advance().kind]
            right = self.parse_term()
            left = BinaryExpr(op=op, left=left, right=right)
        return left

    def parse_term(self) -> Expr:
        """factor (('*' | '/') factor)*"""
        left = self.parse_factor()
        while self.current is not None and self.current.kind in _MULTIPLICATIVE_OPS:
            op = _MULTIPLICATIVE_OPS[self.advance().kind]
            right = self.parse_factor()
            left = BinaryExpr(op=op, left=left, right=right)
        return left

    def parse_factor(self) -> Expr:
        """NUMBER | '(' expression ')'"""
        tok = self.current

        if tok is None:
            if not self.tokens:
                raise ExpressionParseError("Empty expression: expected a number or '('", None)
            raise ExpressionParseError("Unexpected end of input, expected a number or '('", None)

        if tok.kind == TokenKind.NUMBER:
            self.advance()
            assert tok.value is not None
            return Literal(value=tok.value)

        # Parenthesized expression
        if tok.kind == TokenKind.LPAREN:
            if self.depth >= self.max_depth:
                raise ExpressionParseError(
                    f"Expression nested too deeply at position {self.position} "
                    f"(limit is {self.max_depth})",
                    self.position,
                )
            self.advance()
            self.depth += 1
            expr = self.parse_expression()
            self.expect(TokenKind.RPAREN)
            self.depth -= 1
            return expr

        raise ExpressionParseError(
            f"Unexpected token '{tok}' at position {self.position}, expected a number or '('",
            self.position,
        )


def parse(tokens: Sequence[Token], *, max_depth: int = DEFAULT_MAX_DEPTH) -> Expr:
    """Parse a token sequence into an expression tree.

    Args:
        tokens: Tokens as produced by ``tokenize``.
        max_depth: Maximum parenthesis nesting accepted.

    Returns:
        Parsed expression tree.

    Raises:
        ExpressionParseError: If the tokens do not form exactly one expression.
    """
    parser = _Parser(tokens, max_depth)
    expr = parser.parse_expression()

    # Ensure all tokens consumed
    if parser.current is not None:
        raise ExpressionParseError(
            f"Unexpected trailing token '{parser.current}' at position {parser.position}",
            parser.position,
        )

    logger.debug("Parsed %d tokens into a %s node", len(tokens), type(expr).__name__)
    return expr


def parse_expr(source: str, *, max_depth: int = DEFAULT_MAX_DEPTH) -> Expr:
    """Tokenize and parse an expression string.

    Args:
        source: Expression string (e.g., "1 + 2 * (3 - 1)")

    Returns:
        Parsed expression tree.

    Raises:
        ExpressionTokenError: If tokenization fails.
        ExpressionParseError: If the expression is invalid.
    """
    return parse(tokenize(source), max_depth=max_depth)
