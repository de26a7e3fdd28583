"""
Line-level facade over the tokenize, parse, and evaluate stages.

Each call is independent; nothing is kept between lines.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict

from exprcalc.core.expression_lang.evaluator import evaluate
from exprcalc.core.expression_lang.parser import DEFAULT_MAX_DEPTH, parse
from exprcalc.core.expression_lang.tokenizer import Token, tokenize
from exprcalc.core.ir.expressions import Expr

logger = logging.getLogger(__name__)

EXIT_COMMAND = "exit"


class Calculation(BaseModel):
    """Every intermediate product of one evaluated line."""

    source: str
    tokens: list[Token]
    tree: Expr
    value: int

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


def is_exit_command(line: str) -> bool:
    """True when the stripped line is exactly the exit command."""
    return line.strip() == EXIT_COMMAND


def trace(line: str, *, max_depth: int = DEFAULT_MAX_DEPTH) -> Calculation:
    """Run all three stages on one line, keeping the intermediate results.

    Raises:
        ExpressionTokenError: If tokenization fails.
        ExpressionParseError: If the tokens do not form an expression.
        ExpressionEvalError: If evaluation fails.
    """
    tokens = tokenize(line)
    tree = parse(tokens, max_depth=max_depth)
    value = evaluate(tree)
    return Calculation(source=line, tokens=tokens, tree=tree, value=value)


def calculate(line: str, *, max_depth: int = DEFAULT_MAX_DEPTH) -> int:
    """Evaluate one line of text to an unsigned integer.

    Args:
        line: Expression text, e.g. ``"1+123*(12/234)"``.
        max_depth: Maximum parenthesis nesting accepted by the parser.

    Returns:
        The computed value.
    """
    value = evaluate(parse(tokenize(line), max_depth=max_depth))
    logger.debug("%r = %d", line.strip(), value)
    return value
