"""
Expression evaluator for the exprcalc arithmetic language.

Reduces an expression tree to an unsigned 64-bit integer. Pure evaluation,
no I/O. Does NOT use Python's eval().

Python integers are unbounded, so every operation is range-checked against
the unsigned 64-bit domain instead of wrapping.
"""

from __future__ import annotations

import logging

from exprcalc.core.errors import EvalErrorKind, ExpressionEvalError
from exprcalc.core.ir.expressions import U64_MAX, BinaryExpr, BinaryOp, Expr, Literal

logger = logging.getLogger(__name__)


def evaluate(expr: Expr) -> int:
    """Evaluate an expression tree.

    Children are reduced before their parent (post-order). The walk keeps
    an explicit stack, so long left-folded chains such as ``1+1+...+1``
    do not hit the interpreter's recursion limit.

    Args:
        expr: Parsed expression tree.

    Returns:
        The computed value, in ``0 .. 2**64 - 1``.

    Raises:
        ExpressionEvalError: On division by zero, overflow, or underflow.
    """
    pending: list[tuple[Expr, bool]] = [(expr, False)]
    values: list[int] = []

    while pending:
        node, children_done = pending.pop()

        if isinstance(node, Literal):
            values.append(node.value)
            continue

        if not isinstance(node, BinaryExpr):
            raise TypeError(f"Unknown expression type: {type(node).__name__}")

        if children_done:
            right = values.pop()
            left = values.pop()
            values.append(_apply(node.op, left, right))
        else:
            pending.append((node, True))
            pending.append((node.right, False))
            pending.append((node.left, False))

    result = values.pop()
    logger.debug("Evaluated to %d", result)
    return result


def _apply(op: BinaryOp, left: int, right: int) -> int:
    """Apply one operator with checked unsigned 64-bit semantics."""
    if op == BinaryOp.ADD:
        return _check_overflow(left + right, f"{left} + {right}")
    if op == BinaryOp.SUB:
        if right > left:
            raise ExpressionEvalError(
                f"Underflow: {left} - {right} is negative", EvalErrorKind.UNDERFLOW
            )
        return left - right
    if op == BinaryOp.MUL:
        return _check_overflow(left * right, f"{left} * {right}")
    if op == BinaryOp.DIV:
        if right == 0:
            raise ExpressionEvalError("Division by zero", EvalErrorKind.DIVISION_BY_ZERO)
        # Operands are non-negative, so floor division truncates toward zero
        return left // right

    raise ValueError(f"Unknown binary op: {op}")


def _check_overflow(value: int, description: str) -> int:
    if value > U64_MAX:
        raise ExpressionEvalError(
            f"Overflow: {description} exceeds {U64_MAX}", EvalErrorKind.OVERFLOW
        )
    return value
