"""Expression tree for exprcalc."""

from exprcalc.core.ir.expressions import U64_MAX, BinaryExpr, BinaryOp, Expr, Literal

__all__ = ["U64_MAX", "BinaryExpr", "BinaryOp", "Expr", "Literal"]
