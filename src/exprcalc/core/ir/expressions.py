"""
Expression tree types for exprcalc.

The tree is the precedence-resolved form of an arithmetic line:
- Literals: unsigned 64-bit integers
- Binary operations: +, -, *, /

Parentheses only shape the tree during parsing and never appear in it.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

U64_MAX = 2**64 - 1

# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class BinaryOp(StrEnum):
    """Binary arithmetic operators."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"


# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class Literal(BaseModel):
    """An unsigned 64-bit integer leaf."""

    value: int = Field(ge=0, le=U64_MAX, description="The literal value")

    model_config = ConfigDict(frozen=True, strict=True)

    def __str__(self) -> str:
        return str(self.value)

    @property
    def depth(self) -> int:
        return 1


class BinaryExpr(BaseModel):
    """Binary operation: left op right."""

    op: BinaryOp
    left: Expr
    right: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        # Explicit stack: left-folded chains make trees as deep as the chain
        parts: list[str] = []
        pending: list[Expr | str] = [self]
        while pending:
            item = pending.pop()
            if isinstance(item, BinaryExpr):
                pending.extend([")", item.right, f" {item.op.value} ", item.left, "("])
            else:
                parts.append(str(item))
        return "".join(parts)

    @property
    def depth(self) -> int:
        """Number of levels below and including this node."""
        deepest = 0
        pending: list[tuple[Expr, int]] = [(self, 1)]
        while pending:
            node, level = pending.pop()
            deepest = max(deepest, level)
            if isinstance(node, BinaryExpr):
                pending.append((node.left, level + 1))
                pending.append((node.right, level + 1))
        return deepest


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = Literal | BinaryExpr

# Rebuild for the recursive forward reference
BinaryExpr.model_rebuild()
