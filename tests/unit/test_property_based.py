"""
Property-based tests using Hypothesis.

These tests verify pipeline invariants across a wide range of inputs,
replacing the need for exhaustive example-based tests.
"""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from exprcalc.core.errors import CalcError, ExpressionParseError, ExpressionTokenError
from exprcalc.core.expression_lang.evaluator import evaluate
from exprcalc.core.expression_lang.parser import parse
from exprcalc.core.expression_lang.tokenizer import Token, TokenKind, render_tokens, tokenize
from exprcalc.core.ir.expressions import U64_MAX, BinaryExpr, BinaryOp, Expr, Literal

_OPERATORS = [BinaryOp.ADD, BinaryOp.SUB, BinaryOp.MUL, BinaryOp.DIV]
_PRECEDENCE = {BinaryOp.ADD: 1, BinaryOp.SUB: 1, BinaryOp.MUL: 2, BinaryOp.DIV: 2}

literals = st.integers(min_value=0, max_value=U64_MAX).map(lambda v: Literal(value=v))

trees = st.recursive(
    literals,
    lambda children: st.builds(
        lambda op, left, right: BinaryExpr(op=op, left=left, right=right),
        st.sampled_from(_OPERATORS),
        children,
        children,
    ),
    max_leaves=12,
)

any_token = st.one_of(
    st.integers(min_value=0, max_value=U64_MAX).map(Token.number),
    st.sampled_from([kind for kind in TokenKind if kind != TokenKind.NUMBER]).map(Token),
)


def to_source(expr: Expr) -> str:
    """Render a tree using only the parentheses that precedence requires."""
    if isinstance(expr, Literal):
        return str(expr.value)
    left = to_source(expr.left)
    right = to_source(expr.right)
    if isinstance(expr.left, BinaryExpr) and _PRECEDENCE[expr.left.op] < _PRECEDENCE[expr.op]:
        left = f"({left})"
    # Same precedence on the right must keep its parentheses: a-(b-c)
    if isinstance(expr.right, BinaryExpr) and _PRECEDENCE[expr.right.op] <= _PRECEDENCE[expr.op]:
        right = f"({right})"
    return f"{left}{expr.op.value}{right}"


def reference_value(expr: Expr) -> int | None:
    """Value with unbounded integers, or None where unsigned 64-bit evaluation fails."""
    if isinstance(expr, Literal):
        return expr.value
    left = reference_value(expr.left)
    right = reference_value(expr.right)
    if left is None or right is None:
        return None
    if expr.op == BinaryOp.ADD:
        value = left + right
    elif expr.op == BinaryOp.SUB:
        value = left - right
    elif expr.op == BinaryOp.MUL:
        value = left * right
    elif right == 0:
        return None
    else:
        value = left // right
    if not 0 <= value <= U64_MAX:
        return None
    return value


class TestTokenizerProperties:
    """Property-based tests for the tokenizer."""

    @given(st.text(alphabet="0123456789", min_size=1, max_size=40))
    @settings(max_examples=200)
    def test_digit_strings_are_one_number(self, digits: str) -> None:
        """Invariant: a digit string is one NUMBER token, or an error if it exceeds 64 bits."""
        if int(digits) <= U64_MAX:
            assert tokenize(digits) == [Token.number(int(digits))]
        else:
            try:
                tokenize(digits)
            except ExpressionTokenError as e:
                assert e.index == 1
            else:
                raise AssertionError(f"{digits} should not tokenize")

    @given(st.lists(any_token, max_size=30))
    @settings(max_examples=200)
    def test_render_then_tokenize_is_identity(self, tokens: list[Token]) -> None:
        """Invariant: re-tokenizing rendered tokens yields the same tokens."""
        assert tokenize(render_tokens(tokens)) == tokens

    @given(st.text(max_size=200))
    @settings(max_examples=200)
    def test_pipeline_only_raises_calc_errors(self, text: str) -> None:
        """Invariant: arbitrary text either evaluates or raises a CalcError."""
        try:
            value = evaluate(parse(tokenize(text)))
        except CalcError:
            return
        assert 0 <= value <= U64_MAX


    @given(st.integers(min_value=21, max_value=6000), st.sampled_from("123456789"))
    @settings(max_examples=50)
    def test_runs_longer_than_twenty_digits_are_errors(self, length: int, lead: str) -> None:
        """Invariant: any run of more than 20 significant digits is reported at its start."""
        try:
            tokenize("0 + " + lead + "0" * (length - 1))
        except ExpressionTokenError as e:
            assert e.index == 5
        else:
            raise AssertionError(f"{length}-digit literal should not tokenize")


class TestParserProperties:
    """Property-based tests for the parser."""

    @given(trees)
    @settings(max_examples=200)
    def test_minimal_source_parses_back_to_same_tree(self, expr: Expr) -> None:
        """Invariant: precedence and left-folding rebuild the original tree."""
        assert parse(tokenize(to_source(expr))) == expr

    @given(trees)
    @settings(max_examples=100)
    def test_fully_parenthesized_source_parses_back(self, expr: Expr) -> None:
        assert parse(tokenize(str(expr))) == expr

    @given(st.lists(st.sampled_from(["+", "-", "*", "/", "(", ")"]), max_size=10))
    def test_operand_free_input_never_parses(self, symbols: list[str]) -> None:
        text = "".join(symbols)
        try:
            parse(tokenize(text))
        except ExpressionParseError:
            return
        raise AssertionError(f"{text!r} should not parse")


class TestEvaluatorProperties:
    """Property-based tests for the evaluator."""

    @given(trees)
    @settings(max_examples=200)
    def test_matches_unbounded_reference(self, expr: Expr) -> None:
        """Invariant: results agree with unbounded arithmetic whenever they fit."""
        expected = reference_value(expr)
        try:
            value = evaluate(expr)
        except CalcError:
            assert expected is None
        else:
            assert value == expected
