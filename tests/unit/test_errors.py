"""Tests for exprcalc error types."""

from exprcalc.core.errors import (
    CalcError,
    ErrorContext,
    EvalErrorKind,
    ExpressionEvalError,
    ExpressionParseError,
    ExpressionTokenError,
    make_token_error,
)


class TestErrorContext:
    def test_caret_under_column(self) -> None:
        context = ErrorContext(line="12+x", column=4)
        assert context.format() == "  12+x\n     ^"

    def test_first_column(self) -> None:
        assert ErrorContext(line="?", column=1).format() == "  ?\n  ^"


class TestErrorTypes:
    def test_token_error_drops_newline(self) -> None:
        error = make_token_error("Invalid token 'x' at index: 2", "1x\n", 2)
        assert error.index == 2
        assert error.message == "Invalid token 'x' at index: 2"
        assert str(error) == "Invalid token 'x' at index: 2\n  1x\n   ^"

    def test_parse_error_at_end(self) -> None:
        error = ExpressionParseError("Unexpected end of input")
        assert error.at_end
        assert not ExpressionParseError("Unexpected token", 2).at_end

    def test_all_errors_are_calc_errors(self) -> None:
        errors = [
            ExpressionTokenError("bad", 1),
            ExpressionParseError("bad", 1),
            ExpressionEvalError("bad", EvalErrorKind.OVERFLOW),
        ]
        for error in errors:
            assert isinstance(error, CalcError)
            assert str(error) == "bad"
