"""Tests for the text-to-integer entry points and error rendering."""

from __future__ import annotations

import logging

import pytest

from exprengine import (
    EmptyInputError,
    EngineSettings,
    ExpressionArithmeticError,
    ExpressionError,
    ExpressionSyntaxError,
    LexError,
    NestingDepthError,
    Outcome,
    calculate,
    evaluate_source,
    format_error_position,
)
from exprengine.config import MAX_DEPTH_CEILING, MAX_TREE_DEPTH_CEILING

# =============================================================================
# calculate()
# =============================================================================


class TestCalculate:
    """calculate() returns the integer or raises the single failure."""

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("2+3*4", 14),
            ("(2+3)*4", 20),
            ("-5+3", -2),
            ("8-3-2", 3),
            ("100 / 7 % 4", 2),
            ("(1 << 4) | 3", 19),
            ("6 & 3 ^ 1", 3),
            ("2 * (3 + 4) > 13", 1),
        ],
    )
    def test_values(self, source: str, expected: int) -> None:
        assert calculate(source) == expected

    def test_division_by_zero(self) -> None:
        with pytest.raises(ExpressionArithmeticError):
            calculate("1/0")

    def test_empty(self) -> None:
        with pytest.raises(EmptyInputError):
            calculate("")

    def test_lex_error_propagates(self) -> None:
        with pytest.raises(LexError):
            calculate("1 + #")

    def test_syntax_error_before_evaluation(self) -> None:
        # The division by zero is never reached
        with pytest.raises(ExpressionSyntaxError):
            calculate("1/0 +")


# =============================================================================
# evaluate_source()
# =============================================================================


class TestEvaluateSource:
    """evaluate_source() returns exactly one of value or error."""

    def test_success(self) -> None:
        outcome = evaluate_source("2+3*4")
        assert outcome == Outcome(value=14, error=None)
        assert outcome.ok

    def test_unpacks_as_pair(self) -> None:
        value, err = evaluate_source("(2+3)*4")
        assert value == 20
        assert err is None

    def test_zero_is_a_value(self) -> None:
        value, err = evaluate_source("3 - 3")
        assert value == 0
        assert err is None

    def test_arithmetic_error(self) -> None:
        value, err = evaluate_source("1/0")
        assert value is None
        assert isinstance(err, ExpressionArithmeticError)

    def test_empty_input(self) -> None:
        outcome = evaluate_source("")
        assert outcome.value is None
        assert isinstance(outcome.error, EmptyInputError)
        assert not outcome.ok

    def test_missing_paren(self) -> None:
        _, err = evaluate_source("2+(3")
        assert isinstance(err, ExpressionSyntaxError)
        assert err.offset == 4

    def test_comma(self) -> None:
        _, err = evaluate_source("2,3")
        assert isinstance(err, ExpressionSyntaxError)

    def test_lex_error(self) -> None:
        _, err = evaluate_source("2 = 2")
        assert isinstance(err, LexError)

    def test_deterministic(self) -> None:
        for source in ["2+3*4", "1/0", "2+(3", ""]:
            first = evaluate_source(source)
            for _ in range(5):
                again = evaluate_source(source)
                assert again.value == first.value
                assert type(again.error) is type(first.error)
                assert str(again.error) == str(first.error)

    def test_failure_is_logged_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="exprengine.engine"):
            evaluate_source("1/0")
        assert any("division by zero" in r.getMessage() for r in caplog.records)

    def test_debug_logging_with_long_chain(self, caplog: pytest.LogCaptureFixture) -> None:
        source = "+".join(["1"] * 3000)
        with caplog.at_level(logging.DEBUG, logger="exprengine.engine"):
            outcome = evaluate_source(source)
        assert isinstance(outcome.error, NestingDepthError)

    def test_deepest_allowed_nesting_stays_an_outcome(self) -> None:
        settings = EngineSettings(max_depth=MAX_DEPTH_CEILING)
        # Every level opens all seven binding powers before the next "("
        level = "1|1^1&1<1<<1+1*("
        source = level * 100 + "1" + ")" * 100
        outcome = evaluate_source(source, settings)
        assert isinstance(outcome.error, NestingDepthError)

    def test_deepest_allowed_tree_stays_an_outcome(self) -> None:
        settings = EngineSettings(max_tree_depth=MAX_TREE_DEPTH_CEILING)
        outcome = evaluate_source("+".join(["1"] * 5000), settings)
        assert isinstance(outcome.error, NestingDepthError)
        assert evaluate_source("+".join(["1"] * 250), settings).value == 250


# =============================================================================
# Diagnostics
# =============================================================================


class TestErrorPosition:
    """The framed caret diagnostic has a fixed shape."""

    def test_frame(self) -> None:
        assert format_error_position("1+2", 1) == "---\n1+2\n ^\n---\n"

    def test_offset_zero(self) -> None:
        assert format_error_position("abc", 0) == "---\nabc\n^\n---\n"

    def test_end_of_input(self) -> None:
        assert format_error_position("2+(3", 4) == "----\n2+(3\n    ^\n----\n"

    def test_error_message_includes_frame(self) -> None:
        with pytest.raises(ExpressionSyntaxError) as exc_info:
            calculate("1 2")
        text = str(exc_info.value)
        assert text == (
            "bad expression, reaching the end or missing the operator\n"
            "---\n"
            "1 2\n"
            "  ^\n"
            "---\n"
        )

    def test_empty_input_frame(self) -> None:
        with pytest.raises(EmptyInputError) as exc_info:
            calculate("")
        assert str(exc_info.value) == "empty expression\n\n\n^\n\n"

    def test_error_without_position(self) -> None:
        err = ExpressionError("plain")
        assert str(err) == "plain"
        assert err.offset is None

    def test_arithmetic_error_has_no_frame(self) -> None:
        with pytest.raises(ExpressionArithmeticError) as exc_info:
            calculate("4/0")
        assert str(exc_info.value) == "division by zero: [4/0]"
