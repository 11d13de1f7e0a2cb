# tests/rootscience/formula/test__parser.py
import math

import pytest
import torch

from rootscience.formula._parser import (
    PLACEHOLDER,
    Mode,
    ParseError,
    ParseState,
    parse,
)


def _evaluate(text, x=0.0):
    value, _ = parse(text, torch.tensor(x, dtype=torch.float64), Mode.EVALUATE)
    return value.item()


class TestParseState:
    """Tests for the parser cursor."""

    def test_advance_returns_copy(self):
        """Advancing leaves the original state untouched."""
        state = ParseState("x+1", 0, PLACEHOLDER, Mode.VALIDATE)
        advanced = state.advance(2)

        assert state.position == 0
        assert advanced.position == 2
        assert advanced.current == "1"

    def test_at_end(self):
        state = ParseState("x", 1, PLACEHOLDER, Mode.VALIDATE)
        assert state.at_end
        assert state.current == ""

    def test_state_is_frozen(self):
        state = ParseState("x", 0, PLACEHOLDER, Mode.VALIDATE)
        with pytest.raises(AttributeError):
            state.position = 1

    def test_outcomes_shared_across_advance(self):
        """Advanced states record rule outcomes in the same table."""
        state = ParseState("x+1", 0, PLACEHOLDER, Mode.VALIDATE)
        advanced = state.advance(2)

        assert advanced.outcomes is state.outcomes
        assert advanced == ParseState("x+1", 2, PLACEHOLDER, Mode.VALIDATE)


class TestPrecedence:
    """Tests for operator precedence and associativity."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("1+2*3", 7.0),
            ("1-2*3+4", -1.0),
            ("10-4-3", 3.0),
            ("64/4/2", 8.0),
            ("2*3^2*4", 72.0),
            ("2^3*4", 32.0),
            ("2^3^2", 512.0),
            ("1+2^3^2", 513.0),
            ("2^3^2*4", 2048.0),
            ("1+2*3*4-5", 20.0),
            ("(1+2)*3", 9.0),
            ("2*(3+4)^2", 98.0),
            ("7//2*2", 6.0),
            ("7%4*2", 6.0),
        ],
    )
    def test_binary_expressions(self, text, expected):
        assert _evaluate(text) == expected


class TestOperands:
    """Tests for literals, the variable, calls and parentheses."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("42", 42.0),
            ("2.5", 2.5),
            ("2.", 2.0),
            (".5", 0.5),
            ("1.5e2", 150.0),
            ("1E-2", 0.01),
            ("((3))", 3.0),
        ],
    )
    def test_literals(self, text, expected):
        assert _evaluate(text) == pytest.approx(expected)

    def test_variable(self):
        assert _evaluate("x", 3.0) == 3.0
        assert _evaluate("x*x", 3.0) == 9.0

    def test_function_call(self):
        assert _evaluate("sqrt(x)", 16.0) == 4.0
        assert _evaluate("log2(8)") == pytest.approx(3.0)
        assert _evaluate("abs(sin(x))", -math.pi / 2) == pytest.approx(1.0)


class TestUnarySign:
    """Tests for leading signs."""

    def test_minus_negates_whole_expression(self):
        """A leading sign applies to everything after it."""
        assert _evaluate("-x+1", 2.0) == -3.0

    def test_plus(self):
        assert _evaluate("+x", 2.0) == 2.0

    def test_repeated_signs(self):
        assert _evaluate("--x", 2.0) == 2.0

    def test_sign_inside_parentheses(self):
        assert _evaluate("2^(-x)", 1.0) == 0.5

    def test_sign_after_operator_is_rejected(self):
        """An operand cannot itself start with a sign."""
        with pytest.raises(ParseError):
            parse("2^-x", PLACEHOLDER, Mode.VALIDATE)


class TestModes:
    """Tests for validation and evaluation modes."""

    def test_validate_does_not_compute(self):
        """A dry run returns the placeholder instead of applying functions."""
        value, state = parse("ln(0)/0", PLACEHOLDER, Mode.VALIDATE)

        assert value == PLACEHOLDER
        assert state.at_end

    def test_evaluate_computes(self):
        assert _evaluate("ln(0)") == -math.inf

    def test_stops_after_complete_expression(self):
        """Parsing may stop before the end of the text."""
        value, state = parse(
            "sin(x)+", torch.tensor(0.0, dtype=torch.float64), Mode.EVALUATE
        )

        assert value.item() == 0.0
        assert state.position == 6


class TestParseErrors:
    """Tests for failures and their positions."""

    def test_empty(self):
        with pytest.raises(ParseError) as info:
            parse("", PLACEHOLDER, Mode.VALIDATE)
        assert info.value.message == "unexpected end of formula"
        assert info.value.position == 0

    def test_missing_operand(self):
        with pytest.raises(ParseError) as info:
            parse("1+", PLACEHOLDER, Mode.VALIDATE)
        assert info.value.message == "unexpected end of formula"
        assert info.value.position == 2

    def test_furthest_failure_is_reported(self):
        """The failure that got furthest into the text wins."""
        with pytest.raises(ParseError) as info:
            parse("1+*2", PLACEHOLDER, Mode.VALIDATE)
        assert info.value.message is None
        assert info.value.position == 2

    def test_unknown_function(self):
        with pytest.raises(ParseError) as info:
            parse("foo(x)", PLACEHOLDER, Mode.VALIDATE)
        assert info.value.message == "unknown function 'foo'"
        assert info.value.position == 0

    def test_unknown_character(self):
        with pytest.raises(ParseError) as info:
            parse("1$2", PLACEHOLDER, Mode.VALIDATE)
        assert info.value.message == "unexpected character '$'"
        assert info.value.position == 1
