"""Text -> syntax tree."""

import pytest

from dagprop import UnsupportedExpression, parse
from dagprop.expr import BinaryOp, FunctionCall, Group, Literal, SymbolRef, UnaryOp

X, Y, Z = SymbolRef("x"), SymbolRef("y"), SymbolRef("z")


class TestShapes:
    def test_binary(self):
        assert parse("x + y") == BinaryOp("+", X, Y)

    def test_precedence(self):
        assert parse("1 + 2 * x") == BinaryOp("+", Literal(1), BinaryOp("*", Literal(2), X))

    def test_left_associative(self):
        assert parse("x - y - z") == BinaryOp("-", BinaryOp("-", X, Y), Z)

    def test_float_literal(self):
        assert parse("2.5") == Literal(2.5)

    def test_surrounding_whitespace(self):
        assert parse("   x  ") == X

    def test_function_call(self):
        assert parse("exp(sigma(x))") == FunctionCall("exp", (FunctionCall("sigma", (X,)),))

    def test_unary_minus(self):
        assert parse("-x") == UnaryOp("-", X)

    def test_unsupported_operators_still_parse(self):
        assert parse("x ** 2") == BinaryOp("**", X, Literal(2))


class TestGroups:
    def test_grouped_left_operand(self):
        assert parse("(x + y) * z") == BinaryOp("*", Group(BinaryOp("+", X, Y)), Z)

    def test_grouped_right_operand(self):
        assert parse("x * (y)") == BinaryOp("*", X, Group(Y))

    def test_both_operands(self):
        assert parse("(x) + (y)") == BinaryOp("+", Group(X), Group(Y))

    def test_nested_groups(self):
        assert parse("((x))") == Group(Group(X))

    def test_whole_expression(self):
        assert parse("((x + y))") == Group(Group(BinaryOp("+", X, Y)))

    def test_call_parenthesis_is_not_a_group(self):
        assert parse("exp(x)") == FunctionCall("exp", (X,))
        assert parse("exp ( x )") == FunctionCall("exp", (X,))

    def test_grouped_argument(self):
        assert parse("exp((x))") == FunctionCall("exp", (Group(X),))

    def test_second_argument(self):
        assert parse("f(x, (y))") == FunctionCall("f", (X, Group(Y)))

    def test_unary_operand(self):
        assert parse("-(x)") == UnaryOp("-", Group(X))

    def test_parenthesis_in_comment_is_ignored(self):
        assert parse("(x + # (\n y)") == Group(BinaryOp("+", X, Y))

    def test_non_ascii_comment(self):
        assert parse("(x # é (\n) * y") == BinaryOp("*", Group(X), Y)


class TestParseErrors:
    def test_syntax_error_is_chained(self):
        with pytest.raises(UnsupportedExpression) as exc:
            parse("x +")
        assert isinstance(exc.value.__cause__, SyntaxError)

    @pytest.mark.parametrize("text", [
        "True",
        "'x'",
        "1j",
        "x < y",
        "x[0]",
        "a.b",
        "f(x=1)",
        "f(*xs)",
        "math.exp(x)",
        "x and y",
        "~x",
        "x << y",
    ])
    def test_unsupported_syntax(self, text):
        with pytest.raises(UnsupportedExpression):
            parse(text)
