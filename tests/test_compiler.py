"""Syntax tree -> Node DAG."""

import pytest

from dagprop import (
    EvaluationContext,
    SymbolTable,
    UnsupportedExpression,
    compile,
    graph_utils,
)
from dagprop.expr import BinaryOp, FunctionCall, Group, Literal, SymbolRef, UnaryOp


class TestCompile:
    def test_symbols_are_interned(self, ctx):
        symbols = SymbolTable(ctx)
        tree = compile("x * y + y * z", ctx, symbols)
        assert sorted(symbols) == ["x", "y", "z"]
        assert symbols["y"] is tree.operands[0].operands[1]
        assert symbols["y"] is tree.operands[1].operands[0]
        assert symbols["y"].consumer_count == 2
        assert symbols["x"].consumer_count == 1

    def test_root_has_no_consumers(self, ctx):
        assert compile("x * y + y * z", ctx).consumer_count == 0

    def test_literals_are_not_interned(self, ctx):
        tree = compile("2 * x + 2", ctx)
        assert tree.operands[0].operands[0] is not tree.operands[1]
        assert tree.operands[1].op_tag == "const"
        assert tree.operands[1].consumer_count == 1

    def test_groups_produce_no_nodes(self, ctx):
        tree = compile("((x + y)) * (z)", ctx)
        assert tree.op_tag == "mul"
        assert tree.operands[0].op_tag == "add"
        assert tree.operands[1].op_tag == "symbol"

    def test_single_symbol(self, ctx):
        tree = compile("(x)", ctx)
        assert tree.op_tag == "symbol"
        assert tree.get_value() == 5.0

    def test_single_literal(self):
        tree = compile("3")
        assert tree.op_tag == "const"
        assert tree.get_value() == 3.0

    @pytest.mark.parametrize("text,tag", [
        ("x + y", "add"),
        ("x - y", "sub"),
        ("x * y", "mul"),
        ("x / y", "div"),
        ("exp(x)", "exp"),
        ("sigma(x)", "sigmoid"),
        ("sigmoid(x)", "sigmoid"),
    ])
    def test_operator_tags(self, ctx, text, tag):
        assert compile(text, ctx).op_tag == tag

    def test_from_syntax_tree(self, ctx):
        tree = compile(BinaryOp("+", Literal(1), Group(FunctionCall("exp", (SymbolRef("x"),)))), ctx)
        assert tree.op_tag == "add"
        assert tree.operands[1].op_tag == "exp"

    def test_every_node_shares_the_context(self, ctx):
        tree = compile("x * y + sigma(z) - 1", ctx)
        assert all(n.context is ctx for n in graph_utils.topological_order(tree))


class TestRoundTrip:
    def test_same_structure_no_shared_objects(self, ctx):
        text = "x * y + y * z - exp(x / (y + 1))"
        first = compile(text, ctx)
        second = compile(text, ctx)

        assert graph_utils.graph_signature(first) == graph_utils.graph_signature(second)
        ids_first = {id(n) for n in graph_utils.topological_order(first)}
        ids_second = {id(n) for n in graph_utils.topological_order(second)}
        assert ids_first.isdisjoint(ids_second)

        stats_first = graph_utils.get_graph_stats(first)
        stats_second = graph_utils.get_graph_stats(second)
        assert stats_first["consumer_counts"] == stats_second["consumer_counts"]

    def test_different_expressions_differ(self, ctx):
        assert (graph_utils.graph_signature(compile("x * y", ctx))
                != graph_utils.graph_signature(compile("y * x", ctx)))


class TestUnsupported:
    @pytest.mark.parametrize("text", [
        "x ** 2",
        "-x",
        "x % y",
        "x // y",
        "x ^ y",
        "log(x)",
        "exp()",
        "exp(x, y)",
        "sigma(x) + tanh(y)",
    ])
    def test_rejected(self, text):
        with pytest.raises(UnsupportedExpression):
            compile(text)

    def test_rejected_before_any_node_is_built(self, ctx):
        symbols = SymbolTable(ctx)
        with pytest.raises(UnsupportedExpression):
            compile("x * y + log(z)", ctx, symbols)
        assert len(symbols) == 0

    def test_unary_tree(self):
        with pytest.raises(UnsupportedExpression):
            compile(UnaryOp("-", SymbolRef("x")))

    def test_unknown_tree_node(self):
        with pytest.raises(UnsupportedExpression):
            compile(BinaryOp("+", SymbolRef("x"), "y"))

    def test_symbol_table_from_another_context(self, ctx):
        with pytest.raises(ValueError):
            compile("x", EvaluationContext(x=1), SymbolTable(ctx))

    def test_symbol_table_is_single_use(self, ctx):
        symbols = SymbolTable(ctx)
        compile("x + y", ctx, symbols)
        with pytest.raises(ValueError):
            compile("x * y", ctx, symbols)
        assert symbols["x"].consumer_count == 1

    def test_context_free_compiles_share_a_context(self):
        assert compile("x").context is compile("1").context
