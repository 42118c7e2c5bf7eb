import numpy as np
import pytest
import sympy

from dagprop import EvaluationContext, SymbolicContext, UnboundSymbol


class TestEvaluationContext:
    def test_mapping_and_keywords(self):
        ctx = EvaluationContext({"x": 1}, y=2.5)
        assert dict(ctx) == {"x": 1.0, "y": 2.5}
        assert len(ctx) == 2
        assert isinstance(ctx["x"], np.float64)

    def test_numpy_scalars(self):
        assert EvaluationContext(x=np.float32(0.5)).get_symbol_value("x") == 0.5

    @pytest.mark.parametrize("bad", ["1", None, [1.0], True])
    def test_rejects_non_numeric(self, bad):
        with pytest.raises(TypeError):
            EvaluationContext(x=bad)

    def test_unbound(self):
        with pytest.raises(UnboundSymbol) as exc:
            EvaluationContext(x=1).get_symbol_value("y")
        assert exc.value.name == "y"
        assert isinstance(exc.value, LookupError)

    def test_bind_returns_new_context(self):
        ctx = EvaluationContext(x=1)
        other = ctx.bind(x=2, y=3)
        assert ctx.get_symbol_value("x") == 1.0
        assert "y" not in ctx
        assert other.get_symbol_value("x") == 2.0
        assert other.get_symbol_value("y") == 3.0

    def test_numeric_algebra(self):
        assert not EvaluationContext().algebra.symbolic


class TestSymbolicContext:
    def test_symbols(self):
        ctx = SymbolicContext()
        assert ctx.get_symbol_value("x") == sympy.Symbol("x")
        assert ctx.get_symbol_value("x") is ctx.get_symbol_value("x")
        assert ctx.algebra.symbolic

    def test_no_numeric_bindings(self):
        with pytest.raises(TypeError):
            SymbolicContext().bind(x=1)

    def test_simplifier_choice(self):
        assert SymbolicContext(simplify=False).algebra.simplifier is None
        assert SymbolicContext().algebra.simplifier is sympy.simplify
