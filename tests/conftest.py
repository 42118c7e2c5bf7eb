"""Shared fixtures for the dagprop test suite."""

from collections import Counter

import pytest

from dagprop import EvaluationContext, SymbolicContext


class CountingContext(EvaluationContext):
    """Context that records every symbol lookup."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.lookups = Counter()

    def get_symbol_value(self, name):
        self.lookups[name] += 1
        return super().get_symbol_value(name)


@pytest.fixture
def ctx():
    return EvaluationContext({"x": 5, "y": 7, "z": 13})


@pytest.fixture
def counting_ctx():
    return CountingContext({"x": 5, "y": 7, "z": 13})


@pytest.fixture
def sym_ctx():
    return SymbolicContext()
