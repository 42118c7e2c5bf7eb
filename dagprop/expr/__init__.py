# dagprop/expr/__init__.py
from .syntax import BinaryOp, FunctionCall, Group, Literal, SymbolRef, UnaryOp
from .parser import parse
from .compiler import SymbolTable, compile

__all__ = [
    "parse", "compile", "SymbolTable",
    "Literal", "SymbolRef", "Group", "BinaryOp", "UnaryOp", "FunctionCall",
]
