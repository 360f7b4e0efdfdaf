"""Grammar bindings and node classifiers.

Public API:
    get_binding(lang) → GrammarBinding
    GrammarBinding — per-language kind tables and node predicates
"""

from .base import GrammarBinding, node_text
from .registry import get_binding, get_binding_class
from .symbols import Kind, SymbolTable, token

__all__ = [
    "get_binding",
    "get_binding_class",
    "GrammarBinding",
    "Kind",
    "SymbolTable",
    "node_text",
    "token",
]
