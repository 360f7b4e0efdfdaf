"""Ruby grammar binding using tree-sitter-ruby."""

import logging

import tree_sitter
import tree_sitter_ruby

from ..languages import Lang
from .base import GrammarBinding
from .symbols import token

logger = logging.getLogger(__name__)

# Create the Language object once (wraps the PyCapsule)
_RUBY_LANGUAGE = tree_sitter.Language(tree_sitter_ruby.language())

# Nodes whose named children are statements
_STATEMENT_CONTAINERS = (
    "program", "body_statement", "then", "else", "do", "begin", "ensure",
    "block_body", "parenthesized_statements",
)


class RubyBinding(GrammarBinding):
    """tree-sitter-ruby node classifier.

    ``elsif`` is a flattened clause stored in the ``alternative`` field of
    the ``if``. Statements carry no dedicated node kinds, so every named
    child of a statement container counts as one.
    """

    lang = Lang.RUBY
    language = _RUBY_LANGUAGE

    FUNCTIONS = ("method", "singleton_method")
    CLOSURES = ("block", "do_block", "lambda")
    CLASSES = ("class", "singleton_class")
    NAMESPACES = ("module",)

    STRINGS = ("string", "heredoc_body")
    CALLS = ("call",)

    IFS = ("if", "unless")
    ELIFS = ("elsif",)
    ELSES = ("else",)
    LOOPS = ("while", "until", "for", "while_modifier", "until_modifier")
    SWITCHES = ("case", "case_match")
    CASES = ("when", "in_clause")
    CATCHES = ("rescue", "rescue_modifier")
    TERNARIES = ("conditional",)
    LOGICAL_OPERATORS = ("&&", "||", token("and"), token("or"))
    EXTRA_DECISIONS = ("if_modifier", "unless_modifier")

    EXITS = ("return",)

    OPERANDS = (
        "identifier", "constant", "instance_variable", "class_variable",
        "global_variable", "integer", "float", "rational", "complex",
        "string", "character", "simple_symbol", "delimited_symbol",
        "hash_key_symbol", "true", "false", "nil", "self",
    )
    IGNORED_TOKENS = (")", "]", "}", "end", "\n")

    def __init__(self) -> None:
        super().__init__()
        self._statement_containers = self.symbols.resolve(_STATEMENT_CONTAINERS)

    def is_statement(self, node: tree_sitter.Node) -> bool:
        if not node.is_named or node.kind_id in self._comments:
            return False
        parent = node.parent
        return parent is not None and parent.kind_id in self._statement_containers


BINDINGS = {Lang.RUBY: RubyBinding}
