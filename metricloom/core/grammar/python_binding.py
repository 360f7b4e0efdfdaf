"""Python grammar binding using tree-sitter-python."""

import logging

import tree_sitter
import tree_sitter_python

from ..languages import Lang
from .base import GrammarBinding
from .symbols import token

logger = logging.getLogger(__name__)

# Create the Language object once (wraps the PyCapsule)
_PYTHON_LANGUAGE = tree_sitter.Language(tree_sitter_python.language())


class PythonBinding(GrammarBinding):
    """tree-sitter-python node classifier.

    ``elif`` is a flattened clause of the enclosing ``if_statement`` and
    docstrings are classified as comments.
    """

    lang = Lang.PYTHON
    language = _PYTHON_LANGUAGE

    FUNCTIONS = ("function_definition",)
    CLOSURES = ("lambda",)
    CLASSES = ("class_definition",)

    STRINGS = ("string", "concatenated_string")
    CALLS = ("call",)

    IFS = ("if_statement",)
    ELIFS = ("elif_clause",)
    ELSES = ("else_clause",)
    LOOPS = ("for_statement", "while_statement")
    SWITCHES = ("match_statement",)
    CASES = ("case_clause",)
    CATCHES = ("except_clause", "except_group_clause")
    TERNARIES = ("conditional_expression",)
    LOGICAL_OPERATORS = (token("and"), token("or"))
    EXTRA_DECISIONS = ("for_in_clause", "if_clause")

    STATEMENTS = (
        "expression_statement", "return_statement", "pass_statement",
        "break_statement", "continue_statement", "raise_statement",
        "assert_statement", "delete_statement", "global_statement",
        "nonlocal_statement", "import_statement", "import_from_statement",
        "future_import_statement", "type_alias_statement", "if_statement",
        "for_statement", "while_statement", "try_statement", "with_statement",
        "match_statement", "function_definition", "class_definition",
    )
    PARAMETER_SKIP = ("comment", "keyword_separator", "positional_separator")

    OPERANDS = (
        "identifier", "integer", "float", "string", "true", "false", "none",
        "ellipsis",
    )

    def __init__(self) -> None:
        super().__init__()
        symbols = self.symbols
        self._expression_statements = symbols.resolve(("expression_statement",))
        self._docstring_owners = symbols.resolve(("function_definition", "class_definition"))
        self._modules = symbols.resolve(("module",))
        self._blocks = symbols.resolve(("block",))

    def is_comment(self, node: tree_sitter.Node) -> bool:
        if node.kind_id in self._comments:
            return True
        return self._is_docstring(node)

    def _is_docstring(self, node: tree_sitter.Node) -> bool:
        """A string expression opening a module, class or function body."""
        if node.kind_id not in self._expression_statements:
            return False
        if node.named_child_count != 1 or node.named_children[0].kind_id not in self._strings:
            return False
        parent = node.parent
        if parent is None:
            return False
        if parent.kind_id in self._blocks:
            owner = parent.parent
            if owner is None or owner.kind_id not in self._docstring_owners:
                return False
        elif parent.kind_id not in self._modules:
            return False
        first = next(
            (child for child in parent.named_children if child.kind_id not in self._comments),
            None,
        )
        return first is not None and first.id == node.id


BINDINGS = {Lang.PYTHON: PythonBinding}
