"""JavaScript grammar binding using tree-sitter-javascript."""

import logging
from typing import Optional

import tree_sitter
import tree_sitter_javascript

from ..languages import Lang
from .base import GrammarBinding, node_text

logger = logging.getLogger(__name__)

# Create the Language object once (wraps the PyCapsule)
_JS_LANGUAGE = tree_sitter.Language(tree_sitter_javascript.language())

# Parent kinds that name an anonymous function, with the field holding the name
_NAMING_PARENTS = (
    ("variable_declarator", "name"),
    ("pair", "key"),
    ("assignment_expression", "left"),
    ("field_definition", "property"),
    ("public_field_definition", "name"),
)


class JavaScriptBinding(GrammarBinding):
    """tree-sitter-javascript node classifier.

    Function expressions and arrow functions take their name from the
    binding they are assigned to (``const f = () => {}``) when they have
    none of their own.
    """

    lang = Lang.JAVASCRIPT
    language = _JS_LANGUAGE

    FUNCTIONS = (
        "function_declaration", "function_expression", "function",
        "generator_function_declaration", "generator_function",
        "method_definition",
    )
    CLOSURES = ("arrow_function",)
    CLASSES = ("class_declaration", "class")

    STRINGS = ("string", "template_string")
    CALLS = ("call_expression", "new_expression")

    ELSES = ("else_clause",)
    LOOPS = ("for_statement", "for_in_statement", "while_statement", "do_statement")
    SWITCHES = ("switch_statement",)
    CASES = ("switch_case",)
    CATCHES = ("catch_clause",)
    TERNARIES = ("ternary_expression",)
    LOGICAL_OPERATORS = ("&&", "||", "??")
    JUMPS = ("break_statement", "continue_statement")
    LABELS = ("statement_identifier",)

    STATEMENTS = (
        "expression_statement", "variable_declaration", "lexical_declaration",
        "if_statement", "for_statement", "for_in_statement", "while_statement",
        "do_statement", "switch_statement", "try_statement", "return_statement",
        "throw_statement", "break_statement", "continue_statement",
        "labeled_statement", "debugger_statement", "import_statement",
        "export_statement", "empty_statement",
    )

    OPERANDS = (
        "identifier", "property_identifier", "shorthand_property_identifier",
        "shorthand_property_identifier_pattern", "private_property_identifier",
        "statement_identifier", "number", "string", "template_string", "regex",
        "true", "false", "null", "undefined", "this", "super",
    )

    def __init__(self) -> None:
        super().__init__()
        self._naming_parents = {}
        for kind, field_name in _NAMING_PARENTS:
            for kind_id in self.symbols.ids(kind):
                self._naming_parents[kind_id] = field_name

    def space_name(self, node: tree_sitter.Node, code: bytes) -> Optional[str]:
        name = super().space_name(node, code)
        if name is not None:
            return name
        parent = node.parent
        if parent is None or parent.kind_id not in self._naming_parents:
            return None
        target = parent.child_by_field_name(self._naming_parents[parent.kind_id])
        if target is None or target.id == node.id:
            return None
        return node_text(target, code)

    def parameters_node(self, node: tree_sitter.Node) -> Optional[tree_sitter.Node]:
        params = node.child_by_field_name("parameters")
        if params is None:
            # Single unparenthesized arrow function parameter
            params = node.child_by_field_name("parameter")
        return params


BINDINGS = {Lang.JAVASCRIPT: JavaScriptBinding}
