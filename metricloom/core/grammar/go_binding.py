"""Go grammar binding using tree-sitter-go."""

import logging

import tree_sitter
import tree_sitter_go

from ..languages import Lang
from .base import GrammarBinding

logger = logging.getLogger(__name__)

# Create the Language object once (wraps the PyCapsule)
_GO_LANGUAGE = tree_sitter.Language(tree_sitter_go.language())


class GoBinding(GrammarBinding):
    """tree-sitter-go node classifier.

    An ``else if`` is stored directly as the ``alternative`` of the
    enclosing ``if_statement``.
    """

    lang = Lang.GO
    language = _GO_LANGUAGE

    FUNCTIONS = ("function_declaration", "method_declaration")
    CLOSURES = ("func_literal",)

    STRINGS = ("interpreted_string_literal", "raw_string_literal", "rune_literal")
    CALLS = ("call_expression",)

    LOOPS = ("for_statement",)
    SWITCHES = ("expression_switch_statement", "type_switch_statement", "select_statement")
    CASES = ("expression_case", "type_case", "communication_case")
    JUMPS = ("goto_statement", "break_statement", "continue_statement")
    LABELS = ("label_name",)

    STATEMENTS = (
        "expression_statement", "send_statement", "inc_statement",
        "dec_statement", "assignment_statement", "short_var_declaration",
        "var_declaration", "const_declaration", "type_declaration",
        "return_statement", "go_statement", "defer_statement", "if_statement",
        "for_statement", "expression_switch_statement", "type_switch_statement",
        "select_statement", "labeled_statement", "fallthrough_statement",
        "break_statement", "continue_statement", "goto_statement",
    )

    OPERANDS = (
        "identifier", "field_identifier", "package_identifier", "type_identifier",
        "label_name", "int_literal", "float_literal", "imaginary_literal",
        "rune_literal", "raw_string_literal", "interpreted_string_literal",
        "true", "false", "nil", "iota",
    )
    IGNORED_TOKENS = (")", "]", "}", "\n")

    def count_parameters(self, node: tree_sitter.Node) -> int:
        """Count declared names: ``func(a, b int)`` takes two parameters."""
        params = self.parameters_node(node)
        if params is None:
            return 0
        count = 0
        for declaration in params.named_children:
            if declaration.kind_id in self._parameter_skip:
                continue
            names = declaration.children_by_field_name("name")
            count += len(names) if names else 1
        return count


BINDINGS = {Lang.GO: GoBinding}
