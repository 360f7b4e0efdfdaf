"""Java grammar binding using tree-sitter-java."""

import logging

import tree_sitter
import tree_sitter_java

from ..languages import Lang
from .base import GrammarBinding
from .symbols import token

logger = logging.getLogger(__name__)

# Create the Language object once (wraps the PyCapsule)
_JAVA_LANGUAGE = tree_sitter.Language(tree_sitter_java.language())


class JavaBinding(GrammarBinding):
    """tree-sitter-java node classifier.

    The grammar stores an ``else`` branch directly in the ``alternative``
    field of the ``if_statement``, with no wrapper node.
    """

    lang = Lang.JAVA
    language = _JAVA_LANGUAGE

    FUNCTIONS = ("method_declaration", "constructor_declaration", "compact_constructor_declaration")
    CLOSURES = ("lambda_expression",)
    CLASSES = ("class_declaration", "enum_declaration", "record_declaration")
    INTERFACES = ("interface_declaration", "annotation_type_declaration")
    # Abstract and interface methods declare no body
    BODY_REQUIRED = ("method_declaration",)

    COMMENTS = ("line_comment", "block_comment")
    STRINGS = ("string_literal", "character_literal")
    CALLS = ("method_invocation", "object_creation_expression")

    LOOPS = ("for_statement", "enhanced_for_statement", "while_statement", "do_statement")
    SWITCHES = ("switch_expression", "switch_statement")
    CASES = (token("case"),)
    CATCHES = ("catch_clause",)
    TERNARIES = ("ternary_expression",)
    JUMPS = ("break_statement", "continue_statement")
    LABELS = ("identifier",)

    STATEMENTS = (
        "expression_statement", "local_variable_declaration", "if_statement",
        "for_statement", "enhanced_for_statement", "while_statement",
        "do_statement", "switch_expression", "try_statement",
        "try_with_resources_statement", "return_statement", "throw_statement",
        "break_statement", "continue_statement", "yield_statement",
        "synchronized_statement", "labeled_statement", "assert_statement",
    )
    PARAMETER_SKIP = ("line_comment", "block_comment", "receiver_parameter")

    OPERANDS = (
        "identifier", "type_identifier", "decimal_integer_literal",
        "hex_integer_literal", "octal_integer_literal", "binary_integer_literal",
        "decimal_floating_point_literal", "hex_floating_point_literal",
        "character_literal", "string_literal", "true", "false", "null_literal",
        "this", "super",
    )
    OPERATOR_KINDS = ("integral_type", "floating_point_type", "boolean_type", "void_type")


BINDINGS = {Lang.JAVA: JavaBinding}
