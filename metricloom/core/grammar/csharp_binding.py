"""C# grammar binding using tree-sitter-c-sharp."""

import logging

import tree_sitter
import tree_sitter_c_sharp

from ..languages import Lang
from .base import GrammarBinding
from .symbols import token

logger = logging.getLogger(__name__)

# Create the Language object once (wraps the PyCapsule)
_CSHARP_LANGUAGE = tree_sitter.Language(tree_sitter_c_sharp.language())


class CSharpBinding(GrammarBinding):
    """tree-sitter-c-sharp node classifier."""

    lang = Lang.CSHARP
    language = _CSHARP_LANGUAGE

    FUNCTIONS = (
        "method_declaration", "constructor_declaration", "destructor_declaration",
        "operator_declaration", "conversion_operator_declaration",
        "local_function_statement",
    )
    CLOSURES = ("lambda_expression", "anonymous_method_expression")
    CLASSES = ("class_declaration", "record_declaration")
    STRUCTS = ("struct_declaration", "record_struct_declaration")
    INTERFACES = ("interface_declaration",)
    NAMESPACES = ("namespace_declaration", "file_scoped_namespace_declaration")

    STRINGS = (
        "string_literal", "verbatim_string_literal", "raw_string_literal",
        "interpolated_string_expression", "character_literal",
    )
    CALLS = ("invocation_expression", "object_creation_expression")

    LOOPS = ("for_statement", "foreach_statement", "while_statement", "do_statement")
    SWITCHES = ("switch_statement", "switch_expression")
    CASES = (token("case"), "switch_expression_arm")
    CATCHES = ("catch_clause",)
    TERNARIES = ("conditional_expression",)
    LOGICAL_OPERATORS = ("&&", "||", "??")
    JUMPS = ("goto_statement",)
    LABELS = ("identifier",)

    STATEMENTS = (
        "expression_statement", "local_declaration_statement", "if_statement",
        "for_statement", "foreach_statement", "while_statement", "do_statement",
        "switch_statement", "try_statement", "return_statement",
        "throw_statement", "break_statement", "continue_statement",
        "goto_statement", "yield_statement", "using_statement", "lock_statement",
        "checked_statement", "fixed_statement", "unsafe_statement",
        "labeled_statement", "local_function_statement", "empty_statement",
    )

    OPERANDS = (
        "identifier", "integer_literal", "real_literal", "boolean_literal",
        "character_literal", "string_literal", "verbatim_string_literal",
        "raw_string_literal", "interpolated_string_expression", "null_literal",
        "this", "this_expression", "base", "base_expression",
    )
    OPERATOR_KINDS = ("predefined_type",)


BINDINGS = {Lang.CSHARP: CSharpBinding}
