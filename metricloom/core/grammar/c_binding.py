"""C and C++ grammar bindings using tree-sitter-c and tree-sitter-cpp.

Both grammars name functions through a chain of declarators
(``pointer_declarator`` → ``function_declarator`` → ``identifier``), so the
name and the parameter list are found by following the ``declarator``
fields down from the definition.
"""

import logging
from typing import Optional

import tree_sitter
import tree_sitter_c
import tree_sitter_cpp

from ..languages import Lang
from .base import GrammarBinding, node_text
from .symbols import token

logger = logging.getLogger(__name__)

_C_LANGUAGE = tree_sitter.Language(tree_sitter_c.language())
_CPP_LANGUAGE = tree_sitter.Language(tree_sitter_cpp.language())

# Guard against malformed declarator chains
_MAX_DECLARATOR_DEPTH = 32


class CBinding(GrammarBinding):
    """tree-sitter-c node classifier."""

    lang = Lang.C
    language = _C_LANGUAGE

    USES_PREPROC = True

    FUNCTIONS = ("function_definition",)
    STRUCTS = ("struct_specifier", "union_specifier")
    BODY_REQUIRED = ("struct_specifier", "union_specifier")

    STRINGS = ("string_literal", "concatenated_string", "char_literal")
    CALLS = ("call_expression",)

    ELSES = ("else_clause",)
    LOOPS = ("for_statement", "while_statement", "do_statement")
    SWITCHES = ("switch_statement",)
    CASES = (token("case"),)
    TERNARIES = ("conditional_expression",)
    JUMPS = ("goto_statement",)
    LABELS = ("statement_identifier",)

    STATEMENTS = (
        "expression_statement", "declaration", "if_statement", "for_statement",
        "while_statement", "do_statement", "switch_statement", "case_statement",
        "return_statement", "break_statement", "continue_statement",
        "goto_statement", "labeled_statement",
    )
    PARAMETER_SKIP = ("comment", "variadic_parameter")

    OPERANDS = (
        "identifier", "field_identifier", "type_identifier",
        "statement_identifier", "number_literal", "string_literal",
        "char_literal", "concatenated_string", "system_lib_string", "true",
        "false", "null",
    )
    OPERATOR_KINDS = ("primitive_type",)
    IGNORED_TOKENS = (")", "]", "}", "\n")

    def __init__(self) -> None:
        super().__init__()
        self._parameter_declarations = self.symbols.resolve(("parameter_declaration",))

    def _declarators(self, node: tree_sitter.Node):
        """Follow the ``declarator`` chain below a definition."""
        current = node.child_by_field_name("declarator")
        depth = 0
        while current is not None and depth < _MAX_DECLARATOR_DEPTH:
            yield current
            current = current.child_by_field_name("declarator")
            depth += 1

    def space_name(self, node: tree_sitter.Node, code: bytes) -> Optional[str]:
        if not self.is_func(node):
            return super().space_name(node, code)
        innermost = None
        for declarator in self._declarators(node):
            innermost = declarator
        if innermost is None:
            return None
        return node_text(innermost, code)

    def parameters_node(self, node: tree_sitter.Node) -> Optional[tree_sitter.Node]:
        params = node.child_by_field_name("parameters")
        if params is not None:
            return params
        for declarator in self._declarators(node):
            params = declarator.child_by_field_name("parameters")
            if params is not None:
                return params
        return None

    def count_parameters(self, node: tree_sitter.Node) -> int:
        params = self.parameters_node(node)
        if params is None:
            return 0
        count = 0
        for child in params.named_children:
            if child.kind_id in self._parameter_skip:
                continue
            if child.kind_id in self._parameter_declarations and _is_void(child):
                continue
            count += 1
        return count


class CppBinding(CBinding):
    """tree-sitter-cpp node classifier."""

    lang = Lang.CPP
    language = _CPP_LANGUAGE

    CLOSURES = ("lambda_expression",)
    CLASSES = ("class_specifier",)
    NAMESPACES = ("namespace_definition",)
    BODY_REQUIRED = ("struct_specifier", "union_specifier", "class_specifier")

    STRINGS = CBinding.STRINGS + ("raw_string_literal",)

    LOOPS = CBinding.LOOPS + ("for_range_loop",)
    CATCHES = ("catch_clause",)

    STATEMENTS = CBinding.STATEMENTS + (
        "for_range_loop", "try_statement", "throw_statement", "co_return_statement",
    )
    EXITS = ("return_statement", "co_return_statement")

    OPERANDS = CBinding.OPERANDS + (
        "namespace_identifier", "raw_string_literal", "user_defined_literal",
        "this", "nullptr",
    )


def _is_void(declaration: tree_sitter.Node) -> bool:
    """``f(void)`` declares no parameters."""
    if declaration.child_by_field_name("declarator") is not None:
        return False
    type_node = declaration.child_by_field_name("type")
    return type_node is not None and type_node.text == b"void"


BINDINGS = {Lang.C: CBinding, Lang.CPP: CppBinding}
