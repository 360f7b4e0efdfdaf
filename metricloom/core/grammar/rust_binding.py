"""Rust grammar binding using tree-sitter-rust."""

import logging
from typing import Optional

import tree_sitter
import tree_sitter_rust

from ..languages import Lang
from .base import GrammarBinding, node_text

logger = logging.getLogger(__name__)

# Create the Language object once (wraps the PyCapsule)
_RUST_LANGUAGE = tree_sitter.Language(tree_sitter_rust.language())


class RustBinding(GrammarBinding):
    """tree-sitter-rust node classifier.

    Control flow is made of expressions (``if_expression``,
    ``match_expression``); the ``?`` operator is a decision point.
    """

    lang = Lang.RUST
    language = _RUST_LANGUAGE

    FUNCTIONS = ("function_item",)
    CLOSURES = ("closure_expression",)
    TRAITS = ("trait_item",)
    IMPLS = ("impl_item",)
    NAMESPACES = ("mod_item",)
    BODY_REQUIRED = ("mod_item",)

    COMMENTS = ("line_comment", "block_comment")
    STRINGS = ("string_literal", "raw_string_literal", "char_literal")
    CALLS = ("call_expression", "macro_invocation")

    IFS = ("if_expression", "if_let_expression")
    ELSES = ("else_clause",)
    LOOPS = ("for_expression", "while_expression", "while_let_expression", "loop_expression")
    SWITCHES = ("match_expression",)
    CASES = ("match_arm",)
    EXTRA_DECISIONS = ("try_expression",)
    JUMPS = ("break_expression", "continue_expression")
    LABELS = ("label",)

    STATEMENTS = ("expression_statement", "let_declaration", "empty_statement")
    EXITS = ("return_expression",)
    PARAMETER_SKIP = ("line_comment", "block_comment", "attribute_item")

    OPERANDS = (
        "identifier", "field_identifier", "type_identifier",
        "shorthand_field_identifier", "integer_literal", "float_literal",
        "string_literal", "raw_string_literal", "char_literal",
        "boolean_literal", "self", "metavariable",
    )
    OPERATOR_KINDS = ("primitive_type",)

    def space_name(self, node: tree_sitter.Node, code: bytes) -> Optional[str]:
        # impl blocks are named after the implementing type
        if node.kind_id in self._space_kinds and node.child_by_field_name("name") is None:
            type_node = node.child_by_field_name("type")
            if type_node is not None:
                return node_text(type_node, code)
        return super().space_name(node, code)


BINDINGS = {Lang.RUST: RustBinding}
