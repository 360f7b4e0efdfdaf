"""TypeScript and TSX grammar bindings using tree-sitter-typescript.

The two dialects share one node vocabulary and differ only in the grammar
object: TSX additionally accepts JSX elements.
"""

import logging

import tree_sitter
import tree_sitter_typescript

from ..languages import Lang
from .javascript_binding import JavaScriptBinding

logger = logging.getLogger(__name__)

_TS_LANGUAGE = tree_sitter.Language(tree_sitter_typescript.language_typescript())
_TSX_LANGUAGE = tree_sitter.Language(tree_sitter_typescript.language_tsx())


class TypeScriptBinding(JavaScriptBinding):
    """tree-sitter-typescript node classifier."""

    lang = Lang.TYPESCRIPT
    language = _TS_LANGUAGE

    CLASSES = ("class_declaration", "class", "abstract_class_declaration")
    INTERFACES = ("interface_declaration",)
    NAMESPACES = ("internal_module", "module")
    BODY_REQUIRED = ("internal_module", "module")

    STATEMENTS = JavaScriptBinding.STATEMENTS + (
        "type_alias_declaration", "interface_declaration", "enum_declaration",
    )

    OPERANDS = JavaScriptBinding.OPERANDS + ("type_identifier",)
    OPERATOR_KINDS = ("predefined_type",)

    def __init__(self) -> None:
        super().__init__()
        self._this = self.symbols.resolve(("this",))

    def count_parameters(self, node: tree_sitter.Node) -> int:
        """Declared parameters, not counting a ``this: T`` annotation."""
        count = super().count_parameters(node)
        params = self.parameters_node(node)
        if params is None:
            return count
        for child in params.named_children:
            pattern = child.child_by_field_name("pattern")
            if pattern is not None and pattern.kind_id in self._this:
                count -= 1
        return count


class TsxBinding(TypeScriptBinding):
    """tree-sitter-typescript (TSX dialect) node classifier."""

    lang = Lang.TSX
    language = _TSX_LANGUAGE


BINDINGS = {Lang.TYPESCRIPT: TypeScriptBinding, Lang.TSX: TsxBinding}
