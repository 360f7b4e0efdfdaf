"""Parser wrapper.

A ``Parser`` owns one parsed tree together with the source bytes and path it
came from. It is the unit every extraction and metric pass runs over and is
discarded once analysis of the file completes.
"""

import logging
import os
from typing import Optional, Union

import tree_sitter

from .grammar.base import GrammarBinding, node_text
from .preproc import PreprocResults

logger = logging.getLogger(__name__)


class Parser:
    """A parsed source file for one grammar binding.

    Attributes:
        binding: Grammar binding the source was parsed with
        code: Original source bytes
        path: File path, used for diagnostics and naming the unit space
        preproc: Shared preprocessing result, kept only for bindings that use it
        tree: tree-sitter tree, None when parsing failed
    """

    def __init__(
        self,
        binding: GrammarBinding,
        source: bytes,
        path: Union[str, os.PathLike],
        preproc: Optional[PreprocResults] = None,
    ):
        self.binding = binding
        self.code = source
        self.path = os.fspath(path)
        self.preproc = preproc if binding.USES_PREPROC else None
        self.tree: Optional[tree_sitter.Tree] = None

        try:
            parser = tree_sitter.Parser(binding.get_language())
            self.tree = parser.parse(source)
        except (TypeError, ValueError) as e:
            logger.warning(f"Failed to parse {self.path} as {binding.get_lang_name()}: {e}")
            return

        if self.tree is None:
            logger.warning(f"Parser produced no tree for {self.path}")
        elif self.tree.root_node.has_error:
            logger.debug(f"Syntax errors in {self.path}, analysing the recovered tree")

    @property
    def root(self) -> Optional[tree_sitter.Node]:
        return self.tree.root_node if self.tree is not None else None

    @property
    def line_count(self) -> int:
        """Number of source lines, split on line feeds like tree-sitter rows.

        A trailing line break does not open a new line.
        """
        if not self.code:
            return 0
        return self.code.count(b"\n") + (0 if self.code.endswith(b"\n") else 1)

    def text(self, node: tree_sitter.Node) -> str:
        return node_text(node, self.code)
