"""Base grammar binding and node classifier.

A binding ties one ``Lang`` to one tree-sitter grammar and carries that
grammar's node-kind tables. The predicates below are the only place where
language-specific AST shape knowledge lives: they answer semantic questions
about a node by checking its integer kind id against the resolved tables.
Subclasses fill in the tables and override a predicate only where their
grammar's tree shape differs.
"""

import logging
from typing import ClassVar, Dict, FrozenSet, Optional, Sequence

import tree_sitter

from ..languages import Lang
from ..spaces.models import SpaceKind
from .symbols import KindSpec, SymbolTable

logger = logging.getLogger(__name__)

KindTable = Sequence[KindSpec]


class GrammarBinding:
    """Binds one language to its tree-sitter grammar and node classifier.

    Subclasses set ``lang`` and ``language`` and fill in the kind tables.
    One instance per language is created by ``get_binding`` and shared,
    read-only, by every parse of that language.
    """

    lang: ClassVar[Lang]
    language: ClassVar[tree_sitter.Language]

    # Bindings whose parsers consume a shared preprocessing result
    USES_PREPROC: ClassVar[bool] = False

    # ── Space-opening kinds ──────────────────────────────────────────
    FUNCTIONS: ClassVar[KindTable] = ()
    CLOSURES: ClassVar[KindTable] = ()
    CLASSES: ClassVar[KindTable] = ()
    STRUCTS: ClassVar[KindTable] = ()
    INTERFACES: ClassVar[KindTable] = ()
    TRAITS: ClassVar[KindTable] = ()
    IMPLS: ClassVar[KindTable] = ()
    NAMESPACES: ClassVar[KindTable] = ()
    # Only open a space when the node has a ``body`` field
    BODY_REQUIRED: ClassVar[KindTable] = ()

    # ── General ──────────────────────────────────────────────────────
    COMMENTS: ClassVar[KindTable] = ("comment",)
    STRINGS: ClassVar[KindTable] = ()
    CALLS: ClassVar[KindTable] = ()

    # ── Control flow ─────────────────────────────────────────────────
    IFS: ClassVar[KindTable] = ("if_statement",)
    ELIFS: ClassVar[KindTable] = ()
    # Nodes wrapping the alternative branch of an if ("else_clause")
    ELSES: ClassVar[KindTable] = ()
    LOOPS: ClassVar[KindTable] = ()
    SWITCHES: ClassVar[KindTable] = ()
    CASES: ClassVar[KindTable] = ()
    CATCHES: ClassVar[KindTable] = ()
    TERNARIES: ClassVar[KindTable] = ()
    LOGICAL_OPERATORS: ClassVar[KindTable] = ("&&", "||")
    EXTRA_DECISIONS: ClassVar[KindTable] = ()
    JUMPS: ClassVar[KindTable] = ()
    LABELS: ClassVar[KindTable] = ()

    # ── Size ─────────────────────────────────────────────────────────
    STATEMENTS: ClassVar[KindTable] = ()
    EXITS: ClassVar[KindTable] = ("return_statement",)
    PARAMETER_SKIP: ClassVar[KindTable] = ("comment",)

    # ── Halstead ─────────────────────────────────────────────────────
    OPERANDS: ClassVar[KindTable] = ()
    OPERATOR_KINDS: ClassVar[KindTable] = ()
    IGNORED_TOKENS: ClassVar[KindTable] = (")", "]", "}")

    def __init__(self) -> None:
        symbols = SymbolTable(self.language, self.get_lang_name())
        self.symbols = symbols

        self._functions = symbols.resolve(self.FUNCTIONS)
        self._closures = symbols.resolve(self.CLOSURES)
        self._space_kinds: Dict[int, SpaceKind] = {}
        for table, kind in (
            (self.NAMESPACES, SpaceKind.NAMESPACE),
            (self.IMPLS, SpaceKind.IMPL),
            (self.TRAITS, SpaceKind.TRAIT),
            (self.INTERFACES, SpaceKind.INTERFACE),
            (self.STRUCTS, SpaceKind.STRUCT),
            (self.CLASSES, SpaceKind.CLASS),
            (self.CLOSURES, SpaceKind.CLOSURE),
            (self.FUNCTIONS, SpaceKind.FUNCTION),
        ):
            for kind_id in symbols.resolve(table):
                self._space_kinds[kind_id] = kind
        self._spaces: FrozenSet[int] = frozenset(self._space_kinds)
        self._body_required = symbols.resolve(self.BODY_REQUIRED)

        self._comments = symbols.resolve(self.COMMENTS)
        self._strings = symbols.resolve(self.STRINGS)
        self._calls = symbols.resolve(self.CALLS)

        self._ifs = symbols.resolve(self.IFS)
        self._elifs = symbols.resolve(self.ELIFS)
        self._elses = symbols.resolve(self.ELSES)
        loops = symbols.resolve(self.LOOPS)
        switches = symbols.resolve(self.SWITCHES)
        cases = symbols.resolve(self.CASES)
        catches = symbols.resolve(self.CATCHES)
        ternaries = symbols.resolve(self.TERNARIES)
        self._logical = symbols.resolve(self.LOGICAL_OPERATORS)
        self._decisions = (
            self._ifs | self._elifs | loops | cases | catches | ternaries
            | symbols.resolve(self.EXTRA_DECISIONS)
        )
        self._nesting = self._ifs | loops | switches | catches | ternaries
        self._jumps = symbols.resolve(self.JUMPS)
        self._labels = symbols.resolve(self.LABELS)

        self._statements = symbols.resolve(self.STATEMENTS)
        self._exits = symbols.resolve(self.EXITS)
        self._parameter_skip = symbols.resolve(self.PARAMETER_SKIP)

        self._operands = symbols.resolve(self.OPERANDS)
        self._operator_kinds = symbols.resolve(self.OPERATOR_KINDS)
        self._ignored_tokens = symbols.resolve(self.IGNORED_TOKENS)

        logger.debug(
            f"Initialized {self.get_lang_name()} binding "
            f"({self.language.node_kind_count} node kinds)"
        )

    # =========================================================================
    # Binding metadata
    # =========================================================================

    @classmethod
    def get_lang(cls) -> Lang:
        return cls.lang

    @classmethod
    def get_language(cls) -> tree_sitter.Language:
        return cls.language

    @classmethod
    def get_lang_name(cls) -> str:
        return cls.lang.get_name()

    # =========================================================================
    # Spaces
    # =========================================================================

    def is_func_space(self, node: tree_sitter.Node) -> bool:
        kind_id = node.kind_id
        if kind_id not in self._spaces:
            return False
        if kind_id in self._body_required:
            return node.child_by_field_name("body") is not None
        return True

    def is_func(self, node: tree_sitter.Node) -> bool:
        return node.kind_id in self._functions

    def is_closure(self, node: tree_sitter.Node) -> bool:
        return node.kind_id in self._closures

    def space_kind(self, node: tree_sitter.Node) -> SpaceKind:
        return self._space_kinds.get(node.kind_id, SpaceKind.UNKNOWN)

    def space_name(self, node: tree_sitter.Node, code: bytes) -> Optional[str]:
        """Name of the space opened by ``node``, None when anonymous."""
        name = node.child_by_field_name("name")
        if name is None:
            return None
        return node_text(name, code)

    # =========================================================================
    # General
    # =========================================================================

    def is_comment(self, node: tree_sitter.Node) -> bool:
        return node.kind_id in self._comments

    def is_string(self, node: tree_sitter.Node) -> bool:
        return node.kind_id in self._strings

    def is_call(self, node: tree_sitter.Node) -> bool:
        return node.kind_id in self._calls

    # =========================================================================
    # Control flow
    # =========================================================================

    def is_if(self, node: tree_sitter.Node) -> bool:
        return node.kind_id in self._ifs

    def is_elif(self, node: tree_sitter.Node) -> bool:
        """Flattened else-if keyword forms (``elif``, ``elsif``)."""
        return node.kind_id in self._elifs

    def is_else_if(self, node: tree_sitter.Node) -> bool:
        """True iff ``node`` is an if continuing its parent if's chain.

        The node must be an if whose immediate parent is an if holding it as
        its ``alternative``. Grammars that wrap the alternative in an else
        clause are looked through when the if is the clause's sole statement.
        """
        if node.kind_id not in self._ifs:
            return False
        child = node
        parent = node.parent
        if parent is not None and parent.kind_id in self._elses:
            sole = _sole_statement(parent, self._comments)
            if sole is None or sole.id != node.id:
                return False
            child, parent = parent, parent.parent
        if parent is None or parent.kind_id not in self._ifs:
            return False
        alternative = parent.child_by_field_name("alternative")
        return alternative is not None and alternative.id == child.id

    def is_else(self, node: tree_sitter.Node) -> bool:
        """A plain else branch of an if chain (one not continued by an if)."""
        kind_id = node.kind_id
        parent = node.parent
        if parent is None:
            return False
        if kind_id in self._elses:
            if parent.kind_id not in self._ifs and parent.kind_id not in self._elifs:
                return False
            inner = _sole_statement(node, self._comments)
            return inner is None or inner.kind_id not in self._ifs
        if parent.kind_id in self._ifs and kind_id not in self._ifs and kind_id not in self._elifs:
            alternative = parent.child_by_field_name("alternative")
            return alternative is not None and alternative.id == node.id
        return False

    def is_decision(self, node: tree_sitter.Node) -> bool:
        return node.kind_id in self._decisions or self.is_logical_operator(node)

    def is_nesting(self, node: tree_sitter.Node) -> bool:
        return node.kind_id in self._nesting

    def is_logical_operator(self, node: tree_sitter.Node) -> bool:
        """A short-circuit operator token of a binary expression.

        ``&&`` also appears outside expressions (C++ rvalue references), so
        the token must be its parent's ``operator`` field.
        """
        if node.kind_id not in self._logical:
            return False
        parent = node.parent
        if parent is None:
            return False
        operator = parent.child_by_field_name("operator")
        return operator is not None and operator.id == node.id

    def is_labeled_jump(self, node: tree_sitter.Node) -> bool:
        if node.kind_id not in self._jumps:
            return False
        return any(child.kind_id in self._labels for child in node.named_children)

    # =========================================================================
    # Size
    # =========================================================================

    def is_statement(self, node: tree_sitter.Node) -> bool:
        return node.kind_id in self._statements

    def is_exit(self, node: tree_sitter.Node) -> bool:
        return node.kind_id in self._exits

    def parameters_node(self, node: tree_sitter.Node) -> Optional[tree_sitter.Node]:
        return node.child_by_field_name("parameters")

    def count_parameters(self, node: tree_sitter.Node) -> int:
        """Number of parameters declared by a function or closure node."""
        params = self.parameters_node(node)
        if params is None:
            return 0
        # A bare identifier parameter (``x => x``, ``|x| x``)
        if params.child_count == 0:
            return 1
        return sum(1 for child in params.named_children if child.kind_id not in self._parameter_skip)

    # =========================================================================
    # Halstead
    # =========================================================================

    def is_operand(self, node: tree_sitter.Node) -> bool:
        return node.kind_id in self._operands

    def is_operator(self, node: tree_sitter.Node) -> bool:
        if node.kind_id in self._operator_kinds:
            return True
        return (
            not node.is_named
            and node.child_count == 0
            and not node.is_missing
            and node.kind_id not in self._ignored_tokens
        )


def node_text(node: tree_sitter.Node, code: bytes) -> str:
    """Source text of a node."""
    return code[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


def _sole_statement(node: tree_sitter.Node, comments: FrozenSet[int]) -> Optional[tree_sitter.Node]:
    """The only named, non-comment child of ``node``, if there is exactly one."""
    found = None
    for child in node.named_children:
        if child.kind_id in comments:
            continue
        if found is not None:
            return None
        found = child
    return found
