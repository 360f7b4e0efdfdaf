"""Node-kind symbol resolution.

Kind tables are written with names; a ``SymbolTable`` turns them into the
integer kind ids of one concrete grammar so that every predicate is a set
membership test on ``node.kind_id``.
"""

import logging
from typing import Dict, FrozenSet, Iterable, List, NamedTuple, Tuple, Union

import tree_sitter

logger = logging.getLogger(__name__)


class Kind(NamedTuple):
    """A node kind name plus whether it is a named node or an anonymous token."""

    name: str
    named: bool = True


KindSpec = Union[str, Kind]


def token(name: str) -> Kind:
    """Mark a kind name as an anonymous token (keywords such as ``case``)."""
    return Kind(name, named=False)


def as_kind(spec: KindSpec) -> Kind:
    """Normalize a table entry.

    Plain words resolve as named kinds; punctuation strings such as ``&&``
    can only be anonymous tokens.
    """
    if isinstance(spec, Kind):
        return spec
    if spec.replace("_", "").isalnum():
        return Kind(spec, named=True)
    return Kind(spec, named=False)


class SymbolTable:
    """Maps kind names of one grammar to its integer kind ids."""

    def __init__(self, language: tree_sitter.Language, lang_name: str):
        self._lang_name = lang_name
        self._ids: Dict[Kind, List[int]] = {}
        for kind_id in range(language.node_kind_count):
            name = language.node_kind_for_id(kind_id)
            if name is None:
                continue
            kind = Kind(name, named=language.node_kind_is_named(kind_id))
            self._ids.setdefault(kind, []).append(kind_id)

    def ids(self, spec: KindSpec) -> Tuple[int, ...]:
        """All kind ids carrying the given name (aliases included)."""
        return tuple(self._ids.get(as_kind(spec), ()))

    def resolve(self, specs: Iterable[KindSpec]) -> FrozenSet[int]:
        """Resolve a kind table into a frozenset of kind ids."""
        resolved = set()
        for spec in specs:
            ids = self.ids(spec)
            if not ids:
                logger.debug(f"{self._lang_name}: grammar has no node kind {as_kind(spec)}")
            resolved.update(ids)
        return frozenset(resolved)

    def __contains__(self, spec: KindSpec) -> bool:
        return as_kind(spec) in self._ids
