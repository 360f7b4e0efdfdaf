"""Preprocessing result models.

C-family analysis may be preceded by a pass that resolves includes and
macros across a whole source tree. Its result is produced once, shared
read-only by every parse of that tree, and forwarded untouched to the
parsers of bindings that use it.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping, Optional


@dataclass(frozen=True)
class PreprocFile:
    """Preprocessing data for one file."""

    direct_includes: FrozenSet[str] = frozenset()
    indirect_includes: FrozenSet[str] = frozenset()
    macros: FrozenSet[str] = frozenset()


@dataclass(frozen=True)
class PreprocResults:
    """Preprocessing data for a set of files, keyed by path."""

    files: Mapping[str, PreprocFile] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Published results must not be mutated by concurrent readers
        object.__setattr__(self, "files", MappingProxyType(dict(self.files)))

    def get(self, path: str) -> Optional[PreprocFile]:
        return self.files.get(path)

    @classmethod
    def from_dict(cls, files: Dict[str, PreprocFile]) -> "PreprocResults":
        return cls(files=files)
