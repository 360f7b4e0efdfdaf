"""Function space data models.

Pure data containers for the extraction result: the space tree with its
metrics and the per-space operator/operand sequences.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, NamedTuple, Optional

if TYPE_CHECKING:
    from ..metrics import CodeMetrics

ANONYMOUS_NAME = "<anonymous>"


class SpaceKind(Enum):
    """Kind of scope a function space represents."""
    UNKNOWN = "unknown"
    FUNCTION = "function"
    CLOSURE = "closure"
    CLASS = "class"
    STRUCT = "struct"
    TRAIT = "trait"
    INTERFACE = "interface"
    IMPL = "impl"
    NAMESPACE = "namespace"
    UNIT = "unit"


class OpRole(Enum):
    """Halstead role of a token."""
    OPERATOR = "operator"
    OPERAND = "operand"


class Op(NamedTuple):
    role: OpRole
    value: str


class SpaceInvariantError(AssertionError):
    """A space tree violates span containment or sibling disjointness."""


@dataclass
class FuncSpace:
    """One function/method/class/unit scope with its metrics.

    ``spaces`` holds the directly nested spaces in source order. Every
    child's byte span lies inside its parent's and siblings never overlap.
    """

    name: Optional[str]
    kind: SpaceKind
    start_line: int  # 1-based
    end_line: int
    start_byte: int
    end_byte: int
    metrics: "CodeMetrics"
    spaces: List["FuncSpace"] = field(default_factory=list)

    def walk(self) -> Iterator["FuncSpace"]:
        """Yield this space and every nested space, pre-order."""
        stack = [self]
        while stack:
            space = stack.pop()
            yield space
            stack.extend(reversed(space.spaces))

    def contains(self, other: "FuncSpace") -> bool:
        return self.start_byte <= other.start_byte and other.end_byte <= self.end_byte

    def _own_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "kind": self.kind.value,
            "start_line": self.start_line,
            "end_line": self.end_line,
            "start_byte": self.start_byte,
            "end_byte": self.end_byte,
            "metrics": self.metrics.to_dict(),
            "spaces": [],
        }

    def to_dict(self) -> Dict[str, Any]:
        result = self._own_dict()
        pending = [(self, result)]
        while pending:
            space, out = pending.pop()
            for child in space.spaces:
                child_out = child._own_dict()
                out["spaces"].append(child_out)
                pending.append((child, child_out))
        return result


def _first_seen(ops: List[Op], role: OpRole, nested: List[List[str]]) -> List[str]:
    seen = dict.fromkeys(op.value for op in ops if op.role is role)
    for values in nested:
        seen.update(dict.fromkeys(values))
    return list(seen)


@dataclass
class Ops:
    """Operators and operands of one space.

    ``ops`` is the ordered sequence of the space's own tokens; tokens of
    nested spaces live in the matching child ``Ops``.
    """

    name: Optional[str]
    kind: SpaceKind
    start_line: int
    end_line: int
    ops: List[Op] = field(default_factory=list)
    spaces: List["Ops"] = field(default_factory=list)

    @classmethod
    def _own(cls, space: FuncSpace) -> "Ops":
        return cls(
            name=space.name,
            kind=space.kind,
            start_line=space.start_line,
            end_line=space.end_line,
            ops=list(space.metrics.halstead.ops),
        )

    @classmethod
    def from_space(cls, space: FuncSpace) -> "Ops":
        result = cls._own(space)
        pending = [(space, result)]
        while pending:
            source, target = pending.pop()
            for child in source.spaces:
                child_ops = cls._own(child)
                target.spaces.append(child_ops)
                pending.append((child, child_ops))
        return result

    def all_ops(self) -> Iterator[Op]:
        """Own ops followed by the ops of every nested space."""
        stack = [self]
        while stack:
            current = stack.pop()
            yield from current.ops
            stack.extend(reversed(current.spaces))

    def _distinct(self, role: OpRole) -> List[str]:
        seen: Dict[str, None] = {}
        for op in self.all_ops():
            if op.role is role:
                seen.setdefault(op.value)
        return list(seen)

    def operators(self) -> List[str]:
        """Distinct operators over this space and its children, first-seen order."""
        return self._distinct(OpRole.OPERATOR)

    def operands(self) -> List[str]:
        """Distinct operands over this space and its children, first-seen order."""
        return self._distinct(OpRole.OPERAND)

    def to_dict(self) -> Dict[str, Any]:
        """Nested result with subtree-wide distinct values, built children first."""
        done: Dict[int, Dict[str, Any]] = {}
        pending = [(self, False)]
        while pending:
            current, children_done = pending.pop()
            if not children_done:
                pending.append((current, True))
                pending.extend((child, False) for child in current.spaces)
                continue
            children = [done.pop(id(child)) for child in current.spaces]
            done[id(current)] = {
                "name": current.name,
                "kind": current.kind.value,
                "start_line": current.start_line,
                "end_line": current.end_line,
                "operators": _first_seen(
                    current.ops, OpRole.OPERATOR, [child["operators"] for child in children]
                ),
                "operands": _first_seen(
                    current.ops, OpRole.OPERAND, [child["operands"] for child in children]
                ),
                "spaces": children,
            }
        return done[id(self)]
