"""Metric accumulator bundle attached to every function space."""

from dataclasses import dataclass, field
from typing import Any, Dict

from .cognitive import Stats as CognitiveStats
from .cyclomatic import Stats as CyclomaticStats
from .halstead import Stats as HalsteadStats
from .loc import Stats as LocStats
from .mi import Stats as MiStats
from .nargs import Stats as NargsStats
from .nesting import Stats as NestingStats
from .nexits import Stats as NexitsStats
from .nom import Stats as NomStats


@dataclass
class CodeMetrics:
    """Own-only accumulators plus the cumulative view of one space.

    Own values are filled by the extraction walk. ``init_totals`` followed by
    one ``merge`` per child (already rolled up) produces the cumulative
    view; ``finalize`` then derives the maintainability index from it.
    """

    cyclomatic: CyclomaticStats = field(default_factory=CyclomaticStats)
    cognitive: CognitiveStats = field(default_factory=CognitiveStats)
    halstead: HalsteadStats = field(default_factory=HalsteadStats)
    loc: LocStats = field(default_factory=LocStats)
    nesting: NestingStats = field(default_factory=NestingStats)
    nexits: NexitsStats = field(default_factory=NexitsStats)
    nargs: NargsStats = field(default_factory=NargsStats)
    nom: NomStats = field(default_factory=NomStats)
    mi: MiStats = field(default_factory=MiStats)

    def _parts(self):
        return (
            self.cyclomatic, self.cognitive, self.halstead, self.loc,
            self.nesting, self.nexits, self.nargs, self.nom,
        )

    def init_totals(self) -> None:
        for part in self._parts():
            part.init_totals()

    def merge(self, other: "CodeMetrics") -> None:
        for part, other_part in zip(self._parts(), other._parts()):
            part.merge(other_part)

    def finalize(self) -> None:
        self.mi.update(
            volume=self.halstead.total.volume(),
            cyclomatic=self.cyclomatic.cyclomatic_sum(),
            sloc=self.loc.sloc,
            cloc=self.loc.cloc(),
        )

    def to_dict(self) -> Dict[str, Any]:
        functions = self.nom.total()
        return {
            "cyclomatic": self.cyclomatic.to_dict(),
            "cognitive": self.cognitive.to_dict(),
            "halstead": self.halstead.to_dict(),
            "loc": self.loc.to_dict(),
            "nesting": self.nesting.to_dict(),
            "nexits": self.nexits.to_dict(functions),
            "nargs": self.nargs.to_dict(functions),
            "nom": self.nom.to_dict(),
            "mi": self.mi.to_dict(),
        }


@dataclass
class WalkState:
    """Per-node context the metric algorithms read and update.

    ``nesting`` and ``skip_halstead`` come from the parent; the ``child_*``
    fields start as copies and are what the node's children inherit.
    """

    nesting: int = 0
    skip_halstead: bool = False
    child_nesting: int = 0
    child_skip_halstead: bool = False

    @classmethod
    def enter(cls, nesting: int, skip_halstead: bool) -> "WalkState":
        return cls(nesting, skip_halstead, nesting, skip_halstead)
