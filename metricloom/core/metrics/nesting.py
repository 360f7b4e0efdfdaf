"""Maximum structural nesting depth of a space."""

from typing import Any, Dict


class Stats:
    def __init__(self) -> None:
        self.own = 0
        self._max = 0

    def init_totals(self) -> None:
        self._max = self.own

    def merge(self, other: "Stats") -> None:
        self._max = max(self._max, other._max)

    def nesting(self) -> int:
        return self.own

    def nesting_max(self) -> int:
        """Deepest nesting reached anywhere in the subtree."""
        return self._max

    def to_dict(self) -> Dict[str, Any]:
        return {"own": self.own, "max": self._max}


def compute(stats: Stats, state) -> None:
    if state.child_nesting > stats.own:
        stats.own = state.child_nesting
