"""Cyclomatic complexity.

Each space starts at 1 and gains one per decision point among its own
nodes: branches, loops, case arms, exception handlers, ternaries and
short-circuit operators. Every if of an else-if chain is one decision, so a
chain of N ifs contributes N.
"""

from typing import Any, Dict

import tree_sitter


class Stats:
    """Own and cumulative cyclomatic complexity of a space."""

    def __init__(self) -> None:
        self.own = 1
        self._sum = 1
        self._spaces = 1
        self._min = 1
        self._max = 1

    def init_totals(self) -> None:
        self._sum = self.own
        self._spaces = 1
        self._min = self.own
        self._max = self.own

    def merge(self, other: "Stats") -> None:
        self._sum += other._sum
        self._spaces += other._spaces
        self._min = min(self._min, other._min)
        self._max = max(self._max, other._max)

    def cyclomatic(self) -> int:
        return self.own

    def cyclomatic_sum(self) -> int:
        """Complexity of the space including every nested space."""
        return self._sum

    def cyclomatic_average(self) -> float:
        return self._sum / self._spaces

    def cyclomatic_min(self) -> int:
        return self._min

    def cyclomatic_max(self) -> int:
        return self._max

    def to_dict(self) -> Dict[str, Any]:
        return {
            "own": self.own,
            "sum": self._sum,
            "average": self.cyclomatic_average(),
            "min": self._min,
            "max": self._max,
        }


def compute(node: tree_sitter.Node, checker, stats: Stats) -> None:
    if checker.is_decision(node):
        stats.own += 1
