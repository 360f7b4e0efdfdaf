"""Number of exit points (return statements)."""

from typing import Any, Dict

import tree_sitter


class Stats:
    def __init__(self) -> None:
        self.own = 0
        self._sum = 0

    def init_totals(self) -> None:
        self._sum = self.own

    def merge(self, other: "Stats") -> None:
        self._sum += other._sum

    def exit(self) -> int:
        return self.own

    def exit_sum(self) -> int:
        return self._sum

    def exit_average(self, functions: int) -> float:
        return self._sum / functions if functions else 0.0

    def to_dict(self, functions: int) -> Dict[str, Any]:
        return {"own": self.own, "sum": self._sum, "average": self.exit_average(functions)}


def compute(node: tree_sitter.Node, checker, stats: Stats) -> None:
    if checker.is_exit(node):
        stats.own += 1
