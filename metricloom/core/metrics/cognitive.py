"""Cognitive complexity.

Structures that break the linear flow (if, loops, switch/match, catch,
ternary) cost ``1 + nesting`` and nest their children one level deeper.
Continuations of an if chain (else-if, elif, plain else) cost a flat 1 and
leave the nesting where the chain put it. Each sequence of like logical
operators costs 1, as does every jump to a label. A nested function space
starts again from nesting 0.
"""

from typing import Any, Dict

import tree_sitter


class Stats:
    def __init__(self) -> None:
        self.own = 0
        self._sum = 0
        self._spaces = 1

    def init_totals(self) -> None:
        self._sum = self.own
        self._spaces = 1

    def merge(self, other: "Stats") -> None:
        self._sum += other._sum
        self._spaces += other._spaces

    def cognitive(self) -> int:
        return self.own

    def cognitive_sum(self) -> int:
        return self._sum

    def cognitive_average(self) -> float:
        return self._sum / self._spaces

    def to_dict(self) -> Dict[str, Any]:
        return {
            "own": self.own,
            "sum": self._sum,
            "average": self.cognitive_average(),
        }


def compute(node: tree_sitter.Node, checker, stats: Stats, state) -> None:
    nesting = state.nesting
    if checker.is_else_if(node) or checker.is_elif(node):
        stats.own += 1
    elif checker.is_nesting(node):
        stats.own += 1 + nesting
        state.child_nesting = nesting + 1
    elif checker.is_else(node):
        stats.own += 1
    elif checker.is_logical_operator(node):
        if not _continues_sequence(node):
            stats.own += 1
    elif checker.is_labeled_jump(node):
        stats.own += 1


def _continues_sequence(operator: tree_sitter.Node) -> bool:
    """True when the enclosing expression repeats the same logical operator.

    ``a && b && c`` parses as ``(a && b) && c``: only the outermost operator
    of a run of identical operators starts a new sequence.
    """
    expression = operator.parent
    if expression is None:
        return False
    outer = expression.parent
    if outer is None or outer.kind_id != expression.kind_id:
        return False
    outer_operator = outer.child_by_field_name("operator")
    return outer_operator is not None and outer_operator.kind_id == operator.kind_id
