"""Halstead metrics.

Operators and operands are recorded per space as ordered ``Op`` pairs. The
derived quantities are computed from the distinct and total counts of the
own tokens (``Stats.own``) or of the union over the space's subtree
(``Stats.total``).
"""

import math
from collections import Counter
from typing import Any, Dict, List

import tree_sitter

from ..grammar.base import node_text
from ..spaces.models import Op, OpRole


class HalsteadCounts:
    """Halstead quantities over one multiset of operators and operands."""

    def __init__(self, operators: Counter, operands: Counter):
        self._operators = operators
        self._operands = operands

    def u_operators(self) -> int:
        """n1: distinct operators."""
        return len(self._operators)

    def operators(self) -> int:
        """N1: total operators."""
        return sum(self._operators.values())

    def u_operands(self) -> int:
        """n2: distinct operands."""
        return len(self._operands)

    def operands(self) -> int:
        """N2: total operands."""
        return sum(self._operands.values())

    def vocabulary(self) -> int:
        return self.u_operators() + self.u_operands()

    def length(self) -> int:
        return self.operators() + self.operands()

    def volume(self) -> float:
        vocabulary = self.vocabulary()
        if vocabulary <= 1:
            return 0.0
        return self.length() * math.log2(vocabulary)

    def difficulty(self) -> float:
        u_operands = self.u_operands()
        if u_operands == 0:
            return 0.0
        return self.u_operators() / 2 * self.operands() / u_operands

    def level(self) -> float:
        difficulty = self.difficulty()
        return 1 / difficulty if difficulty else 0.0

    def effort(self) -> float:
        return self.difficulty() * self.volume()

    def estimated_program_length(self) -> float:
        n1 = self.u_operators()
        n2 = self.u_operands()
        return (n1 * math.log2(n1) if n1 else 0.0) + (n2 * math.log2(n2) if n2 else 0.0)

    def purity_ratio(self) -> float:
        length = self.length()
        return self.estimated_program_length() / length if length else 0.0

    def time(self) -> float:
        """Seconds needed to program (Stroud number 18)."""
        return self.effort() / 18

    def bugs(self) -> float:
        return self.effort() ** (2 / 3) / 3000

    def to_dict(self) -> Dict[str, Any]:
        return {
            "n1": self.u_operators(),
            "N1": self.operators(),
            "n2": self.u_operands(),
            "N2": self.operands(),
            "vocabulary": self.vocabulary(),
            "length": self.length(),
            "volume": self.volume(),
            "difficulty": self.difficulty(),
            "level": self.level(),
            "effort": self.effort(),
            "estimated_program_length": self.estimated_program_length(),
            "purity_ratio": self.purity_ratio(),
            "time": self.time(),
            "bugs": self.bugs(),
        }


class Stats:
    """Ordered own ops plus cumulative operator/operand counters."""

    def __init__(self) -> None:
        self.ops: List[Op] = []
        self._own_operators: Counter = Counter()
        self._own_operands: Counter = Counter()
        self._total_operators: Counter = Counter()
        self._total_operands: Counter = Counter()

    def add_operator(self, value: str) -> None:
        self.ops.append(Op(OpRole.OPERATOR, value))
        self._own_operators[value] += 1

    def add_operand(self, value: str) -> None:
        self.ops.append(Op(OpRole.OPERAND, value))
        self._own_operands[value] += 1

    def init_totals(self) -> None:
        self._total_operators = Counter(self._own_operators)
        self._total_operands = Counter(self._own_operands)

    def merge(self, other: "Stats") -> None:
        self._total_operators.update(other._total_operators)
        self._total_operands.update(other._total_operands)

    @property
    def own(self) -> HalsteadCounts:
        return HalsteadCounts(self._own_operators, self._own_operands)

    @property
    def total(self) -> HalsteadCounts:
        return HalsteadCounts(self._total_operators, self._total_operands)

    def to_dict(self) -> Dict[str, Any]:
        return {"own": self.own.to_dict(), "total": self.total.to_dict()}


def compute(node: tree_sitter.Node, checker, code: bytes, stats: Stats, state) -> None:
    if state.skip_halstead:
        state.child_skip_halstead = True
        return
    if node.is_missing:
        return
    if checker.is_operand(node):
        stats.add_operand(node_text(node, code))
        state.child_skip_halstead = True
    elif checker.is_operator(node):
        text = node_text(node, code).strip()
        if text:
            stats.add_operator(text)
        state.child_skip_halstead = True
