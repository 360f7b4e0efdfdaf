"""Maintainability index.

Computed from the cumulative view of a space once its subtree has been
folded in: Halstead volume, cyclomatic sum, sloc and cloc. A logarithm of
zero is dropped from the formula instead of producing an infinity.
"""

import math
from typing import Any, Dict


def _ln(value: float) -> float:
    return math.log(value) if value > 0 else 0.0


def _log2(value: float) -> float:
    return math.log2(value) if value > 0 else 0.0


class Stats:
    def __init__(self) -> None:
        self.volume = 0.0
        self.cyclomatic = 0
        self.sloc = 0
        self.cloc = 0

    def update(self, volume: float, cyclomatic: int, sloc: int, cloc: int) -> None:
        self.volume = volume
        self.cyclomatic = cyclomatic
        self.sloc = sloc
        self.cloc = cloc

    def mi_original(self) -> float:
        return 171.0 - 5.2 * _ln(self.volume) - 0.23 * self.cyclomatic - 16.2 * _ln(self.sloc)

    def mi_sei(self) -> float:
        comments = math.sin(math.sqrt(2.4 * self.cloc / self.sloc)) if self.sloc else 0.0
        return (
            171.0
            - 5.2 * _log2(self.volume)
            - 0.23 * self.cyclomatic
            - 16.2 * _log2(self.sloc)
            + 50.0 * comments
        )

    def mi_visual_studio(self) -> float:
        return max(0.0, self.mi_original() * 100.0 / 171.0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mi_original": self.mi_original(),
            "mi_sei": self.mi_sei(),
            "mi_visual_studio": self.mi_visual_studio(),
        }
