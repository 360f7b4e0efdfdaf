"""Number of methods: functions and closures in a space's subtree."""

from typing import Any, Dict


class Stats:
    def __init__(self) -> None:
        self.functions = 0
        self.closures = 0
        self._functions_sum = 0
        self._closures_sum = 0

    def init_totals(self) -> None:
        self._functions_sum = self.functions
        self._closures_sum = self.closures

    def merge(self, other: "Stats") -> None:
        self._functions_sum += other._functions_sum
        self._closures_sum += other._closures_sum

    def functions_sum(self) -> int:
        return self._functions_sum

    def closures_sum(self) -> int:
        return self._closures_sum

    def total(self) -> int:
        return self._functions_sum + self._closures_sum

    def to_dict(self) -> Dict[str, Any]:
        return {
            "functions": self._functions_sum,
            "closures": self._closures_sum,
            "total": self.total(),
        }
