"""Number of arguments of functions and closures."""

from typing import Any, Dict


class Stats:
    def __init__(self) -> None:
        self.own = 0
        self._own_is_closure = False
        self._function_args = 0
        self._closure_args = 0

    def set_function_args(self, count: int) -> None:
        self.own = count
        self._own_is_closure = False

    def set_closure_args(self, count: int) -> None:
        self.own = count
        self._own_is_closure = True

    def init_totals(self) -> None:
        if self._own_is_closure:
            self._function_args, self._closure_args = 0, self.own
        else:
            self._function_args, self._closure_args = self.own, 0

    def merge(self, other: "Stats") -> None:
        self._function_args += other._function_args
        self._closure_args += other._closure_args

    def fn_args_sum(self) -> int:
        return self._function_args

    def closure_args_sum(self) -> int:
        return self._closure_args

    def nargs_total(self) -> int:
        return self._function_args + self._closure_args

    def nargs_average(self, functions: int) -> float:
        return self.nargs_total() / functions if functions else 0.0

    def to_dict(self, functions: int) -> Dict[str, Any]:
        return {
            "own": self.own,
            "functions": self._function_args,
            "closures": self._closure_args,
            "total": self.nargs_total(),
            "average": self.nargs_average(functions),
        }
