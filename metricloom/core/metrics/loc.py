"""Lines-of-code metrics.

- sloc: lines spanned by the space
- ploc: lines holding at least one code token
- cloc: lines holding comments
- lloc: lines on which a statement starts
- statements: number of statements
- blank: spanned lines with neither code nor comments

Rows are kept as sets so that the cumulative view is the union over the
subtree and a line shared by a parent and a nested space counts once.
"""

from typing import Any, Dict, Set

import tree_sitter


class LocCounts:
    """Row sets and statement count for one view of a space."""

    def __init__(self) -> None:
        self.code_rows: Set[int] = set()
        self.comment_rows: Set[int] = set()
        self.logical_rows: Set[int] = set()
        self.statements = 0

    def copy(self) -> "LocCounts":
        counts = LocCounts()
        counts.code_rows = set(self.code_rows)
        counts.comment_rows = set(self.comment_rows)
        counts.logical_rows = set(self.logical_rows)
        counts.statements = self.statements
        return counts

    def update(self, other: "LocCounts") -> None:
        self.code_rows |= other.code_rows
        self.comment_rows |= other.comment_rows
        self.logical_rows |= other.logical_rows
        self.statements += other.statements

    def ploc(self) -> int:
        return len(self.code_rows)

    def cloc(self) -> int:
        return len(self.comment_rows)

    def lloc(self) -> int:
        return len(self.logical_rows)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ploc": self.ploc(),
            "lloc": self.lloc(),
            "cloc": self.cloc(),
            "statements": self.statements,
        }


class Stats:
    def __init__(self) -> None:
        self.sloc = 0
        self.own = LocCounts()
        self.total = LocCounts()

    def init_totals(self) -> None:
        self.total = self.own.copy()

    def merge(self, other: "Stats") -> None:
        self.total.update(other.total)

    def ploc(self) -> int:
        return self.total.ploc()

    def cloc(self) -> int:
        return self.total.cloc()

    def lloc(self) -> int:
        return self.total.lloc()

    def statements(self) -> int:
        return self.total.statements

    def blank(self) -> int:
        used = self.total.code_rows | self.total.comment_rows
        return max(0, self.sloc - len(used))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sloc": self.sloc,
            "ploc": self.ploc(),
            "lloc": self.lloc(),
            "cloc": self.cloc(),
            "blank": self.blank(),
            "statements": self.statements(),
            "own": self.own.to_dict(),
        }


def node_rows(node: tree_sitter.Node) -> range:
    """Rows covered by a node, not counting a trailing line break."""
    start = node.start_point.row
    end = node.end_point.row
    if end > start and node.end_point.column == 0:
        end -= 1
    return range(start, end + 1)


def compute(node: tree_sitter.Node, checker, stats: Stats) -> None:
    if checker.is_statement(node):
        stats.own.statements += 1
        stats.own.logical_rows.add(node.start_point.row)
    if node.child_count == 0 and node.end_byte > node.start_byte:
        stats.own.code_rows.update(node_rows(node))


def compute_comment(node: tree_sitter.Node, stats: Stats) -> None:
    stats.own.comment_rows.update(node_rows(node))
