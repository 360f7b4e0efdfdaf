"""Metrics Engine — structural metrics computed over function spaces.

Each module implements one metric as a ``Stats`` accumulator plus a
``compute`` hook called by the extraction walk:

    cyclomatic, cognitive, halstead, loc, nesting, nexits, nargs, nom, mi
"""

from .code_metrics import CodeMetrics, WalkState
from .halstead import HalsteadCounts

__all__ = ["CodeMetrics", "HalsteadCounts", "WalkState"]
