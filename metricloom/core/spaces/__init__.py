"""Function spaces — the scope tree metrics are aggregated over.

Public API:
    FuncSpace, Ops, Op, OpRole, SpaceKind, SpaceInvariantError

Extraction lives in ``metricloom.core.spaces.extractor``.
"""

from .models import ANONYMOUS_NAME, FuncSpace, Op, OpRole, Ops, SpaceInvariantError, SpaceKind

__all__ = [
    "ANONYMOUS_NAME",
    "FuncSpace",
    "Op",
    "OpRole",
    "Ops",
    "SpaceInvariantError",
    "SpaceKind",
]
