"""metricloom — tree-sitter based source code metrics.

Public API:
    get_function_spaces(lang, source, path) → FuncSpace | None
    get_ops(lang, source, path) → Ops | None
    action(callback, lang, source, path, preproc, cfg) → result
    guess_language(source, path) → Lang | None
"""

from .core.dispatch import (
    Callback,
    Metrics,
    MetricsCfg,
    OpsCallback,
    OpsCfg,
    action,
    get_function_spaces,
    get_ops,
)
from .core.languages import Lang, get_from_emacs_mode, get_from_ext, guess_language
from .core.parser import Parser
from .core.preproc import PreprocFile, PreprocResults
from .core.runner import AnalysisError, ConcurrentRunner, FileResult
from .core.spaces import FuncSpace, Op, OpRole, Ops, SpaceInvariantError, SpaceKind

__version__ = "0.1.0"

__all__ = [
    "action",
    "get_function_spaces",
    "get_ops",
    "guess_language",
    "get_from_ext",
    "get_from_emacs_mode",
    "AnalysisError",
    "Callback",
    "ConcurrentRunner",
    "FileResult",
    "FuncSpace",
    "Lang",
    "Metrics",
    "MetricsCfg",
    "Op",
    "OpRole",
    "Ops",
    "OpsCallback",
    "OpsCfg",
    "Parser",
    "PreprocFile",
    "PreprocResults",
    "SpaceInvariantError",
    "SpaceKind",
]
