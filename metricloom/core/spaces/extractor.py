"""Function space extraction.

One iterative depth-first walk over the parsed tree partitions the file
into nested function spaces and feeds every node to the metric algorithms
of its nearest enclosing space. A second, bottom-up pass validates the span
invariants and folds each space's metrics into its parent's cumulative view.
"""

import logging
import os
from typing import List, Optional, Tuple, Union

import tree_sitter

from ..metrics import CodeMetrics, WalkState
from ..metrics import cognitive, cyclomatic, halstead, loc, nesting, nexits
from ..parser import Parser
from .models import ANONYMOUS_NAME, FuncSpace, Ops, SpaceInvariantError, SpaceKind

logger = logging.getLogger(__name__)

# (node, enclosing space, nesting level, inside a Halstead token)
_Frame = Tuple[tree_sitter.Node, FuncSpace, int, bool]


def _unit_space(parser: Parser, path: str) -> FuncSpace:
    line_count = parser.line_count
    unit = FuncSpace(
        name=path,
        kind=SpaceKind.UNIT,
        start_line=1,
        end_line=max(1, line_count),
        start_byte=0,
        end_byte=len(parser.code),
        metrics=CodeMetrics(),
    )
    unit.metrics.loc.sloc = line_count
    return unit


def _open_space(parser: Parser, node: tree_sitter.Node, parent: FuncSpace) -> FuncSpace:
    binding = parser.binding
    rows = loc.node_rows(node)
    space = FuncSpace(
        name=binding.space_name(node, parser.code) or ANONYMOUS_NAME,
        kind=binding.space_kind(node),
        start_line=rows.start + 1,
        end_line=rows.stop,
        start_byte=node.start_byte,
        end_byte=node.end_byte,
        metrics=CodeMetrics(),
    )
    space.metrics.loc.sloc = len(rows)

    if binding.is_closure(node):
        space.metrics.nom.closures = 1
        space.metrics.nargs.set_closure_args(binding.count_parameters(node))
    elif binding.is_func(node):
        space.metrics.nom.functions = 1
        space.metrics.nargs.set_function_args(binding.count_parameters(node))

    parent.spaces.append(space)
    return space


def _walk(parser: Parser, unit: FuncSpace) -> None:
    binding = parser.binding
    code = parser.code
    root = parser.root
    stack: List[_Frame] = [(root, unit, 0, False)]

    while stack:
        node, space, level, skip_halstead = stack.pop()

        if node.id != root.id and binding.is_func_space(node):
            space = _open_space(parser, node, space)
            # A nested space starts a fresh nesting context
            level = 0
            skip_halstead = False

        stats = space.metrics
        if binding.is_comment(node):
            loc.compute_comment(node, stats.loc)
            continue

        state = WalkState.enter(level, skip_halstead)
        cyclomatic.compute(node, binding, stats.cyclomatic)
        cognitive.compute(node, binding, stats.cognitive, state)
        nesting.compute(stats.nesting, state)
        halstead.compute(node, binding, code, stats.halstead, state)
        loc.compute(node, binding, stats.loc)
        nexits.compute(node, binding, stats.nexits)

        for child in reversed(node.children):
            stack.append((child, space, state.child_nesting, state.child_skip_halstead))


def _check_spans(space: FuncSpace) -> None:
    previous: Optional[FuncSpace] = None
    for child in space.spaces:
        if not space.contains(child):
            raise SpaceInvariantError(
                f"Space '{child.name}' [{child.start_byte}, {child.end_byte}) escapes "
                f"its parent '{space.name}' [{space.start_byte}, {space.end_byte})"
            )
        if previous is not None and child.start_byte < previous.end_byte:
            raise SpaceInvariantError(
                f"Sibling spaces '{previous.name}' and '{child.name}' overlap "
                f"at byte {child.start_byte}"
            )
        previous = child


def _finalize(unit: FuncSpace) -> None:
    """Validate spans and compute cumulative metrics, children first."""
    pending = [(unit, False)]
    while pending:
        space, children_done = pending.pop()
        if not children_done:
            _check_spans(space)
            pending.append((space, True))
            pending.extend((child, False) for child in space.spaces)
            continue
        stats = space.metrics
        stats.init_totals()
        for child in space.spaces:
            stats.merge(child.metrics)
        stats.finalize()


def metrics(parser: Parser, path: Union[str, os.PathLike]) -> Optional[FuncSpace]:
    """Extract the function space tree of a parsed file with full metrics.

    Args:
        parser: Parsed source file
        path: Path naming the unit space

    Returns:
        The unit space, or None when the parser holds no tree
    """
    if parser.root is None:
        logger.warning(f"No syntax tree for {os.fspath(path)}, skipping metrics")
        return None

    unit = _unit_space(parser, os.fspath(path))
    _walk(parser, unit)
    _finalize(unit)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            f"Extracted {sum(1 for _ in unit.walk())} spaces from {unit.name} "
            f"({parser.binding.get_lang_name()})"
        )
    return unit


def operands_and_operators(parser: Parser, path: Union[str, os.PathLike]) -> Optional[Ops]:
    """Extract the operators and operands of every space of a parsed file."""
    unit = metrics(parser, path)
    if unit is None:
        return None
    return Ops.from_space(unit)
