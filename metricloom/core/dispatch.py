"""Dispatch layer.

``action`` is the single entry point that turns a runtime ``Lang`` into its
grammar binding, parses the source and hands the parser to a caller-supplied
computation. A computation is a ``Callback`` subclass declaring its own
configuration and result types.
"""

import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, Optional, Type, TypeVar, Union

from .grammar import get_binding
from .languages import Lang
from .parser import Parser
from .preproc import PreprocResults
from .spaces import FuncSpace, Ops
from .spaces import extractor

logger = logging.getLogger(__name__)

CfgT = TypeVar("CfgT")
ResT = TypeVar("ResT")

PathLike = Union[str, os.PathLike]


class Callback(ABC, Generic[CfgT, ResT]):
    """A computation run over one parsed file."""

    @classmethod
    @abstractmethod
    def compute(cls, cfg: CfgT, parser: Parser) -> ResT:
        """Run the computation.

        Args:
            cfg: Computation configuration, at least the file path
            parser: Parsed source file

        Returns:
            The computation's result
        """


@dataclass(frozen=True)
class MetricsCfg:
    """Configuration of the function space metrics computation."""

    path: PathLike


@dataclass(frozen=True)
class OpsCfg:
    """Configuration of the operators/operands computation."""

    path: PathLike


class Metrics(Callback[MetricsCfg, Optional[FuncSpace]]):
    """Extract the function space tree with full metrics."""

    @classmethod
    def compute(cls, cfg: MetricsCfg, parser: Parser) -> Optional[FuncSpace]:
        return extractor.metrics(parser, cfg.path)


class OpsCallback(Callback[OpsCfg, Optional[Ops]]):
    """Extract the per-space operator and operand sequences."""

    @classmethod
    def compute(cls, cfg: OpsCfg, parser: Parser) -> Optional[Ops]:
        return extractor.operands_and_operators(parser, cfg.path)


def action(
    callback: Type[Callback[CfgT, ResT]],
    lang: Lang,
    source: bytes,
    path: PathLike,
    preproc: Optional[PreprocResults],
    cfg: CfgT,
) -> ResT:
    """Parse ``source`` as ``lang`` and run ``callback`` over it.

    Raises:
        ValueError: If ``lang`` is not a ``Lang``
    """
    binding = get_binding(lang)
    parser = Parser(binding, source, path, preproc)
    return callback.compute(cfg, parser)


def get_function_spaces(
    lang: Lang,
    source: bytes,
    path: PathLike,
    preproc: Optional[PreprocResults] = None,
) -> Optional[FuncSpace]:
    """Function space tree of a source file, None when it cannot be parsed."""
    return action(Metrics, lang, source, path, preproc, MetricsCfg(path))


def get_ops(
    lang: Lang,
    source: bytes,
    path: PathLike,
    preproc: Optional[PreprocResults] = None,
) -> Optional[Ops]:
    """Operators and operands of every space of a source file."""
    return action(OpsCallback, lang, source, path, preproc, OpsCfg(path))
