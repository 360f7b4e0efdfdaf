"""Grammar binding registry.

Bindings are created lazily, one per language, the first time a language is
analysed. The binding module is named by the language's ``LanguageInfo`` and
must expose a ``BINDINGS`` mapping from ``Lang`` to its binding class.
"""

import importlib
import logging
import threading
from typing import Dict

from ..languages import Lang
from .base import GrammarBinding

logger = logging.getLogger(__name__)

# Binding registry — lazy-loaded to avoid importing every grammar at startup
_binding_registry: Dict[Lang, GrammarBinding] = {}
_registry_lock = threading.Lock()


def get_binding_class(lang: Lang) -> type:
    """Import the binding module of ``lang`` and return its binding class.

    Raises:
        ValueError: If ``lang`` is not a ``Lang``
        TypeError: If the module registers a class for a different language
    """
    if not isinstance(lang, Lang):
        raise ValueError(f"Unsupported language: {lang!r}. Supported: {[str(item) for item in Lang]}")

    module = importlib.import_module(f"{__package__}.{lang.info.binding}")
    cls = module.BINDINGS[lang]
    if not issubclass(cls, GrammarBinding) or cls.lang is not lang:
        raise TypeError(
            f"{module.__name__} registers {cls.__name__} for {lang.name}, "
            f"which does not declare lang = Lang.{lang.name}"
        )
    return cls


def get_binding(lang: Lang) -> GrammarBinding:
    """Get the shared binding instance for the given language.

    Args:
        lang: Language to bind

    Returns:
        Binding instance, created on first use and cached for the process

    Raises:
        ValueError: If ``lang`` is not a ``Lang``
    """
    if not isinstance(lang, Lang):
        raise ValueError(f"Unsupported language: {lang!r}")

    binding = _binding_registry.get(lang)
    if binding is not None:
        return binding

    with _registry_lock:
        if lang not in _binding_registry:
            cls = get_binding_class(lang)
            _binding_registry[lang] = cls()
            logger.debug(f"Registered grammar binding {cls.__name__} for {lang}")
        return _binding_registry[lang]
