"""Supported languages and language detection.

Public API:
    Lang — enumeration of supported languages
    get_from_ext(ext) → Lang | None
    get_from_emacs_mode(mode) → Lang | None
    guess_language(source, path) → Lang | None
"""

from .registry import (
    Lang,
    LanguageInfo,
    get_emacs_mode,
    get_from_emacs_mode,
    get_from_ext,
    guess_language,
)

__all__ = [
    "Lang",
    "LanguageInfo",
    "get_emacs_mode",
    "get_from_emacs_mode",
    "get_from_ext",
    "guess_language",
]
