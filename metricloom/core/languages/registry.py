"""Language registry.

The ``Lang`` enumeration is the single source of truth for every supported
language: display name, extensions, editor modes and the grammar binding
module all hang off the enum member, so lookups and dispatch are derived
from one table.
"""

import logging
import os
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LanguageInfo:
    """Static metadata describing one supported language."""

    id: str  # "cpp"
    display_name: str  # "C++"
    description: str
    extensions: Tuple[str, ...]  # without the leading dot
    emacs_modes: Tuple[str, ...]
    binding: str  # module name under metricloom.core.grammar


class Lang(Enum):
    """The list of supported languages."""

    PYTHON = LanguageInfo(
        id="python",
        display_name="python",
        description="The Python language",
        extensions=("py", "pyw", "pyi"),
        emacs_modes=("python",),
        binding="python_binding",
    )
    JAVASCRIPT = LanguageInfo(
        id="javascript",
        display_name="javascript",
        description="The JavaScript language",
        extensions=("js", "mjs", "cjs", "jsx"),
        emacs_modes=("js", "js2", "javascript"),
        binding="javascript_binding",
    )
    TYPESCRIPT = LanguageInfo(
        id="typescript",
        display_name="typescript",
        description="The TypeScript language",
        extensions=("ts", "mts", "cts"),
        emacs_modes=("typescript",),
        binding="typescript_binding",
    )
    TSX = LanguageInfo(
        id="tsx",
        display_name="typescript-jsx",
        description="The TSX language",
        extensions=("tsx",),
        emacs_modes=("tsx", "typescript-tsx"),
        binding="typescript_binding",
    )
    JAVA = LanguageInfo(
        id="java",
        display_name="java",
        description="The Java language",
        extensions=("java",),
        emacs_modes=("java",),
        binding="java_binding",
    )
    C = LanguageInfo(
        id="c",
        display_name="c",
        description="The C language",
        extensions=("c",),
        emacs_modes=("c",),
        binding="c_binding",
    )
    CPP = LanguageInfo(
        id="cpp",
        display_name="c/c++",
        description="The C++ language",
        extensions=("cpp", "cc", "cxx", "c++", "hh", "hpp", "hxx", "h", "inl", "inc"),
        emacs_modes=("c++", "cpp"),
        binding="c_binding",
    )
    CSHARP = LanguageInfo(
        id="csharp",
        display_name="c#",
        description="The C# language",
        extensions=("cs",),
        emacs_modes=("csharp",),
        binding="csharp_binding",
    )
    GO = LanguageInfo(
        id="go",
        display_name="go",
        description="The Go language",
        extensions=("go",),
        emacs_modes=("go",),
        binding="go_binding",
    )
    RUST = LanguageInfo(
        id="rust",
        display_name="rust",
        description="The Rust language",
        extensions=("rs",),
        emacs_modes=("rust",),
        binding="rust_binding",
    )
    RUBY = LanguageInfo(
        id="ruby",
        display_name="ruby",
        description="The Ruby language",
        extensions=("rb", "rake", "gemspec"),
        emacs_modes=("ruby",),
        binding="ruby_binding",
    )

    @property
    def info(self) -> LanguageInfo:
        return self.value

    @property
    def id(self) -> str:
        return self.value.id

    def get_name(self) -> str:
        """Return the display name of the language."""
        return self.value.display_name

    @classmethod
    def from_id(cls, lang_id: str) -> Optional["Lang"]:
        return _BY_ID.get(lang_id.lower())

    def __str__(self) -> str:
        return self.value.id


def _build_index(attr: str) -> Dict[str, Lang]:
    index: Dict[str, Lang] = {}
    for lang in Lang:
        for key in getattr(lang.value, attr):
            key = key.lower()
            if key in index:
                raise RuntimeError(
                    f"{attr} entry '{key}' registered for both "
                    f"{index[key].name} and {lang.name}"
                )
            index[key] = lang
    return index


_BY_ID: Dict[str, Lang] = {lang.value.id: lang for lang in Lang}
_BY_EXTENSION = _build_index("extensions")
_BY_EMACS_MODE = _build_index("emacs_modes")

# First lines scanned for an editor mode line
MODE_LINE_SCAN_LINES = 5

_EMACS_MODE_RE = re.compile(rb"-\*-\s*(?:.*?mode:\s*)?([\w+#.-]+?)\s*(?:;.*?)?-\*-", re.IGNORECASE)
_VIM_MODE_RE = re.compile(rb"vim?:.*?\b(?:ft|filetype)=([\w+#.-]+)", re.IGNORECASE)


def get_from_ext(ext: str) -> Optional[Lang]:
    """Detect the language associated to a file extension.

    Args:
        ext: Extension with or without the leading dot ("rs", ".py")

    Returns:
        Matching language or None if the extension is not registered
    """
    return _BY_EXTENSION.get(ext.lstrip(".").lower())


def get_from_emacs_mode(mode: str) -> Optional[Lang]:
    """Detect the language associated to an Emacs mode string."""
    return _BY_EMACS_MODE.get(mode.strip().lower())


def get_emacs_mode(source: bytes) -> Optional[str]:
    """Extract the editor mode declared in the first lines of a source."""
    for line in source.splitlines()[:MODE_LINE_SCAN_LINES]:
        for pattern in (_EMACS_MODE_RE, _VIM_MODE_RE):
            match = pattern.search(line)
            if match:
                return match.group(1).decode("utf-8", errors="replace").lower()
    return None


def guess_language(source: bytes, path: Union[str, os.PathLike]) -> Optional[Lang]:
    """Guess the language of a source file.

    A mode line (``-*- mode: c++ -*-`` or ``vim: set ft=rust:``) wins over the
    file extension, which disambiguates headers such as ``foo.h``.

    Args:
        source: Raw source bytes
        path: Path of the file (only the extension is used)

    Returns:
        Detected language or None
    """
    _, ext = os.path.splitext(os.fspath(path))
    from_ext = get_from_ext(ext) if ext else None

    mode = get_emacs_mode(source)
    from_mode = get_from_emacs_mode(mode) if mode else None

    if from_mode and from_ext and from_mode is not from_ext:
        logger.debug(
            f"Mode line of {os.fspath(path)} says {from_mode.id}, extension says {from_ext.id}"
        )
    return from_mode or from_ext
