"""Concurrent analysis of many files.

The per-file core is synchronous; this module fans files out over a thread
pool. Bindings are shared read-only between workers and every worker owns
its parser and space tree, so no coordination is needed beyond collecting
results. Per-file failures are recorded and the run continues.
"""

import fnmatch
import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence, Union

from .config import load_unified_config
from .dispatch import get_function_spaces
from .languages import Lang, guess_language
from .preproc import PreprocResults
from .spaces import FuncSpace

logger = logging.getLogger(__name__)

# Directories to skip during file walking
SKIP_DIRECTORIES = frozenset({
    "__pycache__",
    ".git",
    ".hg",
    ".svn",
    "venv",
    ".venv",
    "node_modules",
    ".tox",
    ".mypy_cache",
    ".pytest_cache",
    "dist",
    "build",
    "target",
    "bin",
    "obj",
})


@dataclass
class AnalysisError:
    """Structured error for one file that could not be analysed."""
    path: str
    phase: str  # "read" | "detection" | "parse" | "analysis"
    message: str


@dataclass
class FileResult:
    """Analysis outcome for one file."""

    path: str
    language: Optional[Lang] = None
    space: Optional[FuncSpace] = None
    error: Optional[AnalysisError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class RunnerSettings:
    """File selection and pool settings, usually taken from the config."""

    num_jobs: Optional[int] = None
    max_file_size_mb: float = 5
    skip_directories: Sequence[str] = field(default_factory=list)
    include: Sequence[str] = field(default_factory=list)
    exclude: Sequence[str] = field(default_factory=list)

    @classmethod
    def from_config(cls) -> "RunnerSettings":
        settings = load_unified_config()["runner"]
        return cls(
            num_jobs=settings.get("num_jobs"),
            max_file_size_mb=settings.get("max_file_size_mb", 5),
            skip_directories=settings.get("skip_directories") or [],
            include=settings.get("include") or [],
            exclude=settings.get("exclude") or [],
        )


class ConcurrentRunner:
    """Analyse files and directory trees on a thread pool.

    Args:
        settings: Selection and pool settings; read from the config when omitted
        preproc: Preprocessing result shared by every C-family parse
    """

    def __init__(
        self,
        settings: Optional[RunnerSettings] = None,
        preproc: Optional[PreprocResults] = None,
    ):
        self.settings = settings or RunnerSettings.from_config()
        self.preproc = preproc
        self._skip = SKIP_DIRECTORIES | frozenset(self.settings.skip_directories)

    # =========================================================================
    # File selection
    # =========================================================================

    def should_skip_directory(self, dir_name: str) -> bool:
        return dir_name in self._skip

    def _selected(self, relative: str) -> bool:
        relative = relative.replace(os.sep, "/")
        if self.settings.include and not any(
            fnmatch.fnmatch(relative, pattern) for pattern in self.settings.include
        ):
            return False
        return not any(fnmatch.fnmatch(relative, pattern) for pattern in self.settings.exclude)

    def collect_files(self, paths: Iterable[Union[str, os.PathLike]]) -> List[Path]:
        """Expand directories into the files selected for analysis.

        Explicit file arguments are always kept; files found while walking a
        directory are filtered by the include/exclude globs.
        """
        files: List[Path] = []
        for path in map(Path, paths):
            if path.is_dir():
                files.extend(self._walk_directory(path))
            else:
                files.append(path)
        return files

    def _walk_directory(self, root: Path) -> Iterator[Path]:
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames[:] = sorted(d for d in dirnames if not self.should_skip_directory(d))
            for filename in sorted(filenames):
                file_path = Path(dirpath) / filename
                if self._selected(os.path.relpath(file_path, root)):
                    yield file_path

    # =========================================================================
    # Analysis
    # =========================================================================

    def analyze_file(self, path: Union[str, os.PathLike]) -> FileResult:
        """Analyse a single file, turning every failure into an ``AnalysisError``."""
        path = os.fspath(path)
        max_bytes = self.settings.max_file_size_mb * 1024 * 1024

        try:
            if os.path.getsize(path) > max_bytes:
                return self._failed(path, "read", f"file exceeds {self.settings.max_file_size_mb} MB")
            with open(path, "rb") as f:
                source = f.read()
        except OSError as e:
            return self._failed(path, "read", str(e))

        lang = guess_language(source, path)
        if lang is None:
            return self._failed(path, "detection", "unsupported language")

        try:
            space = get_function_spaces(lang, source, path, self.preproc)
        except (ValueError, RecursionError) as e:
            return self._failed(path, "analysis", str(e), lang)
        if space is None:
            return self._failed(path, "parse", "no syntax tree produced", lang)
        return FileResult(path=path, language=lang, space=space)

    def run(self, paths: Iterable[Union[str, os.PathLike]]) -> List[FileResult]:
        """Analyse every selected file; results keep the input order."""
        files = self.collect_files(paths)
        if not files:
            return []

        results: List[Optional[FileResult]] = [None] * len(files)
        with ThreadPoolExecutor(max_workers=self.settings.num_jobs) as executor:
            future_to_index = {
                executor.submit(self.analyze_file, file_path): i
                for i, file_path in enumerate(files)
            }
            for future in as_completed(future_to_index):
                results[future_to_index[future]] = future.result()

        failed = sum(1 for result in results if not result.ok)
        logger.info(f"Analysed {len(files)} files ({failed} failed)")
        return results

    @staticmethod
    def _failed(path: str, phase: str, message: str, lang: Optional[Lang] = None) -> FileResult:
        logger.warning(f"Skipping {path} ({phase}): {message}")
        return FileResult(path=path, language=lang, error=AnalysisError(path, phase, message))
