"""Tests for the concurrent runner."""

from pathlib import Path

import pytest
from metricloom.core.languages import Lang
from metricloom.core.runner import ConcurrentRunner, RunnerSettings


@pytest.fixture
def source_tree(tmp_path):
    (tmp_path / "a.py").write_text("def f(x):\n    return x\n")
    (tmp_path / "b.c").write_text("int main(void) { return 0; }\n")
    (tmp_path / "notes.txt").write_text("not code\n")
    (tmp_path / "node_modules").mkdir()
    (tmp_path / "node_modules" / "dep.js").write_text("function dep() {}\n")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "lib.rs").write_text("fn lib() -> i32 { 1 }\n")
    return tmp_path


def names(results, root):
    return [Path(r.path).relative_to(root).as_posix() for r in results]


class TestFileSelection:
    def test_directories_expanded_and_skipped(self, source_tree):
        runner = ConcurrentRunner(RunnerSettings())
        files = runner.collect_files([source_tree])
        assert [f.relative_to(source_tree).as_posix() for f in files] == [
            "a.py", "b.c", "notes.txt", "sub/lib.rs",
        ]

    def test_exclude_globs(self, source_tree):
        runner = ConcurrentRunner(RunnerSettings(exclude=["*.txt", "sub/*"]))
        results = runner.run([source_tree])
        assert names(results, source_tree) == ["a.py", "b.c"]

    def test_include_globs(self, source_tree):
        runner = ConcurrentRunner(RunnerSettings(include=["*.rs"]))
        results = runner.run([source_tree])
        assert names(results, source_tree) == ["sub/lib.rs"]

    def test_extra_skip_directories(self, source_tree):
        runner = ConcurrentRunner(RunnerSettings(skip_directories=["sub"]))
        assert "sub/lib.rs" not in names(runner.run([source_tree]), source_tree)


class TestRun:
    def test_results_in_input_order(self, source_tree):
        results = ConcurrentRunner(RunnerSettings(num_jobs=2)).run([source_tree])
        assert [r.language for r in results] == [Lang.PYTHON, Lang.C, None, Lang.RUST]
        assert [r.ok for r in results] == [True, True, False, True]

    def test_unsupported_file_recorded(self, source_tree):
        results = ConcurrentRunner(RunnerSettings()).run([source_tree / "notes.txt"])
        (result,) = results
        assert result.space is None
        assert result.error.phase == "detection"
        assert result.error.path == str(source_tree / "notes.txt")

    def test_missing_file_recorded(self, tmp_path):
        result = ConcurrentRunner(RunnerSettings()).analyze_file(tmp_path / "missing.py")
        assert not result.ok
        assert result.error.phase == "read"

    def test_size_limit(self, source_tree):
        result = ConcurrentRunner(RunnerSettings(max_file_size_mb=0)).analyze_file(source_tree / "a.py")
        assert result.error.phase == "read"

    def test_space_tree_returned(self, source_tree):
        result = ConcurrentRunner(RunnerSettings()).analyze_file(source_tree / "a.py")
        assert result.ok
        assert [s.name for s in result.space.spaces] == ["f"]
        assert result.space.metrics.nargs.fn_args_sum() == 1

    def test_empty_input(self):
        assert ConcurrentRunner(RunnerSettings()).run([]) == []
