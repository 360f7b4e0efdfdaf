"""Tests for the dispatch layer and operator/operand extraction."""

import pytest
from metricloom import get_function_spaces, get_ops
from metricloom.core.dispatch import Callback, Metrics, MetricsCfg, OpsCallback, OpsCfg, action
from metricloom.core.languages import Lang
from metricloom.core.preproc import PreprocFile, PreprocResults
from metricloom.core.spaces import FuncSpace, Ops, OpRole


class LanguageName(Callback[None, str]):
    @classmethod
    def compute(cls, cfg, parser):
        return parser.binding.get_lang_name()


class SeenPreproc(Callback[None, object]):
    @classmethod
    def compute(cls, cfg, parser):
        return parser.preproc


PREPROC = PreprocResults({"a.h": PreprocFile(direct_includes=frozenset({"b.h"}), macros=frozenset({"N"}))})


# =========================================================================
# Tests: action
# =========================================================================

class TestAction:
    @pytest.mark.parametrize("lang", list(Lang))
    def test_selects_binding_for_language(self, lang):
        assert action(LanguageName, lang, b"", "x", None, None) == lang.get_name()

    def test_preproc_forwarded_to_c_family(self):
        assert action(SeenPreproc, Lang.C, b"int x;", "a.c", PREPROC, None) is PREPROC
        assert action(SeenPreproc, Lang.CPP, b"int x;", "a.cc", PREPROC, None) is PREPROC

    def test_preproc_dropped_elsewhere(self):
        assert action(SeenPreproc, Lang.PYTHON, b"x = 1\n", "a.py", PREPROC, None) is None

    def test_builtin_metrics_callback(self):
        space = action(Metrics, Lang.GO, b"package p\nfunc f() {}\n", "p.go", None, MetricsCfg("p.go"))
        assert isinstance(space, FuncSpace)
        assert space.name == "p.go"
        assert [s.name for s in space.spaces] == ["f"]

    def test_builtin_ops_callback(self):
        ops = action(OpsCallback, Lang.PYTHON, b"x = 1\n", "a.py", None, OpsCfg("a.py"))
        assert isinstance(ops, Ops)

    def test_unsupported_language(self):
        with pytest.raises(ValueError):
            action(LanguageName, "cobol", b"", "x", None, None)


# =========================================================================
# Tests: operators and operands
# =========================================================================

class TestOps:
    def test_single_assignment(self):
        ops = get_ops(Lang.PYTHON, b"x = 1\n", "a.py")
        assert ops.operators() == ["="]
        assert ops.operands() == ["x", "1"]
        assert [op.role for op in ops.ops] == [OpRole.OPERAND, OpRole.OPERATOR, OpRole.OPERAND]

    def test_nested_spaces_keep_their_own_ops(self):
        ops = get_ops(Lang.PYTHON, b"y = 2\ndef f():\n    return y\n", "a.py")
        (func,) = ops.spaces
        assert func.name == "f"
        assert func.operators() == ["def", "(", ":", "return"]
        assert func.operands() == ["f", "y"]
        assert ops.operands() == ["y", "2", "f"]

    def test_distinct_values_first_seen(self):
        ops = get_ops(Lang.C, b"int f(int a) { return a + a * a; }", "a.c")
        assert ops.operands() == ["f", "a"]
        assert ops.operators()[0] == "int"

    def test_ops_match_space_tree(self):
        source = b"class A:\n    def m(self):\n        return lambda: 1\n"
        unit = get_function_spaces(Lang.PYTHON, source, "a.py")
        ops = get_ops(Lang.PYTHON, source, "a.py")
        assert ops == Ops.from_space(unit)

    def test_to_dict(self):
        result = get_ops(Lang.PYTHON, b"x = 1\n", "a.py").to_dict()
        assert result == {
            "name": "a.py",
            "kind": "unit",
            "start_line": 1,
            "end_line": 1,
            "operators": ["="],
            "operands": ["x", "1"],
            "spaces": [],
        }

    def test_nested_to_dict_matches_accessors(self):
        source = b"a = 1\ndef f(b):\n    c = lambda d: d + b\n    return c(a)\n"
        ops = get_ops(Lang.PYTHON, source, "a.py")
        result = ops.to_dict()
        (func,) = ops.spaces
        (func_dict,) = result["spaces"]
        assert result["operators"] == ops.operators()
        assert result["operands"] == ops.operands()
        assert func_dict["operands"] == func.operands()
        assert func_dict["spaces"][0]["operands"] == ["d", "b"]
