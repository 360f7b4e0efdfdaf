"""Tests for the metric algorithms, end to end through extraction."""

import math
from collections import Counter

import pytest
from metricloom.core.dispatch import get_function_spaces
from metricloom.core.languages import Lang
from metricloom.core.metrics import HalsteadCounts
from metricloom.core.metrics.halstead import Stats as HalsteadStats


# =========================================================================
# Sample source fixtures
# =========================================================================

PYTHON_MODULE = '''def outer(a, b):
    if a and b:
        return 1
    elif a:
        return 2
    else:
        return 3


def helper(x):
    inner = lambda y: y + 1
    for i in range(x):
        while i:
            i -= 1
    return inner(x)


class Greeter:
    def greet(self, name):
        return name
'''

NESTED_FUNCTIONS = '''def f(x):
    if x:
        def g(y):
            if y:
                return 1
        return g
'''

LOC_SOURCE = '''# leading comment
def f(a):
    """Docstring."""

    b = a + 1  # trailing
    return b
'''


def spaces_of(lang, source, path="test"):
    return get_function_spaces(lang, source.encode("utf-8"), path)


def else_if_chain(n):
    """A C function holding an if/else-if chain of ``n`` ifs and a final else."""
    branches = " else ".join(f"if (v == {i}) {{ g(); }}" for i in range(n))
    return f"void f(int v) {{ {branches} else {{ g(); }} }}"


# =========================================================================
# Tests: cyclomatic complexity
# =========================================================================

class TestCyclomatic:
    def test_c_else_if_scenario(self):
        unit = spaces_of(Lang.C, "if (a) { } else if (b) { }")
        assert unit.spaces == []
        assert unit.metrics.cyclomatic.cyclomatic() == 3

    @pytest.mark.parametrize("n", [1, 2, 3, 5])
    def test_chain_of_n_ifs_adds_n(self, n):
        unit = spaces_of(Lang.C, else_if_chain(n))
        (func,) = unit.spaces
        assert func.metrics.cyclomatic.cyclomatic() == 1 + n

    @pytest.mark.parametrize("lang, source", [
        (Lang.CPP, "void f(bool a, bool b) { if (a) { } else if (b) { } else { } }"),
        (Lang.JAVASCRIPT, "function f(a, b) { if (a) { } else if (b) { } else { } }"),
        (Lang.JAVA, "class A { void f(boolean a, boolean b) { if (a) { } else if (b) { } else { } } }"),
    ])
    def test_c_family_chains(self, lang, source):
        func = spaces_of(lang, source).spaces[0]
        while func.spaces:
            func = func.spaces[0]
        assert func.metrics.cyclomatic.cyclomatic() == 3

    def test_python_decisions(self):
        unit = spaces_of(Lang.PYTHON, PYTHON_MODULE)
        outer, helper, greeter = unit.spaces
        # if, and, elif
        assert outer.metrics.cyclomatic.cyclomatic() == 4
        # for, while
        assert helper.metrics.cyclomatic.cyclomatic() == 3
        assert greeter.metrics.cyclomatic.cyclomatic() == 1

    def test_cumulative_is_sum_of_own(self):
        unit = spaces_of(Lang.PYTHON, PYTHON_MODULE)
        own_total = sum(space.metrics.cyclomatic.cyclomatic() for space in unit.walk())
        assert own_total == 11
        assert unit.metrics.cyclomatic.cyclomatic_sum() == own_total

    def test_cumulative_min_max_average(self):
        cyclomatic = spaces_of(Lang.PYTHON, PYTHON_MODULE).metrics.cyclomatic
        assert cyclomatic.cyclomatic_min() == 1
        assert cyclomatic.cyclomatic_max() == 4
        assert cyclomatic.cyclomatic_average() == pytest.approx(11 / 6)

    def test_switch_cases(self):
        source = "int f(int v) { switch (v) { case 1: return 1; case 2: return 2; default: return 0; } }"
        (func,) = spaces_of(Lang.C, source).spaces
        assert func.metrics.cyclomatic.cyclomatic() == 3

    def test_rust_match_arms(self):
        source = "fn f(v: i32) -> i32 { match v { 1 => 1, 2 => 2, _ => 0 } }"
        (func,) = spaces_of(Lang.RUST, source).spaces
        assert func.metrics.cyclomatic.cyclomatic() == 4


# =========================================================================
# Tests: Halstead
# =========================================================================

class TestHalstead:
    def test_single_assignment(self):
        unit = spaces_of(Lang.PYTHON, "x = 1\n")
        counts = unit.metrics.halstead.own
        assert (counts.u_operators(), counts.operators()) == (1, 1)
        assert (counts.u_operands(), counts.operands()) == (2, 2)
        assert counts.vocabulary() == 3
        assert counts.length() == 3
        assert counts.volume() == pytest.approx(3 * math.log2(3))
        assert unit.metrics.cyclomatic.cyclomatic() == 1

    def test_function_with_one_assignment(self):
        unit = spaces_of(Lang.PYTHON, "def f():\n    x = 1\n")
        (func,) = unit.spaces
        assert func.metrics.cyclomatic.cyclomatic() == 1
        counts = func.metrics.halstead.own
        # def ( : = / f x 1
        assert counts.u_operators() == 4
        assert counts.u_operands() == 3
        assert unit.metrics.halstead.own.length() == 0
        assert unit.metrics.halstead.total.vocabulary() == 7

    def test_vocabulary_and_length_grow(self):
        small = spaces_of(Lang.PYTHON, "x = 1\n").metrics.halstead.total
        large = spaces_of(Lang.PYTHON, "x = 1\ny = x + 2\n").metrics.halstead.total
        assert large.vocabulary() >= small.vocabulary()
        assert large.length() >= small.length()
        assert large.volume() == pytest.approx(large.length() * math.log2(large.vocabulary()))

    def test_volume_zero_for_tiny_vocabulary(self):
        assert HalsteadCounts(Counter(), Counter()).volume() == 0.0
        assert HalsteadCounts(Counter({"=": 3}), Counter()).volume() == 0.0

    def test_derived_quantities(self):
        counts = HalsteadCounts(Counter({"=": 2, "+": 1}), Counter({"x": 2, "1": 1, "y": 1}))
        volume = 7 * math.log2(5)
        difficulty = 2 / 2 * 4 / 3
        assert counts.volume() == pytest.approx(volume)
        assert counts.difficulty() == pytest.approx(difficulty)
        assert counts.level() == pytest.approx(1 / difficulty)
        assert counts.effort() == pytest.approx(difficulty * volume)
        assert counts.time() == pytest.approx(difficulty * volume / 18)
        assert counts.bugs() == pytest.approx((difficulty * volume) ** (2 / 3) / 3000)
        assert counts.estimated_program_length() == pytest.approx(2 * 1 + 3 * math.log2(3))

    def test_difficulty_without_operands(self):
        assert HalsteadCounts(Counter({"return": 1}), Counter()).difficulty() == 0.0

    def test_total_is_union_of_subtree(self):
        unit = spaces_of(Lang.PYTHON, PYTHON_MODULE)
        stats = unit.metrics.halstead
        expected_operators = Counter()
        for space in unit.walk():
            for op in space.metrics.halstead.ops:
                if op.role.value == "operator":
                    expected_operators[op.value] += 1
        assert stats.total.operators() == sum(expected_operators.values())
        assert stats.total.u_operators() == len(expected_operators)

    def test_stats_merge(self):
        parent, child = HalsteadStats(), HalsteadStats()
        parent.add_operator("=")
        child.add_operator("=")
        child.add_operand("x")
        child.init_totals()
        parent.init_totals()
        parent.merge(child)
        assert parent.total.operators() == 2
        assert parent.total.u_operators() == 1
        assert parent.own.operands() == 0


# =========================================================================
# Tests: cognitive complexity and nesting
# =========================================================================

class TestCognitive:
    def test_if_chain(self):
        (func,) = spaces_of(Lang.C, "void f(int a, int b) { if (a) {} else if (b) {} else {} }").spaces
        # if +1, else if +1, else +1
        assert func.metrics.cognitive.cognitive() == 3

    def test_python_branches(self):
        outer, helper, _ = spaces_of(Lang.PYTHON, PYTHON_MODULE).spaces
        # if +1, and +1, elif +1, else +1
        assert outer.metrics.cognitive.cognitive() == 4
        # for +1, nested while +2
        assert helper.metrics.cognitive.cognitive() == 3

    def test_nested_function_resets_nesting(self):
        (f,) = spaces_of(Lang.PYTHON, NESTED_FUNCTIONS).spaces
        (g,) = f.spaces
        assert f.metrics.cognitive.cognitive() == 1
        assert g.metrics.cognitive.cognitive() == 1
        assert f.metrics.cognitive.cognitive_sum() == 2

    def test_logical_sequences(self):
        same = spaces_of(Lang.PYTHON, "x = a and b and c\n")
        mixed = spaces_of(Lang.PYTHON, "x = a and b or c\n")
        assert same.metrics.cognitive.cognitive() == 1
        assert mixed.metrics.cognitive.cognitive() == 2

    def test_labeled_jump(self):
        (func,) = spaces_of(Lang.C, "void f(void) { goto out; out: return; }").spaces
        assert func.metrics.cognitive.cognitive() == 1

    def test_nesting_depth(self):
        unit = spaces_of(Lang.PYTHON, PYTHON_MODULE)
        outer, helper, _ = unit.spaces
        assert outer.metrics.nesting.nesting() == 1
        assert helper.metrics.nesting.nesting() == 2
        assert unit.metrics.nesting.nesting() == 0
        assert unit.metrics.nesting.nesting_max() == 2


# =========================================================================
# Tests: lines of code
# =========================================================================

class TestLoc:
    def test_unit_counts(self):
        loc = spaces_of(Lang.PYTHON, LOC_SOURCE).metrics.loc
        assert loc.sloc == 6
        assert loc.ploc() == 3
        assert loc.cloc() == 3
        assert loc.lloc() == 3
        assert loc.statements() == 3
        assert loc.blank() == 1

    def test_function_sloc(self):
        (func,) = spaces_of(Lang.PYTHON, LOC_SOURCE).spaces
        assert func.metrics.loc.sloc == 5

    def test_c_comments(self):
        source = "/* header\n   block */\nint x; // trailing\n"
        loc = spaces_of(Lang.C, source).metrics.loc
        assert loc.sloc == 3
        assert loc.cloc() == 3
        assert loc.ploc() == 1
        assert loc.blank() == 0

    @pytest.mark.parametrize("source, sloc", [
        ("int x = 1;\rint y = 2;\r", 1),
        ("int x = 1;\r\nint y = 2;\r\n", 2),
        ("int x = 1;\nint y = 2;", 2),
    ])
    def test_lines_follow_line_feeds(self, source, sloc):
        loc = spaces_of(Lang.C, source).metrics.loc
        assert loc.sloc == sloc
        assert loc.ploc() == sloc
        assert loc.blank() == 0


# =========================================================================
# Tests: exits, arguments, methods
# =========================================================================

class TestCounts:
    def test_nexits(self):
        unit = spaces_of(Lang.PYTHON, PYTHON_MODULE)
        outer, helper, greeter = unit.spaces
        assert outer.metrics.nexits.exit() == 3
        assert helper.metrics.nexits.exit() == 1
        assert unit.metrics.nexits.exit_sum() == 5
        assert unit.metrics.nexits.exit_average(unit.metrics.nom.total()) == pytest.approx(5 / 4)

    def test_nargs(self):
        unit = spaces_of(Lang.PYTHON, PYTHON_MODULE)
        outer, helper, greeter = unit.spaces
        assert outer.metrics.nargs.own == 2
        assert helper.spaces[0].metrics.nargs.own == 1
        nargs = unit.metrics.nargs
        assert nargs.fn_args_sum() == 5
        assert nargs.closure_args_sum() == 1
        assert nargs.nargs_total() == 6
        assert nargs.nargs_average(unit.metrics.nom.total()) == pytest.approx(1.5)

    @pytest.mark.parametrize("lang", [Lang.TYPESCRIPT, Lang.TSX])
    def test_typescript_this_parameter_not_counted(self, lang):
        source = "function f(this: any, a: number, b?: string) {}\n"
        (func,) = spaces_of(lang, source).spaces
        assert func.metrics.nargs.own == 2

    def test_typescript_arrow_parameters(self):
        (func,) = spaces_of(Lang.TYPESCRIPT, "const g = (a: number, b: number) => a + b;\n").spaces
        assert func.metrics.nargs.own == 2

    def test_nom(self):
        nom = spaces_of(Lang.PYTHON, PYTHON_MODULE).metrics.nom
        assert nom.functions_sum() == 3
        assert nom.closures_sum() == 1
        assert nom.total() == 4

    def test_classes_are_not_methods(self):
        unit = spaces_of(Lang.PYTHON, PYTHON_MODULE)
        greeter = unit.spaces[2]
        assert greeter.metrics.nom.functions == 0
        assert greeter.metrics.nom.functions_sum() == 1


# =========================================================================
# Tests: maintainability index
# =========================================================================

class TestMaintainabilityIndex:
    def test_single_line(self):
        unit = spaces_of(Lang.PYTHON, "x = 1\n")
        volume = 3 * math.log2(3)
        expected = 171.0 - 5.2 * math.log(volume) - 0.23 * 1 - 16.2 * math.log(1)
        mi = unit.metrics.mi
        assert mi.mi_original() == pytest.approx(expected)
        assert mi.mi_sei() == pytest.approx(171.0 - 5.2 * math.log2(volume) - 0.23)
        assert mi.mi_visual_studio() == pytest.approx(expected * 100 / 171)

    def test_empty_file_drops_log_terms(self):
        mi = get_function_spaces(Lang.PYTHON, b"", "empty.py").metrics.mi
        assert mi.mi_original() == pytest.approx(171.0 - 0.23)
        assert mi.mi_sei() == pytest.approx(171.0 - 0.23)

    def test_comments_raise_sei(self):
        plain = spaces_of(Lang.PYTHON, "x = 1\ny = 2\n").metrics.mi
        commented = spaces_of(Lang.PYTHON, "x = 1  # one\ny = 2\n").metrics.mi
        assert commented.mi_sei() > plain.mi_sei()
