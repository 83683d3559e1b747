# tests/test_mixed_analysis.py
"""
Tests for liveness sharpened by possible-value classification.
"""

from toyflow.live_variables import run_live_variable_analysis
from toyflow.mixed_analysis import MixedAnalyzer, run_mixed_analysis
from toyflow.possible_values import Classification
from toylang.parser import parse
from tests.conftest import (
    ALWAYS_IF_SRC, CONSTANT_IF_SRC, COUNTING_LOOP_SRC, NESTED_DEAD_SRC,
    NEVER_IF_SRC, NEVER_WHILE_SRC, OVERWRITE_SRC, UNROLL_LIMIT_SRC,
    find, texts,
)


def _mixed(src):
    return texts(run_mixed_analysis(parse(src)))


def _live(src):
    return texts(run_live_variable_analysis(parse(src)))


class TestNeverTaken:

    def test_never_if_body_is_dead(self):
        assert _mixed(NEVER_IF_SRC) == ["b = 1"]

    def test_never_while_body_is_dead(self):
        assert _mixed(NEVER_WHILE_SRC) == ["a = a + 1"]
        assert _live(NEVER_WHILE_SRC) == []

    def test_dead_body_reported_even_when_read_later(self):
        src = "a = 0\nif a > 5\n  b = 1\nend\nc = b"
        assert _mixed(src) == ["b = 1", "c = b"]
        assert _live(src) == ["c = b"]

    def test_nested_assignments_in_source_order(self):
        assert _mixed(NESTED_DEAD_SRC) == ["b = 1", "c = 2", "d = 3", "e = b + c + d"]

    def test_condition_still_reads(self):
        src = "a = 0\nwhile a > 5\n  b = 1\nend"
        assert _mixed(src) == ["b = 1"]


class TestAlwaysTaken:

    def test_always_if_body_kept_live(self):
        assert _mixed(ALWAYS_IF_SRC) == ["b = a"]

    def test_no_skip_path_kills_earlier_store(self):
        assert _mixed(CONSTANT_IF_SRC) == ["a = 1", "b = a"]
        assert _live(CONSTANT_IF_SRC) == ["b = a"]

    def test_always_while(self):
        assert _mixed(COUNTING_LOOP_SRC) == []


class TestIndeterminate:

    def test_falls_back_to_liveness(self):
        src = "a = 1\nif u\n  a = 2\nend\nb = a"
        assert _mixed(src) == _live(src) == ["b = a"]

    def test_poisoned_conditional_not_trusted(self):
        assert _mixed(UNROLL_LIMIT_SRC) == ["c = b"]


class TestMixedAnalyzer:

    def test_exposes_value_result(self):
        program = parse(NEVER_IF_SRC)
        analyzer = MixedAnalyzer()
        dead = analyzer.analyse(program)
        assert texts(dead) == ["b = 1"]
        assert analyzer.value_result is not None
        stmt = find(program, "if a > 10")
        assert analyzer.value_result.classify(stmt) is Classification.NEVER

    def test_is_a_superset_on_straight_line_code(self):
        assert _mixed(OVERWRITE_SRC) == _live(OVERWRITE_SRC)
