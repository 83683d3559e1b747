# tests/test_analyses.py

import pytest

import toyflow
from toyflow.analyses import ALL_ANALYSES, run_all_analyses
from toyflow.config import AnalysisConfig
from toyflow.errors import ConfigurationError
from toylang.parser import parse
from tests.conftest import NEVER_WHILE_SRC, texts


class TestRunAllAnalyses:

    def test_runs_everything_by_default(self):
        results = run_all_analyses(parse(NEVER_WHILE_SRC))
        assert texts(results.live_dead_stores) == []
        assert texts(results.mixed_dead_stores) == ["a = a + 1"]
        assert texts(results.values.never_happens) == ["while a < 1"]
        assert [name for name, _ in results.all_analyses] == [
            "live_dead_stores", "values", "mixed_dead_stores",
        ]

    def test_subset(self):
        results = run_all_analyses(parse(NEVER_WHILE_SRC), analyses={"live", "bogus"})
        assert results.values is None
        assert results.mixed_dead_stores is None
        assert results.live_dead_stores == []

    def test_values_only(self):
        results = run_all_analyses(parse(NEVER_WHILE_SRC), analyses={"values"})
        assert results.mixed_dead_stores is None
        assert results.values.possible_values == {"a": {1}}

    def test_invalid_config(self):
        with pytest.raises(ConfigurationError) as info:
            run_all_analyses(parse(NEVER_WHILE_SRC), AnalysisConfig(max_depth=-1))
        assert info.value.problems == ["max_depth must be non-negative"]
        assert isinstance(info.value, ValueError)

    def test_known_names(self):
        assert ALL_ANALYSES == {"live", "values", "mixed"}


class TestPackage:

    def test_reexports(self):
        assert toyflow.run_all_analyses is run_all_analyses
        assert "MixedAnalyzer" in toyflow.__all__

    def test_package_info(self):
        info = toyflow.package_info()
        assert info["version"] == toyflow.__version__
        assert "possible_values" in info["loaded_submodules"]
