"""
Unit Tests — Candidate Scorer
=============================
Relatedness, category fit, severity fit and the weighted composite.
"""
import pytest

from hydra.scoring.candidate_scorer import (
    category_fit,
    category_severity,
    composite_score,
    describe_score,
    file_stem,
    module_tail,
    relatedness,
    severity_fit,
)


class TestModuleTail:

    @pytest.mark.parametrize("specifier, expected", [
        ("./auth.js", "auth"),
        ("./auth", "auth"),
        ("../db", "db"),
        ("app.services.auth", "auth"),
        ("github.com/acme/app/auth", "auth"),
        ("React", "react"),
    ])
    def test_tail(self, specifier, expected):
        assert module_tail(specifier) == expected

    def test_file_stem(self):
        assert file_stem("/repo/src/Auth.py") == "auth"


class TestRelatedness:

    def test_same_directory(self):
        assert relatedness("/p/src/a.py", "/p/src/b.py", [], []) == pytest.approx(0.4)

    def test_sibling_directory(self):
        assert relatedness("/p/src/x/a.py", "/p/src/y/b.py", [], []) == pytest.approx(0.2)

    def test_unrelated_directory(self):
        assert relatedness("/p/docs/a.py", "/p/src/y/b.py", [], []) == 0.0

    def test_importing_the_fixed_module(self):
        score = relatedness("/p/lib/deep/a.py", "/p/src/auth.py", ["app.auth"], [])
        assert score == pytest.approx(0.4)

    def test_similar_name_is_not_an_import_of_the_fixed_module(self):
        assert relatedness("/p/lib/deep/a.py", "/p/src/auth.py", ["oauth"], []) == 0.0

    def test_shared_external_imports(self):
        score = relatedness("/p/lib/deep/a.py", "/p/src/b.py", ["requests", "os", ".local"], ["os", "requests", ".local"])
        assert score == pytest.approx(0.1)

    def test_capped_at_one(self):
        shared = ["a", "b", "c", "d", "e"]
        score = relatedness("/p/src/a.py", "/p/src/auth.py", ["auth"] + shared, shared)
        assert score == pytest.approx(1.0)
        assert score <= 1.0


class TestCategoryFit:

    def test_context_free_categories(self):
        assert category_fit("logic", "src/auth.py", "anything") == 0.5
        assert category_fit("correctness", "", "") == 0.5

    def test_keyword_hit_and_miss(self):
        assert category_fit("security", "src/auth.py", "") == 0.9
        assert category_fit("security", "src/util.py", "fix typo") == 0.2
        assert category_fit("concurrency", "src/worker.py", "Fix race in worker") == 0.8
        assert category_fit("null-safety", "src/a.go", "guard nil map") == 0.8

    def test_unknown_category(self):
        assert category_fit("telepathy", "src/a.py", "") == 0.3


class TestSeverityFit:

    def test_exact_match(self):
        assert severity_fit("security", 5) == 1.0

    def test_distance_penalty(self):
        assert severity_fit("logic", 1) == pytest.approx(0.75)
        assert severity_fit("logic", 5) == pytest.approx(0.25)

    def test_floor_at_zero(self):
        assert severity_fit("security", 1) == 0.0

    def test_unknown_category_severity(self):
        assert category_severity("telepathy") == 3
        assert category_severity("concurrency") == 4


class TestComposite:

    def test_weights(self):
        assert composite_score(1.0, 1.0, 1.0) == pytest.approx(1.0)
        assert composite_score(1.0, 0.0, 0.0) == pytest.approx(0.40)
        assert composite_score(0.0, 1.0, 0.0) == pytest.approx(0.35)
        assert composite_score(0.0, 0.0, 1.0) == pytest.approx(0.25)

    def test_describe_score(self):
        text = describe_score(0.4, 0.5, 1.0)
        assert text.startswith("0.585")
        assert "rel=0.40" in text
