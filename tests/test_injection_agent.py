"""
Integration Tests — Injection Agent
===================================
End-to-end runs over temporary project trees: ranking, diversity,
same-file batches, skip reasons and structural errors.
"""
import os
import re
from unittest.mock import patch

import libcst as cst
import libcst.matchers as m
import pytest

from hydra.agents.injection_agent import InjectionAgent, inject_bugs, validate_fix_event
from hydra.agents.selector import collect_candidate_files, pick_candidates, score_candidates
from hydra.core.errors import InvalidRequestError, ScopeNotFoundError, UnsupportedLanguageError
from hydra.languages.python_adapter import PythonAdapter
from hydra.models.fix_event import FixEvent
from hydra.models.injection import InjectionCandidate, InjectionPoint
from hydra.templates.base import CSTTemplate, LineTemplate
from hydra.templates.python.logic_inversion import LogicInversionTemplate
from hydra.templates.python.negation_strip import NegationStripTemplate
from hydra.templates.python.off_by_one import OffByOneTemplate
from hydra.templates.registry import get_templates
from hydra.utils.skip_reasons import INVALID_OUTPUT, NO_OP, PARSE_FAILURE, STALE_POINT, WRITE_FAILURE


class _IdentityTemplate(CSTTemplate):
    name = "identity"
    category = "logic"
    description = "Changes nothing"
    node_type = cst.Call

    def matches(self, node):
        return m.matches(node.func, m.Name("range"))

    def mutate(self, node):
        return node


class _BraceStripTemplate(LineTemplate):
    name = "brace-strip"
    category = "logic"
    language = "go"
    description = "Removes a closing brace"
    pattern = re.compile(r"^\}\s*$")
    removes_line = True


def _only(*templates):
    """Patch the agent's catalog lookup to return ``templates`` for every language."""
    return patch("hydra.agents.injection_agent.get_templates", return_value=tuple(templates))


LOOP = """\
def total(items):
    s = 0
    for i in range(len(items)):
        s += items[i]
    return s
"""


# ---------------------------------------------------------------------------
# Ranking and selection
# ---------------------------------------------------------------------------
class TestRanking:

    def test_related_file_ranks_first(self, make_tree):
        root = make_tree({
            "src/auth.py": "import requests\n\ndef login(u):\n    return requests.post('x', json=u, timeout=5)\n",
            "src/session.py": "from auth import login\n\n" + LOOP,
            "src/other/util.py": LOOP,
        })
        fix = FixEvent(file=str(root / "src/auth.py"), description="fix login loop")
        files = collect_candidate_files(str(root / "src"), fix.file, {".py"})
        ranked = score_candidates(files, fix, {"python": (OffByOneTemplate(),)}, 3, fixed_file=fix.file)

        assert [os.path.basename(c.file) for c in ranked] == ["session.py", "util.py"]
        assert ranked[0].score > ranked[1].score

    def test_ranking_is_deterministic(self, make_tree):
        root = make_tree({
            "src/a.py": LOOP + "\nif x is not None and y:\n    pass\n",
            "src/b.py": LOOP,
            "src/c/d.py": "with self._lock:\n    n += 1\n",
        })
        fix = FixEvent(file="src/fixed.py", description="null check")
        python = {"python": get_templates("python")}

        def run():
            files = collect_candidate_files(str(root / "src"), str(root / "src/fixed.py"), {".py"})
            ranked = score_candidates(files, fix, python, 3, fixed_file=str(root / "src/fixed.py"))
            return [(c.file, c.template.name, c.point.line, c.score) for c in ranked]

        assert run() == run()

    def test_ties_keep_discovery_order(self, make_tree):
        root = make_tree({"src/a.py": "for i in range(a):\n    pass\nfor j in range(b):\n    pass\n"})
        fix = FixEvent(file="elsewhere/fixed.py")
        ranked = score_candidates([str(root / "src/a.py")], fix, {"python": (OffByOneTemplate(),)}, 3)
        assert [c.point.line for c in ranked] == [1, 3]


def _candidate(file, score, line=1):
    return InjectionCandidate(
        file=file,
        template=OffByOneTemplate(),
        point=InjectionPoint(line=line, context="range(n)", index=0),
        score=score,
    )


class TestPickCandidates:

    def test_diversity_pass_prefers_distinct_files(self):
        ranked = [_candidate("a.py", 0.9), _candidate("a.py", 0.8, line=5), _candidate("b.py", 0.5)]
        picked = pick_candidates(ranked, 2)
        assert [(c.file, c.score) for c in picked] == [("a.py", 0.9), ("b.py", 0.5)]

    def test_fill_pass_uses_remaining_rank_order(self):
        ranked = [_candidate("a.py", 0.9), _candidate("a.py", 0.8, line=5), _candidate("b.py", 0.5)]
        picked = pick_candidates(ranked, 3)
        assert [c.score for c in picked] == [0.9, 0.5, 0.8]

    def test_ratio_caps_selection(self):
        ranked = [_candidate("a.py", 0.9), _candidate("b.py", 0.8)]
        assert len(pick_candidates(ranked, 1)) == 1
        assert len(pick_candidates(ranked, 5)) == 2
        assert pick_candidates([], 3) == []


class TestCandidateFiles:

    def test_fixed_file_is_excluded(self, make_tree):
        root = make_tree({"src/a.py": "x = 1\n", "src/b.py": "y = 2\n"})
        files = collect_candidate_files(str(root / "src"), str(root / "src/a.py"), {".py"})
        assert files == [str(root / "src/b.py")]

    def test_self_injection_when_fixed_file_is_alone(self, make_tree):
        root = make_tree({"src/a.py": "x = 1\n"})
        files = collect_candidate_files(str(root / "src"), str(root / "src/a.py"), {".py"})
        assert files == [str(root / "src/a.py")]

    def test_ignored_directories_and_extensions(self, make_tree):
        root = make_tree({
            "src/app.js": "x\n",
            "src/node_modules/dep/index.js": "x\n",
            "src/.cache/tmp.py": "x\n",
            "src/pkg/__pycache__/m.py": "x\n",
            "src/pkg/mod.py": "x\n",
            "src/notes.md": "x\n",
        })
        files = collect_candidate_files(str(root / "src"), "", {".py", ".js"}, PythonAdapter.skip_dirs)
        assert files == [str(root / "src/app.js"), str(root / "src/pkg/mod.py")]


# ---------------------------------------------------------------------------
# Full runs
# ---------------------------------------------------------------------------
class TestInjectionAgent:

    def test_injects_and_writes_parsable_file(self, make_tree):
        root = make_tree({"src/calc.py": LOOP})
        agent = InjectionAgent({"scope": "src", "ratio": 1}, root=str(root))
        results = agent.inject({"file": "lib/fixed.py", "description": "fix loop bound"})

        assert len(results) == 1
        result = results[0]
        assert result.file == "src/calc.py"
        assert result.line == 3
        assert result.template == "off-by-one"
        assert result.category == "logic"
        assert result.severity == 2
        assert result.original_code == LOOP
        assert "range(len(items) + 1)" in result.injected_code
        assert result.diff.startswith("--- a/src/calc.py\n+++ b/src/calc.py\n@@")

        on_disk = (root / "src/calc.py").read_text()
        assert on_disk == result.injected_code
        cst.parse_module(on_disk)

    def test_same_file_twice_chains_snapshots(self, make_tree):
        root = make_tree({"src/loops.py": (
            "for i in range(len(a)):\n    pass\n"
            "\n"
            "for j in range(len(b)):\n    pass\n"
        )})
        with _only(OffByOneTemplate()):
            results = InjectionAgent({"scope": "src", "ratio": 2}, root=str(root)).inject(
                {"file": "lib/fixed.py"}
            )

        assert len(results) == 2
        assert results[1].original_code == results[0].injected_code
        final = (root / "src/loops.py").read_text()
        assert final == results[1].injected_code
        assert "range(len(a) + 1)" in final
        assert "range(len(b) + 1)" in final

    def test_repeated_context_relocates_to_nearest_line(self, make_tree):
        root = make_tree({"src/a.py": "for i in range(n):\n    pass\nfor i in range(n):\n    pass\n"})
        with _only(OffByOneTemplate()):
            agent = InjectionAgent({"scope": "src", "ratio": 2}, root=str(root))
            results = agent.inject({"file": "lib/fixed.py"})

        assert [r.line for r in results] == [1, 3]
        assert (root / "src/a.py").read_text().count("range(n + 1)") == 2

    def test_point_destroyed_by_earlier_injection_is_stale(self, make_tree):
        root = make_tree({"src/a.py": "if not a and b:\n    go()\n"})
        with _only(NegationStripTemplate(), LogicInversionTemplate()):
            agent = InjectionAgent({"scope": "src", "ratio": 2}, root=str(root))
            results = agent.inject({"file": "lib/fixed.py"})

        assert [r.template for r in results] == ["negation-strip"]
        assert (str(root / "src/a.py"), STALE_POINT) in agent.skipped
        assert (root / "src/a.py").read_text() == "if a and b:\n    go()\n"

    def test_identity_mutation_is_a_no_op(self, make_tree):
        root = make_tree({"src/a.py": LOOP})
        with _only(_IdentityTemplate()):
            agent = InjectionAgent({"scope": "src", "ratio": 1}, root=str(root))
            results = agent.inject({"file": "lib/fixed.py"})

        assert results == []
        assert (str(root / "src/a.py"), NO_OP) in agent.skipped
        assert (root / "src/a.py").read_text() == LOOP

    def test_structurally_broken_output_is_rejected(self, make_tree):
        source = "package main\n\nfunc main() {\n\tx := 1\n\t_ = x\n}\n"
        root = make_tree({"src/main.go": source})
        with _only(_BraceStripTemplate()):
            agent = InjectionAgent({"scope": "src", "ratio": 1}, root=str(root))
            results = agent.inject({"file": "cmd/fixed.go"})

        assert results == []
        assert (str(root / "src/main.go"), INVALID_OUTPUT) in agent.skipped
        assert (root / "src/main.go").read_text() == source

    def test_unparsable_file_is_skipped(self, make_tree):
        root = make_tree({"src/bad.py": "def broken(:\n", "src/good.py": LOOP})
        with _only(OffByOneTemplate()):
            agent = InjectionAgent({"scope": "src", "ratio": 2}, root=str(root))
            results = agent.inject({"file": "lib/fixed.py"})

        assert [r.file for r in results] == ["src/good.py"]
        assert (str(root / "src/bad.py"), PARSE_FAILURE) in agent.skipped

    def test_malformed_javascript_is_skipped(self, make_tree):
        bad = "function f(x) {\n  if (x === null) {\n    return 1;\n"
        root = make_tree({"src/bad.js": bad, "src/good.js": "if (a === b) {}\n"})
        agent = InjectionAgent({"scope": "src", "ratio": 2}, root=str(root))
        results = agent.inject({"file": "lib/fixed.js"})

        assert [r.file for r in results] == ["src/good.js"]
        assert (str(root / "src/bad.js"), PARSE_FAILURE) in agent.skipped
        assert (root / "src/bad.js").read_text() == bad

    def test_write_failure_is_skipped(self, make_tree):
        root = make_tree({"src/a.py": LOOP})
        with _only(OffByOneTemplate()), \
             patch("hydra.agents.applier.write_source", side_effect=OSError("disk full")):
            agent = InjectionAgent({"scope": "src", "ratio": 1}, root=str(root))
            results = agent.inject({"file": "lib/fixed.py"})

        assert results == []
        assert (str(root / "src/a.py"), WRITE_FAILURE) in agent.skipped

    def test_nothing_to_inject_returns_empty(self, make_tree):
        root = make_tree({"src/a.py": "x = 1\n"})
        results = InjectionAgent({"scope": "src"}, root=str(root)).inject({"file": "lib/fixed.py"})
        assert results == []

    def test_language_follows_fixed_file(self, make_tree):
        root = make_tree({
            "web/client.js": "if (status === 200) {\n  ok();\n}\n",
            "web/loop.py": LOOP,
        })
        results = inject_bugs({"file": "web/api.js"}, {"scope": "web", "ratio": 3}, root=str(root))
        assert [r.file for r in results] == ["web/client.js"]
        assert results[0].template == "strict-equality-loosen"

    def test_language_override(self, make_tree):
        root = make_tree({"web/client.js": "if (a === b) {}\n", "web/loop.py": LOOP})
        results = inject_bugs(
            {"file": "web/api.js"},
            {"scope": "web", "ratio": 3, "language": "python"},
            root=str(root),
        )
        assert [r.file for r in results] == ["web/loop.py"]

    def test_unknown_fixed_extension_uses_every_language(self, make_tree):
        root = make_tree({"src/client.js": "if (a === b) {}\n", "src/loop.py": LOOP})
        agent = InjectionAgent({"scope": "src", "ratio": 2}, root=str(root))
        assert agent.resolve_languages(FixEvent(file="README.md")) == ["javascript", "python", "go"]
        results = agent.inject({"file": "README.md"})
        assert sorted(r.file for r in results) == ["src/client.js", "src/loop.py"]


class TestStructuralErrors:

    def test_missing_scope(self, tmp_path):
        agent = InjectionAgent({"scope": "does-not-exist"}, root=str(tmp_path))
        with pytest.raises(ScopeNotFoundError):
            agent.inject({"file": "a.py"})

    @pytest.mark.parametrize("scope", ["../outside", "repo/../../outside", None])
    def test_scope_outside_root_is_rejected(self, make_tree, scope):
        tree = make_tree({"repo/src/a.py": LOOP, "outside/b.py": LOOP})
        outside = tree / "outside"
        agent = InjectionAgent({"scope": scope or str(outside)}, root=str(tree / "repo"))

        with pytest.raises(InvalidRequestError, match="outside the project root"):
            agent.inject({"file": "src/a.py"})
        assert (outside / "b.py").read_text() == LOOP

    def test_absolute_scope_inside_root_is_accepted(self, make_tree):
        root = make_tree({"src/a.py": LOOP})
        agent = InjectionAgent({"scope": str(root / "src")}, root=str(root))
        assert agent.scope_dir() == str(root / "src")

    @pytest.mark.parametrize("options", [
        {"ratio": 0},
        {"severity": 0},
        {"severity": 6},
        {"ratio": "many"},
    ])
    def test_invalid_options(self, tmp_path, options):
        with pytest.raises(InvalidRequestError):
            InjectionAgent(options, root=str(tmp_path))

    def test_unsupported_language(self, make_tree):
        root = make_tree({"src/a.py": LOOP})
        agent = InjectionAgent({"scope": "src", "language": "cobol"}, root=str(root))
        with pytest.raises(UnsupportedLanguageError):
            agent.inject({"file": "a.py"})

    def test_fix_event_needs_a_file(self):
        with pytest.raises(InvalidRequestError):
            validate_fix_event({"file": "  "})
        with pytest.raises(InvalidRequestError):
            validate_fix_event({"description": "no file"})
