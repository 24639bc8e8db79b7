"""
Integration Tests — Hydra Session
=================================
Fix recording, injection into the manifest, discovery, status and purge.
"""
import json

import pytest

from hydra.agents.session import HydraSession
from hydra.core.errors import BugNotFoundError, InvalidRequestError, NoActiveSessionError, ScopeNotFoundError

LOOP = """\
def total(items):
    s = 0
    for i in range(len(items)):
        s += items[i]
    return s
"""


@pytest.fixture
def session(make_tree):
    root = make_tree({"src/calc.py": LOOP})
    return HydraSession(root=str(root))


class TestHydraSession:

    def test_status_without_session(self, session):
        assert session.status() == {"active": False}

    def test_start_reuses_active_manifest(self, session):
        session.start("hydra/session-first")
        assert session.start("hydra/session-second").branch_id == "hydra/session-first"

    def test_record_fix_and_inject(self, session):
        bugs = session.record_fix_and_inject(
            {"file": "lib/fixed.py", "description": "fix loop", "line": 4, "diff": "-a\n+b"},
            {"scope": "src", "ratio": 1},
        )

        assert [b.id for b in bugs] == ["hydra-001"]
        manifest = session.store.load()
        assert manifest.real_fixes[0].id == "fix-001"
        assert manifest.real_fixes[0].file == "lib/fixed.py"
        assert manifest.real_fixes[0].line == 4
        bug = manifest.injected_bugs[0]
        assert bug.parent_fix_id == "fix-001"
        assert bug.file == "src/calc.py"
        assert bug.original_code == LOOP
        assert bug.sequence == 1

    def test_status_tracks_discovery(self, session):
        session.record_fix_and_inject({"file": "lib/fixed.py"}, {"scope": "src", "ratio": 1})
        status = session.status()
        assert status["active"] is True
        assert status["undiscovered"] == ["hydra-001"]
        assert status["stats"]["totalInjected"] == 1

        session.mark_found("hydra-001", "alice")
        status = session.status()
        assert status["undiscovered"] == []
        assert status["stats"]["discovered"] == 1

    def test_status_recomputes_stale_stats(self, session):
        session.record_fix_and_inject({"file": "lib/fixed.py"}, {"scope": "src", "ratio": 1})
        with open(session.store.path, encoding="utf-8") as f:
            data = json.load(f)
        data["stats"] = {
            "totalRealFixes": 7, "totalInjected": 99, "discovered": 5, "undiscovered": 0, "reverted": 3,
        }
        data["injectedBugs"][0]["discoveredBy"] = "carol"
        with open(session.store.path, "w", encoding="utf-8") as f:
            json.dump(data, f)

        assert session.status()["stats"] == {
            "totalRealFixes": 1,
            "totalInjected": 1,
            "discovered": 1,
            "undiscovered": 0,
            "reverted": 0,
        }

    def test_purge_restores_files_and_keeps_manifest(self, session):
        session.record_fix_and_inject({"file": "lib/fixed.py"}, {"scope": "src", "ratio": 1})
        calc = session.root + "/src/calc.py"
        with open(calc, encoding="utf-8") as f:
            assert f.read() != LOOP

        summary = session.purge()

        assert summary.reverted == 1
        assert summary.errors == []
        with open(calc, encoding="utf-8") as f:
            assert f.read() == LOOP
        manifest = session.store.load()
        assert manifest is not None
        assert manifest.stats.reverted == 1

    def test_missing_scope_records_nothing(self, session):
        with pytest.raises(ScopeNotFoundError):
            session.record_fix_and_inject({"file": "lib/fixed.py"}, {"scope": "nope"})
        assert not session.store.exists()

    def test_scope_outside_root_records_nothing(self, session):
        with pytest.raises(InvalidRequestError):
            session.record_fix_and_inject({"file": "lib/fixed.py"}, {"scope": ".."})
        assert not session.store.exists()

    def test_invalid_options_record_nothing(self, session):
        with pytest.raises(InvalidRequestError):
            session.record_fix_and_inject({"file": "lib/fixed.py"}, {"scope": "src", "ratio": 0})
        assert not session.store.exists()

    def test_unsupported_language_records_nothing(self, session):
        with pytest.raises(InvalidRequestError):
            session.record_fix_and_inject({"file": "lib/fixed.py"}, {"scope": "src", "language": "cobol"})
        assert not session.store.exists()

    def test_session_operations_need_a_manifest(self, session):
        with pytest.raises(NoActiveSessionError):
            session.mark_found("hydra-001")
        with pytest.raises(NoActiveSessionError):
            session.purge()

    def test_unknown_bug(self, session):
        session.start()
        with pytest.raises(BugNotFoundError):
            session.mark_found("hydra-001")
