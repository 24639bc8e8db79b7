"""
Unit Tests — Reverter
=====================
Snapshot restoration order, selective reverts and per-bug failure reporting.
"""
import pytest

from hydra.models.manifest import InjectedBug, Manifest
from hydra.services.manifest_store import ManifestStore
from hydra.services.reverter import Reverter


def _stacked_manifest():
    """Two injections into a.py: v0 -> v1 -> v2."""
    return Manifest(
        created="2026-01-01T00:00:00+00:00",
        injected_bugs=[
            InjectedBug(id="hydra-001", sequence=1, file="a.py", original_code="v0\n"),
            InjectedBug(id="hydra-002", sequence=2, file="a.py", original_code="v1\n"),
        ],
    )


@pytest.fixture
def project(tmp_path):
    (tmp_path / "a.py").write_text("v2\n")
    return tmp_path


class TestRevertAll:

    def test_newest_first_restores_pre_injection_state(self, project):
        summary = Reverter(str(project)).revert_all(_stacked_manifest())
        assert summary.reverted == 2
        assert summary.errors == []
        assert (project / "a.py").read_text() == "v0\n"

    def test_sequence_wins_over_array_position(self, project):
        manifest = _stacked_manifest()
        manifest.injected_bugs.reverse()
        Reverter(str(project)).revert_all(manifest)
        assert (project / "a.py").read_text() == "v0\n"

    def test_errors_are_collected_not_raised(self, project):
        manifest = Manifest(
            created="2026-01-01T00:00:00+00:00",
            injected_bugs=[
                InjectedBug(id="hydra-001", sequence=1, file="gone.py", original_code="x\n"),
                InjectedBug(id="hydra-002", sequence=2, file="a.py", original_code=None),
                InjectedBug(id="hydra-003", sequence=3, file="../outside.py", original_code="x\n"),
                InjectedBug(id="hydra-004", sequence=4, file="a.py", original_code="v0\n"),
            ],
        )
        summary = Reverter(str(project)).revert_all(manifest)

        assert summary.reverted == 1
        assert (project / "a.py").read_text() == "v0\n"
        assert len(summary.errors) == 3
        errors = "\n".join(summary.errors)
        assert "[hydra-001] File not found:" in errors
        assert '[hydra-002] Bug "hydra-002" has no originalCode stored; cannot revert.' in errors
        assert "[hydra-003] Path escapes project root" in errors


class TestRevertSingle:

    def test_unknown_bug(self, project):
        outcome = Reverter(str(project)).revert_single(_stacked_manifest(), "hydra-999")
        assert not outcome.success
        assert outcome.error == 'Bug "hydra-999" not found in manifest.'

    def test_single_revert(self, project):
        outcome = Reverter(str(project)).revert_single(_stacked_manifest(), "hydra-002")
        assert outcome.success
        assert (project / "a.py").read_text() == "v1\n"

    def test_refuses_older_bug_under_newer_injection(self, project):
        reverter = Reverter(str(project))
        manifest = _stacked_manifest()

        outcome = reverter.revert_single(manifest, "hydra-001")

        assert not outcome.success
        assert outcome.error == "Newer injection(s) hydra-002 in a.py must be reverted first."
        assert (project / "a.py").read_text() == "v2\n"
        assert manifest.injected_bugs[0].reverted_at is None

    def test_one_at_a_time_newest_first(self, project):
        reverter = Reverter(str(project))
        manifest = _stacked_manifest()
        assert reverter.revert_single(manifest, "hydra-002").success
        assert reverter.revert_single(manifest, "hydra-001").success
        assert (project / "a.py").read_text() == "v0\n"

    def test_already_reverted_is_refused(self, project):
        reverter = Reverter(str(project))
        manifest = _stacked_manifest()
        assert reverter.revert_single(manifest, "hydra-002").success
        (project / "a.py").write_text("edited by hand\n")

        outcome = reverter.revert_single(manifest, "hydra-002")

        assert not outcome.success
        assert outcome.error.startswith("Already reverted at ")
        assert (project / "a.py").read_text() == "edited by hand\n"

    def test_other_files_do_not_block(self, project):
        (project / "b.py").write_text("b1\n")
        manifest = _stacked_manifest()
        manifest.injected_bugs.append(
            InjectedBug(id="hydra-003", sequence=3, file="b.py", original_code="b0\n")
        )
        assert Reverter(str(project)).revert_single(manifest, "hydra-002").success
        assert (project / "a.py").read_text() == "v1\n"


class TestRevertSelected:

    def test_refuses_bug_with_newer_injection_on_top(self, project):
        summary = Reverter(str(project)).revert_selected(_stacked_manifest(), ["hydra-001"])
        assert summary.reverted == 0
        assert summary.errors == [
            "[hydra-001] Newer injection(s) hydra-002 in a.py must be reverted first."
        ]
        assert (project / "a.py").read_text() == "v2\n"

    def test_whole_stack_in_any_order(self, project):
        summary = Reverter(str(project)).revert_selected(_stacked_manifest(), ["hydra-001", "hydra-002"])
        assert summary.reverted == 2
        assert (project / "a.py").read_text() == "v0\n"

    def test_unknown_and_already_reverted(self, project):
        manifest = _stacked_manifest()
        manifest.injected_bugs[1].reverted_at = "2026-01-02T00:00:00+00:00"
        summary = Reverter(str(project)).revert_selected(manifest, ["hydra-404", "hydra-002", "hydra-001"])

        assert summary.reverted == 1
        assert "[hydra-404] Bug \"hydra-404\" not found in manifest." in summary.errors
        assert "[hydra-002] Already reverted at 2026-01-02T00:00:00+00:00." in summary.errors
        assert (project / "a.py").read_text() == "v0\n"


class TestRevertWithStore:

    def test_reverts_are_recorded_and_not_repeated(self, project):
        store = ManifestStore(str(project / ".hydra-manifest.json"))
        manifest = store.create()
        manifest.injected_bugs = _stacked_manifest().injected_bugs
        store.update_stats(manifest)

        reverter = Reverter(str(project), store)
        first = reverter.revert_all(manifest)
        assert first.reverted == 2

        reloaded = store.load()
        assert all(b.reverted_at for b in reloaded.injected_bugs)
        assert reloaded.stats.reverted == 2

        (project / "a.py").write_text("edited by hand\n")
        second = reverter.revert_all(reloaded)
        assert second.reverted == 0
        assert (project / "a.py").read_text() == "edited by hand\n"
