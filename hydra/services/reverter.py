"""
Reverter
========
Restores files to their pre-injection snapshots recorded in the manifest.

Each InjectedBug stores the ENTIRE file content captured immediately before
its own mutation. For a file injected N times, the Nth snapshot is the state
after injection N-1, so reverts must run newest-first (descending
``sequence``). ``revert_all`` runs in that order. ``revert_single`` and
``revert_selected`` refuse a bug while a newer, un-reverted injection still
sits on top of it in the same file.

Real fixes are never touched. Per-bug failures (missing file, missing
snapshot, write error, path outside the project) are collected, never raised.
"""
import logging
import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Set

from hydra.core.config import project_root
from hydra.core.errors import BugNotFoundError
from hydra.models.manifest import InjectedBug, Manifest
from hydra.services.manifest_store import ManifestStore
from hydra.utils.path_utils import resolve_in_root, write_source

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RevertOutcome:
    success: bool
    error: str = ""


@dataclass
class RevertSummary:
    reverted: int = 0
    errors: List[str] = field(default_factory=list)


def _newest_first(bugs: Iterable[InjectedBug]) -> List[InjectedBug]:
    # Position breaks ties for manifests written before sequence numbers existed
    indexed = list(enumerate(bugs))
    indexed.sort(key=lambda pair: (pair[1].sequence, pair[0]), reverse=True)
    return [bug for _, bug in indexed]


class Reverter:
    def __init__(self, root: Optional[str] = None, store: Optional[ManifestStore] = None):
        self.root = os.path.abspath(root) if root else project_root()
        self.store = store

    # -----------------------------------------------------------------------
    # Single bug
    # -----------------------------------------------------------------------
    def _restore(self, bug: InjectedBug) -> RevertOutcome:
        if bug.original_code is None:
            return RevertOutcome(False, f'Bug "{bug.id}" has no originalCode stored; cannot revert.')
        try:
            abs_path = resolve_in_root(bug.file, self.root)
        except ValueError as e:
            return RevertOutcome(False, str(e))
        if not os.path.isfile(abs_path):
            return RevertOutcome(False, f"File not found: {abs_path}")
        try:
            write_source(abs_path, bug.original_code)
        except OSError as e:
            return RevertOutcome(False, f"Failed to write {abs_path}: {e}")
        logger.info("Reverted %s in %s", bug.id, bug.file)
        return RevertOutcome(True)

    def _record(self, manifest: Manifest, bug: InjectedBug) -> None:
        if self.store is not None:
            self.store.mark_reverted(manifest, bug.id)
        else:
            bug.reverted_at = datetime.now(timezone.utc).isoformat()

    @staticmethod
    def _blockers(manifest: Manifest, bug: InjectedBug, done: Iterable[str] = ()) -> List[str]:
        """Newer, un-reverted injections into the same file."""
        skip = set(done)
        return [
            b.id for b in manifest.injected_bugs
            if b.file == bug.file
            and b.sequence > bug.sequence
            and b.reverted_at is None
            and b.id not in skip
        ]

    @staticmethod
    def _refusal(manifest: Manifest, bug: InjectedBug, done: Iterable[str] = ()) -> str:
        if bug.reverted_at is not None:
            return f"Already reverted at {bug.reverted_at}."
        blockers = Reverter._blockers(manifest, bug, done)
        if blockers:
            return f"Newer injection(s) {', '.join(blockers)} in {bug.file} must be reverted first."
        return ""

    def revert_single(self, manifest: Manifest, bug_id: str) -> RevertOutcome:
        """Revert one bug; refused while a newer injection still sits on its file."""
        try:
            bug = ManifestStore.get_bug(manifest, bug_id)
        except BugNotFoundError as e:
            return RevertOutcome(False, str(e))
        refusal = self._refusal(manifest, bug)
        if refusal:
            return RevertOutcome(False, refusal)
        outcome = self._restore(bug)
        if outcome.success:
            self._record(manifest, bug)
        return outcome

    # -----------------------------------------------------------------------
    # Batches
    # -----------------------------------------------------------------------
    def revert_all(self, manifest: Manifest) -> RevertSummary:
        """Revert every not-yet-reverted injected bug, newest first."""
        summary = RevertSummary()
        pending = [b for b in manifest.injected_bugs if b.reverted_at is None]
        for bug in _newest_first(pending):
            outcome = self._restore(bug)
            if outcome.success:
                summary.reverted += 1
                self._record(manifest, bug)
            else:
                summary.errors.append(f"[{bug.id}] {outcome.error}")
        if summary.errors:
            logger.warning("Revert finished with %d error(s)", len(summary.errors))
        return summary

    def revert_selected(self, manifest: Manifest, bug_ids: Iterable[str]) -> RevertSummary:
        """
        Revert only ``bug_ids``, newest first.

        A bug is refused while its file still carries a newer injection that
        is neither already reverted nor reverted earlier in this call.
        """
        summary = RevertSummary()
        wanted = list(dict.fromkeys(bug_ids))
        selected: List[InjectedBug] = []
        for bug_id in wanted:
            try:
                selected.append(ManifestStore.get_bug(manifest, bug_id))
            except BugNotFoundError as e:
                summary.errors.append(f"[{bug_id}] {e}")

        done: Set[str] = set()
        for bug in _newest_first(selected):
            refusal = self._refusal(manifest, bug, done)
            if refusal:
                summary.errors.append(f"[{bug.id}] {refusal}")
                continue
            outcome = self._restore(bug)
            if outcome.success:
                summary.reverted += 1
                done.add(bug.id)
                self._record(manifest, bug)
            else:
                summary.errors.append(f"[{bug.id}] {outcome.error}")
        return summary
