"""
Hydra Session
=============
Ties the engine to the manifest for one review session.

    start(branch_id)                  — create the manifest (or reuse the active one)
    record_fix_and_inject(fix, opts)  — add a RealFix, inject, append InjectedBugs in order
    mark_found(bug_id, reviewer)      — Injected → Discovered
    purge()                           — revert every injected bug, newest first
    status()                          — summary of the active session, or inactive

The version-control collaborator is expected to have created an isolated
branch before ``start`` and to commit afterwards; the session only reads and
writes file contents and the manifest.

Failures local to one file, template or candidate never leave this class as
exceptions. Structural problems (invalid options, missing scope, unknown
bug id, no active session) do.
"""
import logging
import os
from typing import Any, Dict, List, Mapping, Optional, Union

from hydra.agents.injection_agent import InjectionAgent, validate_fix_event
from hydra.core.config import manifest_path, project_root
from hydra.core.errors import NoActiveSessionError
from hydra.models.fix_event import FixEvent
from hydra.models.injection import InjectionOptions
from hydra.models.manifest import InjectedBug, Manifest, compute_stats
from hydra.services.manifest_store import ManifestStore
from hydra.services.reverter import Reverter, RevertSummary
from hydra.utils.path_utils import to_relative

logger = logging.getLogger(__name__)


class HydraSession:
    def __init__(self, root: Optional[str] = None, store: Optional[ManifestStore] = None):
        self.root = os.path.abspath(root) if root else project_root()
        self.store = store or ManifestStore(manifest_path(self.root))

    def _require(self) -> Manifest:
        manifest = self.store.load()
        if manifest is None:
            raise NoActiveSessionError()
        return manifest

    def start(self, branch_id: str = "") -> Manifest:
        manifest = self.store.load()
        if manifest is not None:
            logger.info("Reusing active session %s", manifest.branch_id)
            return manifest
        return self.store.create(branch_id)

    def record_fix_and_inject(
        self,
        fix: Union[FixEvent, Mapping[str, Any]],
        options: Union[InjectionOptions, Mapping[str, Any], None] = None,
    ) -> List[InjectedBug]:
        """
        Record one real fix and inject bugs related to it.

        The RealFix is written before injection starts, and each InjectedBug
        is written as soon as it is appended, so a crash mid-batch leaves a
        manifest that matches the files on disk.
        """
        agent = InjectionAgent(options, self.root)
        event = validate_fix_event(fix)
        # Structural errors raise before anything is recorded
        agent.scope_dir()
        agent.resolve_languages(event)
        manifest = self.start()

        real_fix = self.store.add_real_fix(
            manifest,
            file=to_relative(os.path.join(self.root, event.file), self.root),
            description=event.description,
            line=event.line,
            diff=event.diff,
        )

        results = agent.inject(event)
        for file_path, reason in agent.skipped:
            logger.debug("Skipped %s: %s", file_path, reason)

        bugs = [self.store.add_injected_bug(manifest, real_fix.id, r) for r in results]
        logger.info(
            "%s: injected %d bug(s) (%d skip(s))",
            real_fix.id, len(bugs), len(agent.skipped),
        )
        return bugs

    def mark_found(self, bug_id: str, reviewer: str = "anonymous") -> InjectedBug:
        manifest = self._require()
        return self.store.mark_discovered(manifest, bug_id, reviewer)

    def purge(self) -> RevertSummary:
        manifest = self._require()
        summary = Reverter(self.root, self.store).revert_all(manifest)
        for error in summary.errors:
            logger.warning("Purge: %s", error)
        logger.info("Purge reverted %d bug(s)", summary.reverted)
        return summary

    def status(self) -> Dict[str, Any]:
        """Stats are derived from the ledgers; a stale stored block is ignored."""
        manifest = self.store.load()
        if manifest is None:
            return {"active": False}
        return {
            "active": True,
            "branchId": manifest.branch_id,
            "created": manifest.created,
            "stats": compute_stats(manifest.real_fixes, manifest.injected_bugs).model_dump(by_alias=True),
            "undiscovered": [b.id for b in self.store.undiscovered(manifest)],
        }
