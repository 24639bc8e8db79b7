"""
Manifest Store
==============
Write-through persistence for the session manifest.

Every mutating call (fix added, bug added, bug discovered, bug reverted,
stats recalculated) rewrites the whole JSON document before returning, so a
crash loses at most the transition in progress. There is exactly one writer
per manifest: one session, one process.

Absent or unreadable manifests are not errors: ``load()`` returns None,
meaning "no active session".

Ids:
    real fixes    fix-001, fix-002, ...
    injected bugs hydra-001, hydra-002, ...
"""
import json
import logging
import os
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import ValidationError

from hydra.core.constants import BUG_ID_PREFIX, FIX_ID_PREFIX, ID_WIDTH
from hydra.core.errors import BugNotFoundError
from hydra.models.injection import InjectionResult
from hydra.models.manifest import InjectedBug, Manifest, RealFix, compute_stats

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _next_id(prefix: str, existing: int) -> str:
    return f"{prefix}-{str(existing + 1).zfill(ID_WIDTH)}"


def _new_branch_id() -> str:
    return f"hydra/session-{uuid.uuid4().hex[:8]}"


class ManifestStore:
    """
    Loads and saves a single manifest file.

    Usage:
        store = ManifestStore("/repo/.hydra-manifest.json")
        manifest = store.load() or store.create()
        fix = store.add_real_fix(manifest, file="src/auth.py", description="...")
        store.add_injected_bug(manifest, fix.id, result)
    """

    def __init__(self, path: str) -> None:
        self.path = os.path.abspath(path)

    # -----------------------------------------------------------------------
    # Lifecycle
    # -----------------------------------------------------------------------
    def exists(self) -> bool:
        return os.path.isfile(self.path)

    def load(self) -> Optional[Manifest]:
        if not self.exists():
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return Manifest.model_validate(data)
        except (OSError, ValueError, ValidationError) as e:
            logger.warning("Manifest %s is unreadable, treating as no session: %s", self.path, e)
            return None

    def create(self, branch_id: str = "") -> Manifest:
        manifest = Manifest(created=_now(), branch_id=branch_id or _new_branch_id())
        self.save(manifest)
        logger.info("Created manifest %s for branch %s", self.path, manifest.branch_id)
        return manifest

    def save(self, manifest: Manifest) -> None:
        data = manifest.model_dump(by_alias=True, mode="json")
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    def delete(self) -> bool:
        if not self.exists():
            return False
        os.remove(self.path)
        logger.info("Deleted manifest %s", self.path)
        return True

    # -----------------------------------------------------------------------
    # Mutations (each one writes through)
    # -----------------------------------------------------------------------
    def update_stats(self, manifest: Manifest) -> Manifest:
        manifest.stats = compute_stats(manifest.real_fixes, manifest.injected_bugs)
        self.save(manifest)
        return manifest

    def add_real_fix(
        self,
        manifest: Manifest,
        file: str,
        description: str = "",
        line: int = 0,
        diff: str = "",
    ) -> RealFix:
        fix = RealFix(
            id=_next_id(FIX_ID_PREFIX, len(manifest.real_fixes)),
            file=file,
            line=line,
            description=description,
            diff=diff,
        )
        manifest.real_fixes.append(fix)
        self.update_stats(manifest)
        return fix

    def add_injected_bug(
        self,
        manifest: Manifest,
        parent_fix_id: Optional[str],
        result: InjectionResult,
    ) -> InjectedBug:
        sequence = max((b.sequence for b in manifest.injected_bugs), default=0) + 1
        bug = InjectedBug(
            id=_next_id(BUG_ID_PREFIX, len(manifest.injected_bugs)),
            sequence=sequence,
            parent_fix_id=parent_fix_id,
            file=result.file,
            line=result.line,
            category=result.category,
            severity=result.severity,
            description=result.description,
            template=result.template,
            original_code=result.original_code,
            diff=result.diff,
        )
        manifest.injected_bugs.append(bug)
        self.update_stats(manifest)
        return bug

    def mark_discovered(self, manifest: Manifest, bug_id: str, reviewer: str = "anonymous") -> InjectedBug:
        bug = self.get_bug(manifest, bug_id)
        if bug.is_discovered:
            logger.warning(
                "Bug %s was already marked found by %s at %s; overwriting with %s",
                bug_id, bug.discovered_by, bug.discovered_at, reviewer,
            )
        bug.discovered_by = reviewer
        bug.discovered_at = _now()
        self.update_stats(manifest)
        return bug

    def mark_reverted(self, manifest: Manifest, bug_id: str) -> InjectedBug:
        bug = self.get_bug(manifest, bug_id)
        bug.reverted_at = _now()
        self.update_stats(manifest)
        return bug

    # -----------------------------------------------------------------------
    # Queries
    # -----------------------------------------------------------------------
    @staticmethod
    def get_bug(manifest: Manifest, bug_id: str) -> InjectedBug:
        for bug in manifest.injected_bugs:
            if bug.id == bug_id:
                return bug
        raise BugNotFoundError(bug_id)

    @staticmethod
    def undiscovered(manifest: Manifest) -> List[InjectedBug]:
        return [b for b in manifest.injected_bugs if not b.is_discovered]
