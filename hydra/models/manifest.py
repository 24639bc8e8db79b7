"""
Manifest Models
===============
Pydantic models for the durable session ledger (``.hydra-manifest.json``).

The JSON document uses camelCase keys:

    {
      "version": "1.0.0",
      "created": "<ISO timestamp>",
      "branchId": "hydra/session-1a2b3c4d",
      "realFixes":   [RealFix, ...],
      "injectedBugs": [InjectedBug, ...],
      "stats": ManifestStats
    }

InjectedBug lifecycle:
    Injected   — discovered_by is None
    Discovered — discovered_by = reviewer id, discovered_at = timestamp

``original_code`` is the ENTIRE file content captured immediately before that
specific mutation. It is the only thing revert relies on.

``sequence`` is a monotonic injection counter. For a file mutated N times the
Nth bug's snapshot is the state after injection N-1, so full reversal must run
by descending sequence (LIFO). Storing it makes the order explicit instead of
relying on array position.

``stats`` is always recomputed from the arrays by ``compute_stats`` — never
mutated on its own.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from hydra.core.constants import MANIFEST_VERSION


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RealFix(_CamelModel):
    id: str
    file: str
    line: int = 0
    description: str = ""
    diff: str = ""


class InjectedBug(_CamelModel):
    id: str
    sequence: int = 0
    parent_fix_id: Optional[str] = None
    file: str
    line: int = 0
    category: str = ""
    severity: int = 3
    description: str = ""
    template: str = ""
    original_code: Optional[str] = None
    diff: str = ""
    discovered_by: Optional[str] = None
    discovered_at: Optional[str] = None
    reverted_at: Optional[str] = None

    @property
    def is_discovered(self) -> bool:
        return self.discovered_by is not None


class ManifestStats(_CamelModel):
    total_real_fixes: int = 0
    total_injected: int = 0
    discovered: int = 0
    undiscovered: int = 0
    reverted: int = 0


class Manifest(_CamelModel):
    version: str = MANIFEST_VERSION
    created: str
    branch_id: str = ""
    real_fixes: List[RealFix] = []
    injected_bugs: List[InjectedBug] = []
    stats: ManifestStats = ManifestStats()


def compute_stats(real_fixes: List[RealFix], injected_bugs: List[InjectedBug]) -> ManifestStats:
    """Derive stats purely from the two ledgers."""
    discovered = sum(1 for b in injected_bugs if b.is_discovered)
    reverted = sum(1 for b in injected_bugs if b.reverted_at is not None)
    return ManifestStats(
        total_real_fixes=len(real_fixes),
        total_injected=len(injected_bugs),
        discovered=discovered,
        undiscovered=len(injected_bugs) - discovered,
        reverted=reverted,
    )
