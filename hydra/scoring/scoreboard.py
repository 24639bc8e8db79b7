"""
Scoreboard
==========
Difficulty-weighted review score for a session.

Each injected bug is worth its difficulty rating; a reviewer earns those
points by finding it. Ratings are recomputed from the manifest every time,
so the scoreboard is a pure function of the manifest.
"""
from typing import Any, Dict

from hydra.models.manifest import Manifest, compute_stats
from hydra.scoring.difficulty import difficulty_label, difficulty_stars, rate_difficulty


def calculate_score(manifest: Manifest) -> Dict[str, int]:
    earned = 0
    total = 0
    for bug in manifest.injected_bugs:
        difficulty = rate_difficulty(bug)
        total += difficulty
        if bug.is_discovered:
            earned += difficulty
    percentage = 0 if total == 0 else round(earned / total * 100)
    return {"earned": earned, "total": total, "percentage": percentage}


def reviewer_stats(manifest: Manifest) -> Dict[str, Dict[str, Any]]:
    """reviewer → {found, score, bugs}"""
    stats: Dict[str, Dict[str, Any]] = {}
    for bug in manifest.injected_bugs:
        if not bug.is_discovered:
            continue
        entry = stats.setdefault(bug.discovered_by, {"found": 0, "score": 0, "bugs": []})
        entry["found"] += 1
        entry["score"] += rate_difficulty(bug)
        entry["bugs"].append(bug.id)
    return stats


def build_scoreboard(manifest: Manifest) -> Dict[str, Any]:
    breakdown = []
    for bug in manifest.injected_bugs:
        difficulty = rate_difficulty(bug)
        breakdown.append({
            "id": bug.id,
            "category": bug.category,
            "found": bug.is_discovered,
            "foundBy": bug.discovered_by,
            "difficulty": difficulty,
            "label": difficulty_label(difficulty),
            "stars": difficulty_stars(difficulty),
        })

    stats = compute_stats(manifest.real_fixes, manifest.injected_bugs)
    return {
        "session": manifest.branch_id,
        "summary": {
            "realFixes": stats.total_real_fixes,
            "injected": stats.total_injected,
            "found": stats.discovered,
        },
        "score": calculate_score(manifest),
        "reviewers": reviewer_stats(manifest),
        "bugs": breakdown,
    }
