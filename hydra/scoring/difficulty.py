"""
Difficulty Rating
=================
How hard an injected bug is for a reviewer to spot, on a 1–5 scale.

    rating = clamp(baseline + adjustment, 1, 5)

Baseline comes from the template name, then the category, then 2.
Adjustment (clamped to ±1):
    +1  line > 200 (deep in a large file)
    +1  severity ≤ 1 (silent, low-impact failure)
    -1  description mentions an obvious footgun (crash, undefined, null, throw, error)
"""
from typing import Union

from hydra.models.injection import InjectionResult
from hydra.models.manifest import InjectedBug

_TEMPLATE_BASELINES: dict[str, int] = {
    # shared
    "off-by-one": 2,
    "logic-inversion": 3,
    "negation-strip": 3,
    # python
    "boundary-flip": 3,
    "none-deref": 2,
    "error-swallow": 3,
    "http-timeout-strip": 3,
    "path-traversal": 4,
    "lock-strip": 4,
    # go
    "mutex-unlock-strip": 4,
    "err-check-inversion": 3,
    "defer-close-strip": 3,
    "context-cancel-strip": 4,
    # javascript
    "strict-equality-loosen": 2,
    "nullish-to-or": 4,
    "await-strip": 4,
    "cors-wildcard": 3,
}

_CATEGORY_BASELINES: dict[str, int] = {
    "security": 4,
    "concurrency": 4,
    "async": 4,
    "resource": 3,
    "error-handling": 3,
    "database": 3,
    "react": 3,
    "null-safety": 2,
    "logic": 2,
    "correctness": 3,
}

_DEFAULT_BASELINE = 2

DIFFICULTY_LABELS: dict[int, str] = {
    1: "Obvious",
    2: "Easy",
    3: "Moderate",
    4: "Tricky",
    5: "Sneaky",
}

_OBVIOUS_KEYWORDS = ("crash", "undefined", "null", "throw", "error")


def _clamp(value: int, low: int, high: int) -> int:
    return min(max(value, low), high)


def baseline(bug: Union[InjectedBug, InjectionResult]) -> int:
    if bug.template in _TEMPLATE_BASELINES:
        return _TEMPLATE_BASELINES[bug.template]
    return _CATEGORY_BASELINES.get(bug.category, _DEFAULT_BASELINE)


def context_adjustment(bug: Union[InjectedBug, InjectionResult]) -> int:
    adjustment = 0
    if bug.line > 200:
        adjustment += 1
    if bug.severity <= 1:
        adjustment += 1
    description = (bug.description or "").lower()
    if any(kw in description for kw in _OBVIOUS_KEYWORDS):
        adjustment -= 1
    return _clamp(adjustment, -1, 1)


def rate_difficulty(bug: Union[InjectedBug, InjectionResult]) -> int:
    return _clamp(baseline(bug) + context_adjustment(bug), 1, 5)


def difficulty_label(score: int) -> str:
    return DIFFICULTY_LABELS.get(score, "Unknown")


def difficulty_stars(score: int) -> str:
    filled = _clamp(score, 1, 5)
    return "★" * filled + "☆" * (5 - filled)
