"""
Candidate Scorer
================
Composite score for one (file, template, point) candidate:

    score = 0.40 · relatedness + 0.35 · category_fit + 0.25 · severity_fit

Relatedness (0–1, capped):
    +0.4  candidate lives in the fixed file's directory
    +0.2  otherwise, candidate's directory shares the fixed file's parent
    +0.4  any candidate import's module tail equals the fixed file's stem
    +min(0.2, 0.05 × shared external imports)

Category fit: keyword heuristics over "<fix file> <fix description>".
``logic`` / ``correctness`` are context independent (0.5).

Severity fit: max(0, 1 − 0.25 · |category severity − requested severity|).

Every term is a pure function of its inputs, so ranking is deterministic.
"""
import os
import re
from typing import Optional, Pattern, Sequence, Tuple

from hydra.core.constants import (
    CATEGORY_SEVERITY,
    DEFAULT_CATEGORY_SEVERITY,
    WEIGHT_CATEGORY_FIT,
    WEIGHT_RELATEDNESS,
    WEIGHT_SEVERITY_FIT,
)
from hydra.languages.registry import all_supported_extensions

# ---------------------------------------------------------------------------
# Category keyword table: category → (pattern, score on match, score otherwise)
# ---------------------------------------------------------------------------
_CATEGORY_KEYWORDS: dict[str, Tuple[Pattern[str], float, float]] = {
    "security": (
        re.compile(r"auth|token|sanitiz|csrf|cors|password|secret|inject|path|permission"),
        0.9, 0.2,
    ),
    "concurrency": (
        re.compile(r"lock|mutex|race|thread|goroutine|concurren|deadlock|sync"),
        0.8, 0.3,
    ),
    "async": (
        re.compile(r"async|await|promise|fetch|api|request|callback"),
        0.8, 0.3,
    ),
    "null-safety": (
        re.compile(r"null|none|nil|undefined|optional|safe"),
        0.8, 0.4,
    ),
    "resource": (
        re.compile(r"close|leak|timeout|file|connection|socket|stream|context"),
        0.8, 0.3,
    ),
    "error-handling": (
        re.compile(r"error|err\b|exception|catch|except|raise|panic|fail"),
        0.8, 0.3,
    ),
    "database": (
        re.compile(r"db|database|sql|query|transaction|pool"),
        0.8, 0.3,
    ),
    "react": (
        re.compile(r"react|hook|component|jsx|tsx|render|state"),
        0.8, 0.2,
    ),
}
_CONTEXT_FREE_CATEGORIES = {"logic", "correctness"}
_CONTEXT_FREE_SCORE = 0.5
_UNKNOWN_CATEGORY_SCORE = 0.3


# ---------------------------------------------------------------------------
# Relatedness
# ---------------------------------------------------------------------------
def module_tail(specifier: str) -> str:
    """
    Last component of an import specifier, lowercased.

    "./auth.js" → "auth", "app.services.auth" → "auth", "github.com/x/auth" → "auth"
    """
    tail = specifier.rsplit("/", 1)[-1]
    base, ext = os.path.splitext(tail)
    if ext.lower() in all_supported_extensions():
        tail = base
    return tail.rsplit(".", 1)[-1].lower()


def file_stem(path: str) -> str:
    return os.path.splitext(os.path.basename(path))[0].lower()


def relatedness(
    candidate_file: str,
    fixed_file: str,
    candidate_imports: Sequence[str],
    fixed_imports: Sequence[str],
) -> float:
    score = 0.0

    candidate_dir = os.path.dirname(os.path.abspath(candidate_file))
    fixed_dir = os.path.dirname(os.path.abspath(fixed_file))
    if candidate_dir == fixed_dir:
        score += 0.4
    elif os.path.dirname(candidate_dir) == os.path.dirname(fixed_dir):
        score += 0.2

    stem = file_stem(fixed_file)
    if stem and any(module_tail(imp) == stem for imp in candidate_imports):
        score += 0.4

    fixed_external = {imp for imp in fixed_imports if not imp.startswith(".")}
    shared = [imp for imp in candidate_imports if not imp.startswith(".") and imp in fixed_external]
    score += min(0.2, 0.05 * len(shared))

    return min(score, 1.0)


# ---------------------------------------------------------------------------
# Category and severity fit
# ---------------------------------------------------------------------------
def category_fit(category: str, fix_file: str, fix_description: str) -> float:
    if category in _CONTEXT_FREE_CATEGORIES:
        return _CONTEXT_FREE_SCORE
    entry = _CATEGORY_KEYWORDS.get(category)
    if entry is None:
        return _UNKNOWN_CATEGORY_SCORE
    pattern, hit, miss = entry
    context = f"{fix_file or ''} {fix_description or ''}".lower()
    return hit if pattern.search(context) else miss


def category_severity(category: str) -> int:
    return CATEGORY_SEVERITY.get(category, DEFAULT_CATEGORY_SEVERITY)


def severity_fit(category: str, requested_severity: int) -> float:
    distance = abs(category_severity(category) - requested_severity)
    return max(0.0, 1.0 - 0.25 * distance)


def composite_score(relatedness_score: float, category_score: float, severity_score: float) -> float:
    return (
        WEIGHT_RELATEDNESS * relatedness_score
        + WEIGHT_CATEGORY_FIT * category_score
        + WEIGHT_SEVERITY_FIT * severity_score
    )


def describe_score(
    relatedness_score: float,
    category_score: float,
    severity_score: float,
    total: Optional[float] = None,
) -> str:
    total = composite_score(relatedness_score, category_score, severity_score) if total is None else total
    return (
        f"{total:.3f} (rel={relatedness_score:.2f} cat={category_score:.2f} "
        f"sev={severity_score:.2f})"
    )
