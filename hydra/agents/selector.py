"""
Candidate Selector
==================
Finds, scores and picks injection candidates for one fix event.

Pipeline:
    1. collect_candidate_files  — sorted walk of the scope directory
    2. score_candidates         — every template × every point in every parsable file
    3. pick_candidates          — two-pass selection (diversity, then fill)

Failure Policy:
    - Unreadable file        → skipped (READ_FAILURE)
    - Unparsable file        → skipped (PARSE_FAILURE)
    - Template raises        → that template/file pair skipped (TEMPLATE_FAILURE)
    - Fixed file unparsable  → relatedness falls back to directory proximity only

Determinism:
    Files are walked in sorted order, templates come from a static ordered
    catalog and points are returned in source order. Sorting by score is
    stable, so ties keep that discovery order and repeated runs over the
    same inputs produce the same ranking.
"""
import logging
import os
from typing import Iterable, List, Mapping, Optional, Sequence, Set, Tuple

from hydra.core.errors import ParseError, UnsupportedLanguageError
from hydra.languages.registry import detect_language, get_adapter
from hydra.models.fix_event import FixEvent
from hydra.models.injection import InjectionCandidate
from hydra.scoring.candidate_scorer import (
    category_fit,
    composite_score,
    describe_score,
    relatedness,
    severity_fit,
)
from hydra.templates.base import BugTemplate
from hydra.utils.ignore_rules import should_skip_dir
from hydra.utils.path_utils import read_source
from hydra.utils.skip_reasons import PARSE_FAILURE, READ_FAILURE, TEMPLATE_FAILURE

logger = logging.getLogger(__name__)

SkipLog = List[Tuple[str, str]]


def _record(skipped: Optional[SkipLog], file_path: str, reason: str) -> None:
    if skipped is not None:
        skipped.append((file_path, reason))


# ---------------------------------------------------------------------------
# Candidate files
# ---------------------------------------------------------------------------
def collect_candidate_files(
    scope_dir: str,
    fixed_file: str,
    extensions: Iterable[str],
    skip_dirs: Iterable[str] = (),
) -> List[str]:
    """
    Sorted absolute paths of every supported source file under ``scope_dir``.

    The fixed file is excluded unless it is the only file found, in which
    case self-injection is allowed.
    """
    exts = {e.lower() for e in extensions}
    extra_skips = set(skip_dirs)
    found: List[str] = []

    for dirpath, dirnames, filenames in os.walk(scope_dir):
        dirnames[:] = sorted(d for d in dirnames if not should_skip_dir(d, extra_skips))
        for name in sorted(filenames):
            if os.path.splitext(name)[1].lower() in exts:
                found.append(os.path.abspath(os.path.join(dirpath, name)))

    fixed_abs = os.path.abspath(fixed_file) if fixed_file else ""
    others = [f for f in found if f != fixed_abs]
    if not others and fixed_abs in found:
        logger.info("Only the fixed file is available; allowing self-injection into %s", fixed_abs)
        return [fixed_abs]
    return others


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------
def _fixed_file_imports(fixed_file: str) -> List[str]:
    language = detect_language(fixed_file) if fixed_file else None
    if language is None:
        return []
    try:
        adapter = get_adapter(language)
        parsed = adapter.parse(read_source(fixed_file), fixed_file)
        return adapter.extract_imports(parsed)
    except (OSError, UnicodeDecodeError, ParseError, UnsupportedLanguageError) as e:
        logger.info("Fixed file %s not parsed (%s); using directory proximity only", fixed_file, e)
        return []


def score_candidates(
    files: Sequence[str],
    fix: FixEvent,
    templates_by_language: Mapping[str, Sequence[BugTemplate]],
    severity: int,
    fixed_file: str = "",
    skipped: Optional[SkipLog] = None,
) -> List[InjectionCandidate]:
    """
    Score every injection point every template finds in ``files``.

    Returns candidates sorted by descending score (stable for ties).
    """
    fixed_path = fixed_file or fix.file
    fixed_imports = _fixed_file_imports(fixed_path)
    candidates: List[InjectionCandidate] = []

    for file_path in files:
        language = detect_language(file_path)
        templates = templates_by_language.get(language or "", ())
        if not templates:
            continue
        adapter = get_adapter(language)

        try:
            source = read_source(file_path)
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("Skipping unreadable %s: %s", file_path, e)
            _record(skipped, file_path, READ_FAILURE)
            continue

        try:
            parsed = adapter.parse(source, file_path)
        except ParseError as e:
            logger.debug("Skipping unparsable %s: %s", file_path, e)
            _record(skipped, file_path, PARSE_FAILURE)
            continue

        rel_score = relatedness(file_path, fixed_path, adapter.extract_imports(parsed), fixed_imports)

        for template in templates:
            try:
                points = template.find_injection_points(parsed, file_path)
            except Exception as e:
                logger.warning("Template %s failed on %s: %s", template.name, file_path, e)
                _record(skipped, file_path, TEMPLATE_FAILURE)
                continue
            if not points:
                continue

            cat_score = category_fit(template.category, fix.file, fix.description)
            sev_score = severity_fit(template.category, severity)
            score = composite_score(rel_score, cat_score, sev_score)
            logger.debug(
                "%s x%d in %s scored %s",
                template.name, len(points), file_path,
                describe_score(rel_score, cat_score, sev_score, score),
            )

            for point in points:
                candidates.append(InjectionCandidate(
                    file=file_path,
                    template=template,
                    point=point,
                    score=score,
                    adapter=adapter,
                    parsed=parsed,
                    original_code=source,
                ))

    return sorted(candidates, key=lambda c: -c.score)


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------
def pick_candidates(ranked: Sequence[InjectionCandidate], ratio: int) -> List[InjectionCandidate]:
    """
    Two-pass pick of up to ``ratio`` candidates.

    Diversity pass: best candidate of each distinct file, in rank order.
    Fill pass: remaining slots from the ranked list regardless of file.
    """
    selected: List[InjectionCandidate] = []
    taken: Set[int] = set()
    files_used: Set[str] = set()

    for i, candidate in enumerate(ranked):
        if len(selected) >= ratio:
            break
        if candidate.file in files_used:
            continue
        selected.append(candidate)
        taken.add(i)
        files_used.add(candidate.file)

    for i, candidate in enumerate(ranked):
        if len(selected) >= ratio:
            break
        if i in taken:
            continue
        selected.append(candidate)
        taken.add(i)

    return selected
