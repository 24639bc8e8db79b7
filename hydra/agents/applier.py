"""
Injection Applier
=================
Applies one selected candidate to disk and produces its ``InjectionResult``.

Steps (any failure returns None and records a skip reason):
    1. template.inject(parsed, point)          → INJECT_FAILURE
    2. adapter.generate(mutated, original)      → GENERATE_FAILURE
    3. generated text identical to original    → NO_OP
    4. re-parse generated text with the adapter → INVALID_OUTPUT
    5. write file                              → WRITE_FAILURE
    6. diff, severity from category, describe (falls back to template.description)

Step 4 guarantees every file the engine writes still parses for its adapter.

Within one batch a file may be selected more than once. Its second
candidate was scored against the pre-batch text, so ``relocate`` re-reads
the file, re-parses it and re-finds the point by matched context; the
result's ``original_code`` is then the state after the previous injection.
"""
import logging
from typing import List, Optional, Tuple

from hydra.core.errors import ParseError
from hydra.models.injection import InjectionCandidate, InjectionResult
from hydra.scoring.candidate_scorer import category_severity
from hydra.utils.diff import count_changed_lines, generate_diff
from hydra.utils.path_utils import read_source, to_relative, write_source
from hydra.utils.skip_reasons import (
    GENERATE_FAILURE,
    INJECT_FAILURE,
    INVALID_OUTPUT,
    NO_OP,
    READ_FAILURE,
    STALE_POINT,
    TEMPLATE_FAILURE,
    WRITE_FAILURE,
)

logger = logging.getLogger(__name__)

SkipLog = List[Tuple[str, str]]


def _skip(skipped: Optional[SkipLog], candidate: InjectionCandidate, reason: str) -> None:
    if skipped is not None:
        skipped.append((candidate.file, reason))


def describe_point(candidate: InjectionCandidate) -> str:
    """Template's description of the point, or its static description."""
    template = candidate.template
    try:
        text = template.describe(candidate.point)
    except Exception as e:
        logger.debug("describe() failed for %s: %s", template.name, e)
        text = ""
    return text or template.description


def relocate(candidate: InjectionCandidate, skipped: Optional[SkipLog] = None) -> Optional[InjectionCandidate]:
    """
    Re-anchor a candidate on the file's CURRENT contents.

    Picks the point with the same context nearest the original line.
    """
    adapter, template = candidate.adapter, candidate.template
    try:
        source = read_source(candidate.file)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Cannot re-read %s: %s", candidate.file, e)
        _skip(skipped, candidate, READ_FAILURE)
        return None

    try:
        parsed = adapter.parse(source, candidate.file)
        points = template.find_injection_points(parsed, candidate.file)
    except Exception as e:
        logger.warning("Cannot re-scan %s with %s: %s", candidate.file, template.name, e)
        _skip(skipped, candidate, TEMPLATE_FAILURE)
        return None

    same = [p for p in points if p.context == candidate.point.context]
    if not same:
        logger.info(
            "Point '%s' (line %d) in %s vanished after an earlier injection",
            candidate.point.context, candidate.point.line, candidate.file,
        )
        _skip(skipped, candidate, STALE_POINT)
        return None

    point = min(same, key=lambda p: abs(p.line - candidate.point.line))
    return InjectionCandidate(
        file=candidate.file,
        template=template,
        point=point,
        score=candidate.score,
        adapter=adapter,
        parsed=parsed,
        original_code=source,
    )


def apply_injection(
    candidate: InjectionCandidate,
    root: str,
    skipped: Optional[SkipLog] = None,
) -> Optional[InjectionResult]:
    """
    Mutate, validate, write and describe one candidate.

    Parameters
    ----------
    candidate : InjectionCandidate
        Candidate carrying its adapter, parsed value and original source.
    root : str
        Project root; the result's ``file`` and diff headers are relative to it.
    skipped : list, optional
        Receives ``(file, reason)`` when the candidate is dropped.

    Returns
    -------
    InjectionResult or None
    """
    template, adapter, point = candidate.template, candidate.adapter, candidate.point
    original = candidate.original_code

    try:
        mutated = template.inject(candidate.parsed, point)
    except Exception as e:
        logger.warning("%s inject failed at %s:%d: %s", template.name, candidate.file, point.line, e)
        _skip(skipped, candidate, INJECT_FAILURE)
        return None

    try:
        injected = adapter.generate(mutated, original)
    except Exception as e:
        logger.warning("Code generation failed for %s: %s", candidate.file, e)
        _skip(skipped, candidate, GENERATE_FAILURE)
        return None

    if injected == original:
        logger.debug("%s produced no change at %s:%d", template.name, candidate.file, point.line)
        _skip(skipped, candidate, NO_OP)
        return None

    try:
        adapter.parse(injected, candidate.file)
    except ParseError as e:
        logger.warning("%s produced invalid %s source: %s", template.name, adapter.name, e)
        _skip(skipped, candidate, INVALID_OUTPUT)
        return None

    try:
        write_source(candidate.file, injected)
    except OSError as e:
        logger.error("Cannot write %s: %s", candidate.file, e)
        _skip(skipped, candidate, WRITE_FAILURE)
        return None

    rel_path = to_relative(candidate.file, root)
    diff = generate_diff(original, injected, rel_path)
    logger.info(
        "Injected %s into %s:%d (%d lines changed)",
        template.name, rel_path, point.line, count_changed_lines(diff),
    )

    return InjectionResult(
        file=rel_path,
        line=point.line,
        category=template.category,
        severity=category_severity(template.category),
        description=describe_point(candidate),
        original_code=original,
        injected_code=injected,
        diff=diff,
        template=template.name,
    )
