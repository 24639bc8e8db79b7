"""
Injection Agent
===============
Entry point of the engine: one fix event in, a list of applied
``InjectionResult`` out.

Flow:
    validate options → resolve scope → resolve languages → load templates
    → collect files → score → pick (diversity, fill) → apply in pick order

Language resolution:
    1. ``options.language`` override
    2. the fixed file's extension
    3. every supported language

Only structural problems raise (``InvalidRequestError``, which covers a scope
outside the project root, ``UnsupportedLanguageError``, ``ScopeNotFoundError``).
Everything local to a file, template or candidate is logged and listed in
``skipped``; returning fewer results than ``ratio`` is a normal outcome.
"""
import logging
import os
from typing import Any, Dict, List, Mapping, Optional, Sequence, Set, Tuple, Union

from pydantic import ValidationError

from hydra.agents.applier import apply_injection, relocate
from hydra.agents.selector import collect_candidate_files, pick_candidates, score_candidates
from hydra.core.config import project_root
from hydra.core.errors import InvalidRequestError, ScopeNotFoundError
from hydra.languages.registry import detect_language, get_adapter, supported_languages
from hydra.models.fix_event import FixEvent
from hydra.models.injection import InjectionOptions, InjectionResult
from hydra.templates.base import BugTemplate
from hydra.templates.registry import get_templates
from hydra.utils.path_utils import resolve_in_root

logger = logging.getLogger(__name__)


def _validate_options(options: Union[InjectionOptions, Mapping[str, Any], None]) -> InjectionOptions:
    if isinstance(options, InjectionOptions):
        return options
    try:
        return InjectionOptions.model_validate(dict(options or {}))
    except ValidationError as e:
        raise InvalidRequestError(f"Invalid injection options: {e.errors()[0]['msg']}") from e


def validate_fix_event(fix: Union[FixEvent, Mapping[str, Any]]) -> FixEvent:
    try:
        event = fix if isinstance(fix, FixEvent) else FixEvent.model_validate(dict(fix))
    except (ValidationError, TypeError, ValueError) as e:
        raise InvalidRequestError(f"Invalid fix event: {e}") from e
    if not event.file.strip():
        raise InvalidRequestError("Fix event has no file")
    return event


class InjectionAgent:
    """
    Runs one injection batch against a project tree.

    Attributes
    ----------
    options : InjectionOptions
    root : str
        Absolute project root; result paths are relative to it.
    skipped : list of (file, reason)
        Candidates and files dropped during the last ``inject`` call.
    """

    def __init__(
        self,
        options: Union[InjectionOptions, Mapping[str, Any], None] = None,
        root: Optional[str] = None,
    ):
        self.options = _validate_options(options)
        self.root = os.path.abspath(root) if root else project_root()
        self.skipped: List[Tuple[str, str]] = []

    # -----------------------------------------------------------------------
    # Resolution helpers
    # -----------------------------------------------------------------------
    def _abs(self, path: str) -> str:
        return path if os.path.isabs(path) else os.path.join(self.root, path)

    def scope_dir(self) -> str:
        # Injected files must stay revertable through root-relative manifest paths
        try:
            scope = resolve_in_root(self.options.scope or ".", self.root)
        except ValueError as e:
            raise InvalidRequestError(f"Scope is outside the project root: {self.options.scope}") from e
        if not os.path.isdir(scope):
            raise ScopeNotFoundError(f"Scope directory not found: {self.options.scope}")
        return scope

    def resolve_languages(self, fix: FixEvent) -> List[str]:
        if self.options.language:
            get_adapter(self.options.language)  # raises UnsupportedLanguageError
            return [self.options.language.lower()]
        detected = detect_language(fix.file)
        if detected:
            return [detected]
        return supported_languages()

    # -----------------------------------------------------------------------
    # Run
    # -----------------------------------------------------------------------
    def inject(self, fix: Union[FixEvent, Mapping[str, Any]]) -> List[InjectionResult]:
        event = validate_fix_event(fix)
        scope = self.scope_dir()
        languages = self.resolve_languages(event)
        self.skipped = []

        templates_by_language: Dict[str, Sequence[BugTemplate]] = {}
        extensions: Set[str] = set()
        skip_dirs: Set[str] = set()
        for language in languages:
            templates = get_templates(language)
            if not templates:
                continue
            adapter = get_adapter(language)
            templates_by_language[language] = templates
            extensions |= adapter.extensions
            skip_dirs |= adapter.skip_dirs

        if not templates_by_language:
            logger.info("No templates registered for %s", ", ".join(languages))
            return []

        fixed_file = self._abs(event.file)
        files = collect_candidate_files(scope, fixed_file, extensions, skip_dirs)
        logger.info(
            "Scanning %d candidate file(s) in %s for %s",
            len(files), scope, "/".join(templates_by_language),
        )

        ranked = score_candidates(
            files, event, templates_by_language, self.options.severity,
            fixed_file=fixed_file, skipped=self.skipped,
        )
        selected = pick_candidates(ranked, self.options.ratio)
        logger.info("%d candidate(s) ranked, %d selected", len(ranked), len(selected))

        results: List[InjectionResult] = []
        touched: Set[str] = set()
        for candidate in selected:
            if candidate.file in touched:
                candidate = relocate(candidate, self.skipped)
                if candidate is None:
                    continue
            result = apply_injection(candidate, self.root, self.skipped)
            if result is not None:
                results.append(result)
                touched.add(candidate.file)

        if len(results) < self.options.ratio:
            logger.info("Injected %d of %d requested bug(s)", len(results), self.options.ratio)
        return results


def inject_bugs(
    fix: Union[FixEvent, Mapping[str, Any]],
    options: Union[InjectionOptions, Mapping[str, Any], None] = None,
    root: Optional[str] = None,
) -> List[InjectionResult]:
    """Run one injection batch. See ``InjectionAgent``."""
    return InjectionAgent(options, root).inject(fix)
