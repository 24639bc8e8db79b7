"""
Template Registry
=================
Static language → template-catalog table.

Catalogs are plain modules exposing an ordered ``TEMPLATES`` tuple. A
catalog is imported the first time its language is requested and cached
for the process lifetime; nothing scans the filesystem. A language with no
catalog yields an empty tuple and therefore no injections.
"""
import importlib
import logging
from typing import Dict, Tuple

from hydra.templates.base import BugTemplate

logger = logging.getLogger(__name__)

_CATALOGS: Dict[str, str] = {
    "javascript": "hydra.templates.javascript.catalog",
    "python": "hydra.templates.python.catalog",
    "go": "hydra.templates.go.catalog",
}

_cache: Dict[str, Tuple[BugTemplate, ...]] = {}


def get_templates(language: str) -> Tuple[BugTemplate, ...]:
    key = (language or "").lower()
    if key in _cache:
        return _cache[key]

    module_path = _CATALOGS.get(key)
    if module_path is None:
        logger.info("No template catalog for language '%s'", language)
        templates: Tuple[BugTemplate, ...] = ()
    else:
        module = importlib.import_module(module_path)
        templates = tuple(getattr(module, "TEMPLATES", ()))
        logger.debug("Loaded %d %s templates", len(templates), key)

    _cache[key] = templates
    return templates


def get_all_templates() -> Tuple[BugTemplate, ...]:
    """Every registered template, grouped by language in registry order."""
    result = []
    for language in _CATALOGS:
        result.extend(get_templates(language))
    return tuple(result)


def clear_template_cache() -> None:
    _cache.clear()
