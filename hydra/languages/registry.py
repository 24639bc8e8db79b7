"""
Language Registry
=================
Central dispatch from file extensions to language adapters.

    detect_language(path)          — language name for a file, or None
    get_adapter(language)          — cached adapter instance
    supported_languages()          — ordered language names
    all_supported_extensions()     — every known extension
    extensions_for_language(lang)  — extensions owned by one language

Extensions are matched case-insensitively. Unsupported extensions are simply
excluded from candidate discovery; unsupported language NAMES raise
``UnsupportedLanguageError``.
"""
import os
from typing import Dict, FrozenSet, List, Optional, Type

from hydra.core.errors import UnsupportedLanguageError
from hydra.languages.base import LanguageAdapter
from hydra.languages.go_adapter import GoAdapter
from hydra.languages.javascript_adapter import JavaScriptAdapter
from hydra.languages.python_adapter import PythonAdapter

# Ordered: drives the "all languages" fallback order
_ADAPTER_CLASSES: Dict[str, Type[LanguageAdapter]] = {
    "javascript": JavaScriptAdapter,
    "python": PythonAdapter,
    "go": GoAdapter,
}

EXTENSION_MAP: Dict[str, str] = {
    ext: name
    for name, cls in _ADAPTER_CLASSES.items()
    for ext in sorted(cls.extensions)
}

_adapter_cache: Dict[str, LanguageAdapter] = {}


def detect_language(file_path: str) -> Optional[str]:
    ext = os.path.splitext(file_path)[1].lower()
    return EXTENSION_MAP.get(ext)


def get_adapter(language: str) -> LanguageAdapter:
    key = (language or "").lower()
    if key not in _ADAPTER_CLASSES:
        raise UnsupportedLanguageError(f"Unsupported language: {language}")
    if key not in _adapter_cache:
        _adapter_cache[key] = _ADAPTER_CLASSES[key]()
    return _adapter_cache[key]


def supported_languages() -> List[str]:
    return list(_ADAPTER_CLASSES)


def all_supported_extensions() -> FrozenSet[str]:
    return frozenset(EXTENSION_MAP)


def extensions_for_language(language: str) -> FrozenSet[str]:
    key = (language or "").lower()
    return frozenset(ext for ext, name in EXTENSION_MAP.items() if name == key)
