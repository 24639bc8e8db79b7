"""
Language Adapter Contract
=========================
Every supported language provides one adapter that converts source text to a
parsed value and back, and extracts imported-module names.

Two strategies implement the same contract:
    tree  — a lossless concrete syntax tree (Python via libcst)
    lines — an immutable line tuple (Go, JavaScript/TypeScript)

The scorer and applier only ever call ``parse`` / ``generate`` /
``extract_imports``; they never look at which strategy is behind them.
"""
from abc import ABC, abstractmethod
from typing import Any, FrozenSet, List


class LanguageAdapter(ABC):
    name: str = ""
    extensions: FrozenSet[str] = frozenset()
    skip_dirs: FrozenSet[str] = frozenset()
    strategy: str = "lines"

    @abstractmethod
    def parse(self, source: str, filename: str = "") -> Any:
        """Parse source text. Raises ``ParseError`` on malformed input."""

    @abstractmethod
    def generate(self, parsed: Any, original_source: str = "") -> str:
        """Regenerate source text. An unmutated value yields ``original_source``."""

    @abstractmethod
    def extract_imports(self, parsed: Any) -> List[str]:
        """Imported module names. Best effort: returns ``[]`` instead of raising."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"
