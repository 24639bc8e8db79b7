"""
Python Adapter
==============
Tree strategy backed by libcst.

libcst keeps every byte of whitespace and comments, so ``module.code`` of an
unmutated tree is exactly the input text. Trees are immutable: templates
return a new ``Module`` from every injection and the parsed value used during
scoring is never changed underneath a later injection.
"""
import logging
from typing import List

import libcst as cst
from libcst.helpers import get_full_name_for_node

from hydra.core.errors import ParseError
from hydra.languages.base import LanguageAdapter

logger = logging.getLogger(__name__)


class _ImportCollector(cst.CSTVisitor):
    def __init__(self) -> None:
        self.names: List[str] = []

    def _add(self, name: str) -> None:
        if name and name not in self.names:
            self.names.append(name)

    def visit_Import(self, node: cst.Import) -> None:
        for alias in node.names:
            self._add(get_full_name_for_node(alias.name) or "")

    def visit_ImportFrom(self, node: cst.ImportFrom) -> None:
        dots = "." * len(node.relative)
        if node.module is not None:
            self._add(dots + (get_full_name_for_node(node.module) or ""))
            return
        # from . import x  -> ".x"
        if isinstance(node.names, cst.ImportStar):
            self._add(dots)
            return
        for alias in node.names:
            self._add(dots + (get_full_name_for_node(alias.name) or ""))


class PythonAdapter(LanguageAdapter):
    name = "python"
    extensions = frozenset({".py", ".pyw"})
    skip_dirs = frozenset({
        "__pycache__", ".venv", "venv", "env",
        ".tox", ".mypy_cache", ".pytest_cache", "site-packages",
    })
    strategy = "tree"

    def parse(self, source: str, filename: str = "") -> cst.Module:
        try:
            return cst.parse_module(source)
        except cst.ParserSyntaxError as e:
            raise ParseError(filename, f"{e.message} (line {e.raw_line})") from e

    def generate(self, parsed: cst.Module, original_source: str = "") -> str:
        return parsed.code

    def extract_imports(self, parsed: cst.Module) -> List[str]:
        try:
            collector = _ImportCollector()
            parsed.visit(collector)
            return collector.names
        except Exception as e:
            logger.debug("Python import extraction failed: %s", e)
            return []
