"""
JavaScript / TypeScript Adapter
===============================
Line strategy for .js .jsx .ts .tsx .mjs .cjs sources.

Mutations still work on line tuples. ``parse`` first runs the source through
the tree-sitter grammar for the file's extension (TypeScript, TSX, or
JavaScript with JSX), so malformed files are skipped and a mutation that
broke the syntax is rejected on re-parse.
"""
import logging
import os
import re
from typing import Dict, List, Optional

import tree_sitter_javascript
import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from hydra.core.errors import ParseError
from hydra.languages.base import LanguageAdapter
from hydra.parser.line_parser import ParsedLines, extract_imports_by_regex

logger = logging.getLogger(__name__)

_GRAMMARS = {
    ".ts": tree_sitter_typescript.language_typescript,
    ".tsx": tree_sitter_typescript.language_tsx,
}
_parsers: Dict[str, Parser] = {}

_IMPORT_PATTERNS = (
    # import x from 'mod' / import { a } from "mod" / import * as ns from 'mod'
    re.compile(r"""^\s*import\s+[^'"]*?\s+from\s+['"]([^'"]+)['"]""", re.MULTILINE),
    # import 'side-effect'
    re.compile(r"""^\s*import\s+['"]([^'"]+)['"]""", re.MULTILINE),
    # export { a } from 'mod' / export * from 'mod'
    re.compile(r"""^\s*export\s+[^'"]*?\s+from\s+['"]([^'"]+)['"]""", re.MULTILINE),
    re.compile(r"""\brequire\(\s*['"]([^'"]+)['"]\s*\)"""),
    re.compile(r"""\bimport\(\s*['"]([^'"]+)['"]\s*\)"""),
)


def _parser_for(filename: str) -> Parser:
    ext = os.path.splitext(filename)[1].lower()
    key = ext if ext in _GRAMMARS else ".js"
    if key not in _parsers:
        grammar = _GRAMMARS.get(key, tree_sitter_javascript.language)
        _parsers[key] = Parser(Language(grammar()))
    return _parsers[key]


def _first_error(root: Node) -> Optional[Node]:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node
        stack.extend(reversed([child for child in node.children if child.has_error or child.is_missing]))
    return None


class JavaScriptAdapter(LanguageAdapter):
    name = "javascript"
    extensions = frozenset({".js", ".jsx", ".ts", ".tsx", ".mjs", ".cjs"})
    skip_dirs = frozenset({"node_modules", ".next", "dist", "build", "coverage"})
    strategy = "lines"

    def parse(self, source: str, filename: str = "") -> ParsedLines:
        tree = _parser_for(filename).parse(source.encode("utf-8"))
        if tree.root_node.has_error:
            node = _first_error(tree.root_node) or tree.root_node
            raise ParseError(filename, f"syntax error at line {node.start_point[0] + 1}")
        return ParsedLines.from_source(source)

    def generate(self, parsed: ParsedLines, original_source: str = "") -> str:
        return parsed.source

    def extract_imports(self, parsed: ParsedLines) -> List[str]:
        try:
            return extract_imports_by_regex(parsed.source, _IMPORT_PATTERNS)
        except Exception as e:
            logger.debug("JavaScript import extraction failed: %s", e)
            return []
