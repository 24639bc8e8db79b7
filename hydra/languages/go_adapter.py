"""
Go Adapter
==========
Line strategy: Go sources are handled as immutable line tuples.

``parse`` also runs a delimiter-balance check (aware of strings, runes, raw
strings and comments) so malformed files fail fast and are skipped, and so a
mutation that broke the structure is rejected on re-parse.
"""
import logging
import re
from typing import List

from hydra.core.errors import ParseError
from hydra.languages.base import LanguageAdapter
from hydra.parser.line_parser import ParsedLines, check_balanced_delimiters

logger = logging.getLogger(__name__)

_SINGLE_IMPORT_RE = re.compile(r'^\s*import\s+(?:[\w.]+\s+)?"([^"]+)"', re.MULTILINE)
_BLOCK_IMPORT_RE = re.compile(r"^\s*import\s*\((.*?)\)", re.MULTILINE | re.DOTALL)
_BLOCK_ENTRY_RE = re.compile(r'^\s*(?:[\w.]+\s+)?"([^"]+)"', re.MULTILINE)


class GoAdapter(LanguageAdapter):
    name = "go"
    extensions = frozenset({".go"})
    skip_dirs = frozenset({"vendor", ".cache", "testdata"})
    strategy = "lines"

    def parse(self, source: str, filename: str = "") -> ParsedLines:
        problem = check_balanced_delimiters(source, quotes="\"'", raw_quote="`")
        if problem:
            raise ParseError(filename, problem)
        return ParsedLines.from_source(source)

    def generate(self, parsed: ParsedLines, original_source: str = "") -> str:
        return parsed.source

    def extract_imports(self, parsed: ParsedLines) -> List[str]:
        try:
            source = parsed.source
            names: List[str] = []
            for m in _SINGLE_IMPORT_RE.finditer(source):
                if m.group(1) not in names:
                    names.append(m.group(1))
            for block in _BLOCK_IMPORT_RE.finditer(source):
                for m in _BLOCK_ENTRY_RE.finditer(block.group(1)):
                    if m.group(1) not in names:
                        names.append(m.group(1))
            return names
        except Exception as e:
            logger.debug("Go import extraction failed: %s", e)
            return []
