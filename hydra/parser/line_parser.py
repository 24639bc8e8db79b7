"""
Line Parser
===========
Line-indexed representation for languages handled by textual pattern matching.

A ``ParsedLines`` value is an immutable tuple of lines plus the newline
sequence the file used. Every edit returns a NEW value, so a parsed file can
be shared between scoring and injection without aliasing.

Helpers:
    find_matching_lines      — regex search over lines, skipping comment lines
    get_indent               — leading whitespace of a line
    extract_imports_by_regex — import names from one or more regexes
    check_balanced_delimiters — structural sanity check for C-family sources
"""
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Pattern, Sequence, Tuple

from hydra.models.injection import InjectionPoint


# ---------------------------------------------------------------------------
# Representation
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class ParsedLines:
    lines: Tuple[str, ...]
    newline: str = "\n"

    @classmethod
    def from_source(cls, source: str) -> "ParsedLines":
        newline = "\r\n" if "\r\n" in source else "\n"
        return cls(tuple(source.split(newline)), newline)

    @property
    def source(self) -> str:
        return self.newline.join(self.lines)

    def __len__(self) -> int:
        return len(self.lines)

    def replace_line(self, index: int, text: str) -> "ParsedLines":
        self._check(index)
        lines = list(self.lines)
        lines[index] = text
        return ParsedLines(tuple(lines), self.newline)

    def remove_line(self, index: int) -> "ParsedLines":
        self._check(index)
        lines = list(self.lines)
        del lines[index]
        return ParsedLines(tuple(lines), self.newline)

    def insert_line(self, index: int, text: str) -> "ParsedLines":
        if index < 0 or index > len(self.lines):
            raise IndexError(f"Line index out of range: {index}")
        lines = list(self.lines)
        lines.insert(index, text)
        return ParsedLines(tuple(lines), self.newline)

    def _check(self, index: int) -> None:
        if index < 0 or index >= len(self.lines):
            raise IndexError(f"Line index out of range: {index}")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def get_indent(line: str) -> str:
    return line[: len(line) - len(line.lstrip())]


def _is_comment(line: str, comment_prefixes: Sequence[str]) -> bool:
    stripped = line.lstrip()
    return any(stripped.startswith(p) for p in comment_prefixes)


def find_matching_lines(
    parsed: ParsedLines,
    pattern: Pattern[str],
    filename: str = "",
    comment_prefixes: Sequence[str] = ("//", "/*", "*"),
    skip_comments: bool = True,
) -> List[InjectionPoint]:
    """
    One InjectionPoint per line matching ``pattern``.

    The point's ``index`` is the 0-based line index and ``fields["match"]``
    holds the ``re.Match`` groups dict for templates that need captures.
    """
    points: List[InjectionPoint] = []
    for i, line in enumerate(parsed.lines):
        if skip_comments and _is_comment(line, comment_prefixes):
            continue
        m = pattern.search(line)
        if not m:
            continue
        points.append(InjectionPoint(
            line=i + 1,
            context=line.strip(),
            index=i,
            filename=filename,
            fields={"groups": m.groupdict(), "start": m.start(), "end": m.end()},
        ))
    return points


def extract_imports_by_regex(source: str, patterns: Iterable[Pattern[str]]) -> List[str]:
    """Collect group 1 of every match of every pattern, de-duplicated in order."""
    seen: List[str] = []
    for pattern in patterns:
        for m in pattern.finditer(source):
            name = m.group(1)
            if name and name not in seen:
                seen.append(name)
    return seen


_OPENERS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = {v: k for k, v in _OPENERS.items()}


def check_balanced_delimiters(
    source: str,
    quotes: str = "\"'",
    raw_quote: Optional[str] = "`",
) -> Optional[str]:
    """
    Check that (), [] and {} nest correctly outside strings and comments.

    Understands ``//`` and ``/* */`` comments, escaped quoted strings and
    (optionally) a raw string delimiter that may span lines.

    Returns None when balanced, otherwise a short reason.
    """
    stack: List[Tuple[str, int]] = []
    line_no = 1
    i = 0
    n = len(source)

    while i < n:
        ch = source[i]

        if ch == "\n":
            line_no += 1
            i += 1
            continue

        if source.startswith("//", i):
            nl = source.find("\n", i)
            i = n if nl == -1 else nl
            continue

        if source.startswith("/*", i):
            end = source.find("*/", i + 2)
            if end == -1:
                return f"unterminated block comment at line {line_no}"
            line_no += source.count("\n", i, end)
            i = end + 2
            continue

        if raw_quote and ch == raw_quote:
            end = source.find(raw_quote, i + 1)
            if end == -1:
                return f"unterminated raw string at line {line_no}"
            line_no += source.count("\n", i, end)
            i = end + 1
            continue

        if ch in quotes:
            j = i + 1
            while j < n and source[j] != ch:
                if source[j] == "\\":
                    j += 1
                elif source[j] == "\n":
                    return f"unterminated string at line {line_no}"
                j += 1
            if j >= n:
                return f"unterminated string at line {line_no}"
            i = j + 1
            continue

        if ch in _OPENERS:
            stack.append((ch, line_no))
        elif ch in _CLOSERS:
            if not stack or stack[-1][0] != _CLOSERS[ch]:
                return f"unexpected '{ch}' at line {line_no}"
            stack.pop()
        i += 1

    if stack:
        opener, opened_at = stack[-1]
        return f"unclosed '{opener}' from line {opened_at}"
    return None
