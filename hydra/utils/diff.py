"""
Diff Generator
==============
Human-readable unified diff for a single injected mutation.

This is a greedy positional line aligner, NOT a minimal-edit (LCS) diff:

    1. Lines are compared position by position.
    2. On a mismatch, a bounded lookahead window (8 lines) searches for the
       nearest re-synchronisation point, treating the gap as a pure deletion
       or a pure insertion.
    3. If nothing re-syncs inside the window, the pair is emitted as a
       one-to-one substitution (delete old line, add new line) and both
       cursors advance.

Changed regions are grouped into hunks with a fixed context margin (3 lines)
and rendered with standard ``@@ -start,count +start,count @@`` headers.
Hunks whose context would touch are merged.

Adequate for the engine's single-point mutations (0–2 changed lines); not a
general-purpose diff tool.
"""
from dataclasses import dataclass
from typing import List

from hydra.core.constants import DIFF_CONTEXT_LINES, DIFF_LOOKAHEAD

_EQUAL = "eq"
_DELETE = "del"
_INSERT = "add"


@dataclass(frozen=True)
class LineChange:
    """One aligned line: kind plus 0-based cursors into the old and new files."""
    kind: str
    old_index: int
    new_index: int
    text: str


def align_lines(
    old_lines: List[str],
    new_lines: List[str],
    lookahead: int = DIFF_LOOKAHEAD,
) -> List[LineChange]:
    """Greedily align two line sequences into equal/delete/insert steps."""
    changes: List[LineChange] = []
    oi = 0
    ni = 0
    n_old = len(old_lines)
    n_new = len(new_lines)

    while oi < n_old or ni < n_new:
        if oi < n_old and ni < n_new and old_lines[oi] == new_lines[ni]:
            changes.append(LineChange(_EQUAL, oi, ni, old_lines[oi]))
            oi += 1
            ni += 1
            continue

        resynced = False
        for d in range(1, lookahead + 1):
            # Pure deletion: old[oi + d] lines up with the current new line
            if ni < n_new and oi + d < n_old and old_lines[oi + d] == new_lines[ni]:
                for k in range(d):
                    changes.append(LineChange(_DELETE, oi + k, ni, old_lines[oi + k]))
                oi += d
                resynced = True
                break
            # Pure insertion: the current old line lines up with new[ni + d]
            if oi < n_old and ni + d < n_new and old_lines[oi] == new_lines[ni + d]:
                for k in range(d):
                    changes.append(LineChange(_INSERT, oi, ni + k, new_lines[ni + k]))
                ni += d
                resynced = True
                break

        if resynced:
            continue

        # No re-sync inside the window: one-to-one substitution
        deleted = False
        if oi < n_old:
            changes.append(LineChange(_DELETE, oi, ni, old_lines[oi]))
            deleted = True
        if ni < n_new:
            changes.append(LineChange(_INSERT, oi + (1 if deleted else 0), ni, new_lines[ni]))
        if oi < n_old:
            oi += 1
        if ni < n_new:
            ni += 1

    return changes


def _hunk_ranges(changes: List[LineChange], context: int) -> List[tuple[int, int]]:
    """Group changed entries into [start, end) slices of ``changes``."""
    changed = [i for i, c in enumerate(changes) if c.kind != _EQUAL]
    if not changed:
        return []

    groups: List[tuple[int, int]] = []
    first = last = changed[0]
    for idx in changed[1:]:
        if idx - last <= 2 * context:
            last = idx
            continue
        groups.append((first, last))
        first = last = idx
    groups.append((first, last))

    return [
        (max(0, first - context), min(len(changes), last + context + 1))
        for first, last in groups
    ]


def _header_start(start_index: int, count: int) -> int:
    # Unified diff convention: an empty range points at the line before it
    return start_index + 1 if count else start_index


def generate_diff(
    original: str,
    modified: str,
    file_path: str,
    context_lines: int = DIFF_CONTEXT_LINES,
) -> str:
    """
    Generate a unified diff between two file contents.

    Parameters
    ----------
    original : str
        Content before the change.
    modified : str
        Content after the change.
    file_path : str
        Label for the ``--- a/`` and ``+++ b/`` headers.
    context_lines : int
        Unchanged lines shown around each change (default: 3).

    Returns
    -------
    str
        The diff text, or an empty string if the contents are identical.
    """
    if original == modified:
        return ""

    changes = align_lines(original.split("\n"), modified.split("\n"))
    ranges = _hunk_ranges(changes, context_lines)
    if not ranges:
        return ""

    out = [f"--- a/{file_path}", f"+++ b/{file_path}"]
    for start, end in ranges:
        hunk = changes[start:end]
        old_count = sum(1 for c in hunk if c.kind != _INSERT)
        new_count = sum(1 for c in hunk if c.kind != _DELETE)
        old_start = _header_start(hunk[0].old_index, old_count)
        new_start = _header_start(hunk[0].new_index, new_count)
        out.append(f"@@ -{old_start},{old_count} +{new_start},{new_count} @@")

        for change in hunk:
            if change.kind == _EQUAL:
                out.append(f" {change.text}")
            elif change.kind == _DELETE:
                out.append(f"-{change.text}")
            else:
                out.append(f"+{change.text}")

    return "\n".join(out)


def count_changed_lines(diff: str) -> int:
    """Number of added plus removed lines in a diff produced by ``generate_diff``."""
    changed = 0
    for line in diff.splitlines():
        if line.startswith("---") or line.startswith("+++"):
            continue
        if line.startswith("+") or line.startswith("-"):
            changed += 1
    return changed
