"""
Path Utils
==========
Path normalisation and project-relative conversion helpers.

Responsibilities:
    - Convert absolute paths to project-relative, forward-slash paths
    - Resolve manifest-relative paths back to absolute paths
    - Reject paths that escape the project root
    - Read and write source files without newline translation
"""
import os
from pathlib import Path


def to_relative(path: str, root: str) -> str:
    """
    Convert ``path`` to a root-relative, forward-slash path.

    Paths outside the root are returned absolute (slashes normalised) so a
    manifest entry is never ambiguous.
    """
    abs_path = os.path.abspath(path)
    abs_root = os.path.abspath(root)
    try:
        return Path(abs_path).relative_to(abs_root).as_posix()
    except ValueError:
        return abs_path.replace("\\", "/")


def resolve_in_root(rel_path: str, root: str) -> str:
    """
    Resolve a manifest-relative path against the project root.

    Raises
    ------
    ValueError
        If the resolved path lies outside the project root.
    """
    abs_root = os.path.abspath(root)
    abs_path = os.path.normpath(os.path.join(abs_root, rel_path))
    if abs_path != abs_root and not abs_path.startswith(abs_root + os.sep):
        raise ValueError(f"Path escapes project root: {rel_path}")
    return abs_path


def read_source(path: str) -> str:
    """Read a file as UTF-8 text, preserving its line endings byte for byte."""
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def write_source(path: str, content: str) -> None:
    """Write UTF-8 text without translating line endings."""
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)
