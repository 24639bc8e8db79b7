"""
Ignore Rules
============
Rules for ignoring generated files, dependencies, and non-source artifacts
while walking a scope directory for injection candidates.

Ignored:
    - version-control metadata (.git, .hg, .svn)
    - dependency caches (node_modules, vendor, site-packages, virtualenvs)
    - build output (dist, build, coverage, .next)
    - any hidden directory (leading dot)

Each language adapter adds its own ``skip_dirs`` on top of this common set.
"""
from typing import Iterable

COMMON_SKIP_DIRS: frozenset[str] = frozenset({
    ".git", ".hg", ".svn",
    "node_modules", "vendor", "site-packages",
    ".venv", "venv", "env", "__pycache__",
    "dist", "build", "coverage", ".next",
})


def should_skip_dir(name: str, extra: Iterable[str] = ()) -> bool:
    """True if a directory with this name must not be descended into."""
    if name.startswith("."):
        return True
    return name in COMMON_SKIP_DIRS or name in set(extra)
