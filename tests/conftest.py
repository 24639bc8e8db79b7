"""
Shared test configuration.
File logging is disabled before any hydra module reads its configuration.
"""
import os
import textwrap

import pytest

os.environ.setdefault("HYDRA_LOG_DIR", "")


@pytest.fixture
def make_tree(tmp_path):
    """Write {relative path: source} into tmp_path and return the root."""
    def _make(files):
        for rel, text in files.items():
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(text), encoding="utf-8")
        return tmp_path
    return _make
