"""
context-cancel-strip (Go)
Removes ``defer cancel()`` after ``context.WithTimeout`` / ``WithCancel``. The
context's timer and goroutine leak until the parent context ends.
"""
import re

from hydra.models.injection import InjectionPoint
from hydra.templates.base import LineTemplate


class ContextCancelStripTemplate(LineTemplate):
    name = "context-cancel-strip"
    category = "concurrency"
    language = "go"
    description = "Removes 'defer cancel()' for a derived context, leaking its goroutine and timer"
    pattern = re.compile(r"^\s*defer\s+(?P<call>cancel\w*\s*\(\s*\))\s*(?://.*)?$")
    removes_line = True

    def describe(self, point: InjectionPoint) -> str:
        call = self.match_fields(point).get("call") or "cancel()"
        return f"Removed 'defer {call}' at line {point.line}; the derived context is never cancelled and its resources leak"
