"""
defer-close-strip (Go)
Removes ``defer x.Close()``, leaking the file, response body or connection.
"""
import re

from hydra.models.injection import InjectionPoint
from hydra.templates.base import LineTemplate


class DeferCloseStripTemplate(LineTemplate):
    name = "defer-close-strip"
    category = "resource"
    language = "go"
    description = "Removes a deferred Close() call, leaking the underlying resource"
    pattern = re.compile(r"^\s*defer\s+(?P<call>[\w.]+\.Close\s*\(\s*\))\s*(?://.*)?$")
    removes_line = True

    def describe(self, point: InjectionPoint) -> str:
        call = self.match_fields(point).get("call") or "Close()"
        return f"Removed 'defer {call}' at line {point.line}; the resource is never closed and leaks on every call"
