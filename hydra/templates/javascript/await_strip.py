"""
await-strip (JavaScript)
Drops ``await`` from an assignment, so the variable holds a pending Promise.

    const user = await db.find(id);   ->   const user = db.find(id);
"""
import re

from hydra.models.injection import InjectionPoint
from hydra.templates.base import LineTemplate

_AWAIT = re.compile(r"=\s*await\s+")


class AwaitStripTemplate(LineTemplate):
    name = "await-strip"
    category = "async"
    language = "javascript"
    description = "Removes 'await' from an assignment, storing a pending Promise instead of its value"
    pattern = re.compile(r"\b(?P<target>\w+)\s*=\s*await\s+(?P<expr>[\w.]+)\s*\(")

    def rewrite(self, line: str, point: InjectionPoint) -> str:
        return _AWAIT.sub("= ", line, count=1)

    def describe(self, point: InjectionPoint) -> str:
        fields = self.match_fields(point)
        target = fields.get("target") or "result"
        expr = fields.get("expr") or "call"
        return f"Removed 'await' before {expr}() at line {point.line}; '{target}' is now a pending Promise"
