"""
off-by-one (Go)
Makes a counted ``for`` loop condition inclusive.

    for i := 0; i < len(items); i++ {   ->   for i := 0; i <= len(items); i++ {
"""
import re

from hydra.models.injection import InjectionPoint
from hydra.templates.base import LineTemplate

_CONDITION = re.compile(r"(;\s*\w+\s*)<(\s*[^;=<-][^;]*;)")


class OffByOneTemplate(LineTemplate):
    name = "off-by-one"
    category = "logic"
    language = "go"
    description = "Turns a '<' loop bound into '<=', running one iteration past the end"
    pattern = re.compile(r"\bfor\s+\w+\s*:=\s*[^;]+;\s*(?P<var>\w+)\s*<\s*(?P<bound>[^;=<-][^;]*);")

    def rewrite(self, line: str, point: InjectionPoint) -> str:
        return _CONDITION.sub(r"\1<=\2", line, count=1)

    def describe(self, point: InjectionPoint) -> str:
        fields = self.match_fields(point)
        var = fields.get("var") or "i"
        bound = (fields.get("bound") or "n").strip()
        return f"Changed '{var} < {bound}' to '{var} <= {bound}' at line {point.line}; the loop reads one element past the end"
