"""
off-by-one (JavaScript)
Makes an ``i < arr.length`` loop bound inclusive.
"""
import re

from hydra.models.injection import InjectionPoint
from hydra.templates.base import LineTemplate

_BOUND = re.compile(r"(\b\w+\s*)<(\s*[\w.]+\.length\b)")


class OffByOneTemplate(LineTemplate):
    name = "off-by-one"
    category = "logic"
    language = "javascript"
    description = "Turns a '< length' bound into '<= length', reading one element past the end"
    pattern = re.compile(r"\b(?P<var>\w+)\s*<\s*(?P<bound>[\w.]+\.length)\b")

    def rewrite(self, line: str, point: InjectionPoint) -> str:
        return _BOUND.sub(r"\1<=\2", line, count=1)

    def describe(self, point: InjectionPoint) -> str:
        fields = self.match_fields(point)
        var = fields.get("var") or "i"
        bound = fields.get("bound") or "arr.length"
        return f"Changed '{var} < {bound}' to '{var} <= {bound}' at line {point.line}; the last iteration reads undefined"
