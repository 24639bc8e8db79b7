"""
negation-strip (Go)
Drops the ``!`` from an ``if !cond {`` so the branch runs in the opposite case.
"""
import re

from hydra.models.injection import InjectionPoint
from hydra.templates.base import LineTemplate

_BANG = re.compile(r"\bif\s+!(?!=)")


class NegationStripTemplate(LineTemplate):
    name = "negation-strip"
    category = "logic"
    language = "go"
    description = "Removes a '!' from an if condition, inverting the branch"
    pattern = re.compile(r"\bif\s+!(?!=)(?P<operand>[\w.]+(?:\([^()]*\))?)\s*\{")

    def rewrite(self, line: str, point: InjectionPoint) -> str:
        return _BANG.sub("if ", line, count=1)

    def describe(self, point: InjectionPoint) -> str:
        operand = self.match_fields(point).get("operand") or "condition"
        return f"Changed 'if !{operand}' to 'if {operand}' at line {point.line}; the branch now runs in the opposite case"
