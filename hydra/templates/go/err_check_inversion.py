"""
err-check-inversion (Go)
Flips ``if err != nil`` to ``if err == nil``: failures fall through as success
and the error branch runs on the happy path.
"""
import re

from hydra.models.injection import InjectionPoint
from hydra.templates.base import LineTemplate

_CHECK = re.compile(r"\b(?P<var>err\w*)\s*!=\s*nil\b")


class ErrCheckInversionTemplate(LineTemplate):
    name = "err-check-inversion"
    category = "error-handling"
    language = "go"
    description = "Inverts an 'err != nil' check so errors are treated as success"
    pattern = re.compile(r"\bif\s+(?:.*;\s*)?(?P<var>err\w*)\s*!=\s*nil\s*\{")

    def rewrite(self, line: str, point: InjectionPoint) -> str:
        return _CHECK.sub(lambda m: f"{m.group('var')} == nil", line, count=1)

    def describe(self, point: InjectionPoint) -> str:
        var = self.match_fields(point).get("var") or "err"
        return f"Changed '{var} != nil' to '{var} == nil' at line {point.line}; errors now skip the handler and success takes the error path"
