"""
strict-equality-loosen (JavaScript)
Replaces ``===`` / ``!==`` with ``==`` / ``!=``, letting type coercion decide
the comparison (``0 == ''``, ``null == undefined``, ``'1' == 1``).
"""
import re

from hydra.models.injection import InjectionPoint
from hydra.templates.base import LineTemplate

_LOOSER = {"===": "==", "!==": "!="}


class StrictEqualityLoosenTemplate(LineTemplate):
    name = "strict-equality-loosen"
    category = "logic"
    language = "javascript"
    description = "Loosens a strict equality check, enabling implicit type coercion"
    pattern = re.compile(r"(?P<op>!==|===)")

    def rewrite(self, line: str, point: InjectionPoint) -> str:
        return self.pattern.sub(lambda m: _LOOSER[m.group("op")], line, count=1)

    def describe(self, point: InjectionPoint) -> str:
        op = self.match_fields(point).get("op") or "==="
        return f"Changed '{op}' to '{_LOOSER.get(op, '==')}' at line {point.line}; values of different types now compare equal after coercion"
