"""
logic-inversion (JavaScript)
Swaps ``&&`` and ``||`` in a condition.
"""
import re

from hydra.models.injection import InjectionPoint
from hydra.templates.base import LineTemplate

_SWAP = {"&&": "||", "||": "&&"}


class LogicInversionTemplate(LineTemplate):
    name = "logic-inversion"
    category = "logic"
    language = "javascript"
    description = "Swaps '&&' and '||' in a condition"
    pattern = re.compile(r"(?P<op>&&|\|\|)(?!=)")

    def rewrite(self, line: str, point: InjectionPoint) -> str:
        return self.pattern.sub(lambda m: _SWAP[m.group("op")], line, count=1)

    def describe(self, point: InjectionPoint) -> str:
        op = self.match_fields(point).get("op") or "&&"
        return f"Replaced '{op}' with '{_SWAP.get(op, '||')}' at line {point.line}; the condition now passes in cases it should reject"
