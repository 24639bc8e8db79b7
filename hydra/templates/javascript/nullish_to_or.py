"""
nullish-to-or (JavaScript)
Replaces ``??`` with ``||`` so legitimate falsy values (0, '', false) are
replaced by the default.

    const limit = opts.limit ?? 10;   ->   const limit = opts.limit || 10;
"""
import re

from hydra.models.injection import InjectionPoint
from hydra.templates.base import LineTemplate


class NullishToOrTemplate(LineTemplate):
    name = "nullish-to-or"
    category = "logic"
    language = "javascript"
    description = "Replaces '??' with '||', discarding valid falsy values like 0 and ''"
    pattern = re.compile(r"\?\?(?!=)")

    def rewrite(self, line: str, point: InjectionPoint) -> str:
        return self.pattern.sub("||", line, count=1)

    def describe(self, point: InjectionPoint) -> str:
        return f"Changed '??' to '||' at line {point.line}; 0, '' and false are now replaced by the fallback value"
