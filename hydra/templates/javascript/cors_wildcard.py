"""
cors-wildcard (JavaScript)
Replaces an explicit CORS origin with ``'*'``, letting any site call the API.

    cors({ origin: 'https://app.example.com' })   ->   cors({ origin: '*' })
"""
import re

from hydra.models.injection import InjectionPoint
from hydra.templates.base import LineTemplate


class CorsWildcardTemplate(LineTemplate):
    name = "cors-wildcard"
    category = "security"
    language = "javascript"
    description = "Replaces an explicit CORS origin with '*', allowing any site to make requests"
    pattern = re.compile(r"""\borigin\s*:\s*(?P<quote>['"])(?P<value>[^'"*]+)(?P=quote)""")

    def rewrite(self, line: str, point: InjectionPoint) -> str:
        m = self.pattern.search(line)
        return line[:m.start("value")] + "*" + line[m.end("value"):]

    def describe(self, point: InjectionPoint) -> str:
        origin = self.match_fields(point).get("value") or "the allowed origin"
        return f"Replaced CORS origin '{origin}' with '*' at line {point.line}; any website can now call this API"
