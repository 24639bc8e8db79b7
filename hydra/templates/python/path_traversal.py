"""
path-traversal (Python)
Unwraps ``os.path.basename(name)`` so user-supplied ``../`` segments reach the filesystem.
"""
from typing import Any, Mapping

import libcst as cst
from libcst.helpers import get_full_name_for_node

from hydra.models.injection import InjectionPoint
from hydra.templates.base import CSTTemplate, node_code


class PathTraversalTemplate(CSTTemplate):
    name = "path-traversal"
    category = "security"
    description = "Removes os.path.basename() sanitisation, allowing '../' path traversal"
    node_type = cst.Call

    def matches(self, node: cst.Call) -> bool:
        if get_full_name_for_node(node.func) != "os.path.basename" or len(node.args) != 1:
            return False
        arg = node.args[0]
        return arg.keyword is None and arg.star == ""

    def mutate(self, node: cst.Call) -> cst.BaseExpression:
        return node.args[0].value

    def point_fields(self, node: cst.Call) -> Mapping[str, Any]:
        return {"argument": node_code(node.args[0].value)}

    def describe(self, point: InjectionPoint) -> str:
        arg = point.fields.get("argument", "path")
        return (
            f"Removed os.path.basename() around '{arg}' at line {point.line}; "
            f"a crafted name like '../../etc/passwd' now escapes the target directory"
        )
