"""
off-by-one (Python)
Extends a ``range(n)`` bound by one so the loop runs a single extra time.

    for i in range(len(items)):   ->   for i in range(len(items) + 1):
"""
from typing import Any, Mapping

import libcst as cst
import libcst.matchers as m

from hydra.models.injection import InjectionPoint
from hydra.templates.base import CSTTemplate, node_code

# Integer literals are skipped; ``range(10 + 1)`` reads as deliberate
_BOUND_TYPES = (cst.Name, cst.Attribute, cst.Call, cst.Subscript)


class OffByOneTemplate(CSTTemplate):
    name = "off-by-one"
    category = "logic"
    description = "Extends a range() bound by one, iterating one element past the end"
    node_type = cst.Call

    def matches(self, node: cst.Call) -> bool:
        if not m.matches(node.func, m.Name("range")) or len(node.args) != 1:
            return False
        arg = node.args[0]
        return arg.keyword is None and arg.star == "" and isinstance(arg.value, _BOUND_TYPES)

    def mutate(self, node: cst.Call) -> cst.Call:
        arg = node.args[0]
        bound = cst.BinaryOperation(left=arg.value, operator=cst.Add(), right=cst.Integer("1"))
        return node.with_changes(args=[arg.with_changes(value=bound)])

    def point_fields(self, node: cst.Call) -> Mapping[str, Any]:
        return {"bound": node_code(node.args[0].value)}

    def describe(self, point: InjectionPoint) -> str:
        bound = point.fields.get("bound", "n")
        return (
            f"Changed range({bound}) to range({bound} + 1) at line {point.line}; "
            f"the last iteration indexes one element past the end"
        )
