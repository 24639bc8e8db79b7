"""
logic-inversion (Python)
Swaps ``and`` for ``or`` (or the reverse) in a boolean expression.
"""
from typing import Any, Mapping

import libcst as cst

from hydra.models.injection import InjectionPoint
from hydra.templates.base import CSTTemplate


class LogicInversionTemplate(CSTTemplate):
    name = "logic-inversion"
    category = "logic"
    description = "Swaps 'and' and 'or' in a boolean condition"
    node_type = cst.BooleanOperation

    def matches(self, node: cst.BooleanOperation) -> bool:
        return isinstance(node.operator, (cst.And, cst.Or))

    def mutate(self, node: cst.BooleanOperation) -> cst.BooleanOperation:
        op = node.operator
        swapped_cls = cst.Or if isinstance(op, cst.And) else cst.And
        return node.with_changes(operator=swapped_cls(
            whitespace_before=op.whitespace_before,
            whitespace_after=op.whitespace_after,
        ))

    def point_fields(self, node: cst.BooleanOperation) -> Mapping[str, Any]:
        if isinstance(node.operator, cst.And):
            return {"before": "and", "after": "or"}
        return {"before": "or", "after": "and"}

    def describe(self, point: InjectionPoint) -> str:
        before = point.fields.get("before", "and")
        after = point.fields.get("after", "or")
        return f"Replaced '{before}' with '{after}' at line {point.line}; the condition now passes in cases it should reject"
