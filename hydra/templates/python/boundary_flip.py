"""
boundary-flip (Python)
Turns a strict comparison into an inclusive one (or back), moving a boundary by one.

    if retries < limit:   ->   if retries <= limit:
"""
from typing import Any, Mapping

import libcst as cst

from hydra.models.injection import InjectionPoint
from hydra.templates.base import CSTTemplate

_FLIPS = {
    cst.LessThan: (cst.LessThanEqual, "<", "<="),
    cst.LessThanEqual: (cst.LessThan, "<=", "<"),
    cst.GreaterThan: (cst.GreaterThanEqual, ">", ">="),
    cst.GreaterThanEqual: (cst.GreaterThan, ">=", ">"),
}


class BoundaryFlipTemplate(CSTTemplate):
    name = "boundary-flip"
    category = "logic"
    description = "Swaps a strict comparison for an inclusive one, shifting a boundary by one"
    node_type = cst.Comparison

    def matches(self, node: cst.Comparison) -> bool:
        return len(node.comparisons) == 1 and type(node.comparisons[0].operator) in _FLIPS

    def mutate(self, node: cst.Comparison) -> cst.Comparison:
        target = node.comparisons[0]
        op = target.operator
        flipped_cls = _FLIPS[type(op)][0]
        flipped = flipped_cls(
            whitespace_before=op.whitespace_before,
            whitespace_after=op.whitespace_after,
        )
        return node.with_changes(comparisons=[target.with_changes(operator=flipped)])

    def point_fields(self, node: cst.Comparison) -> Mapping[str, Any]:
        _, before, after = _FLIPS[type(node.comparisons[0].operator)]
        return {"before": before, "after": after}

    def describe(self, point: InjectionPoint) -> str:
        before = point.fields.get("before", "<")
        after = point.fields.get("after", "<=")
        return f"Changed '{before}' to '{after}' at line {point.line}; the boundary value is now handled on the wrong side"
