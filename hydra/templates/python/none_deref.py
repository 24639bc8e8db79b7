"""
none-deref (Python)
Inverts an ``is not None`` guard so the guarded block runs exactly when the value is None.

    if user is not None:   ->   if user is None:
"""
from typing import Any, Mapping

import libcst as cst
import libcst.matchers as m

from hydra.models.injection import InjectionPoint
from hydra.templates.base import CSTTemplate, node_code


class NoneDerefTemplate(CSTTemplate):
    name = "none-deref"
    category = "null-safety"
    description = "Inverts an 'is not None' guard, letting None reach attribute access"
    node_type = cst.Comparison

    def matches(self, node: cst.Comparison) -> bool:
        if len(node.comparisons) != 1:
            return False
        target = node.comparisons[0]
        return isinstance(target.operator, cst.IsNot) and m.matches(target.comparator, m.Name("None"))

    def mutate(self, node: cst.Comparison) -> cst.Comparison:
        target = node.comparisons[0]
        op = target.operator
        flipped = cst.Is(whitespace_before=op.whitespace_before, whitespace_after=op.whitespace_after)
        return node.with_changes(comparisons=[target.with_changes(operator=flipped)])

    def point_fields(self, node: cst.Comparison) -> Mapping[str, Any]:
        return {"subject": node_code(node.left)}

    def describe(self, point: InjectionPoint) -> str:
        subject = point.fields.get("subject", "value")
        return (
            f"Changed '{subject} is not None' to '{subject} is None' at line {point.line}; "
            f"the guarded code now runs only when {subject} is None"
        )
