"""
negation-strip (Python)
Drops a ``not`` so the condition means the opposite.
"""
from typing import Any, Mapping

import libcst as cst

from hydra.models.injection import InjectionPoint
from hydra.templates.base import CSTTemplate, node_code


class NegationStripTemplate(CSTTemplate):
    name = "negation-strip"
    category = "logic"
    description = "Removes a 'not' operator, inverting the condition"
    node_type = cst.UnaryOperation

    def matches(self, node: cst.UnaryOperation) -> bool:
        return isinstance(node.operator, cst.Not)

    def mutate(self, node: cst.UnaryOperation) -> cst.BaseExpression:
        inner = node.expression
        if node.lpar and not inner.lpar:
            return inner.with_changes(lpar=node.lpar, rpar=node.rpar)
        return inner

    def point_fields(self, node: cst.UnaryOperation) -> Mapping[str, Any]:
        return {"operand": node_code(node.expression)}

    def describe(self, point: InjectionPoint) -> str:
        operand = point.fields.get("operand", "condition")
        return f"Removed 'not' before '{operand}' at line {point.line}; the branch now runs in the opposite case"
