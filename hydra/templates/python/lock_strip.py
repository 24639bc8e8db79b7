"""
lock-strip (Python)
Unwraps a ``with <lock>:`` block, running its body without holding the lock.

    with self._lock:              self.count += 1
        self.count += 1     ->

A comment on the ``with`` line moves above the unwrapped body. Blocks ending in
a comment are not matched.
"""
from typing import Any, Mapping

import libcst as cst

from hydra.models.injection import InjectionPoint
from hydra.templates.base import CSTTemplate, node_code


class LockStripTemplate(CSTTemplate):
    name = "lock-strip"
    category = "concurrency"
    description = "Removes a 'with lock:' guard, leaving shared state unprotected"
    node_type = cst.With

    def matches(self, node: cst.With) -> bool:
        if node.asynchronous is not None or len(node.items) != 1:
            return False
        item = node.items[0]
        if item.asname is not None or not isinstance(node.body, cst.IndentedBlock):
            return False
        # Trailing comments inside the block have no statement to ride on
        if any(line.comment is not None for line in node.body.footer):
            return False
        return "lock" in node_code(item.item).lower()

    def mutate(self, node: cst.With) -> cst.FlattenSentinel:
        body = list(node.body.body)
        first = body[0]
        header = []
        if node.body.header.comment is not None:
            header.append(cst.EmptyLine(indent=True, comment=node.body.header.comment))
        body[0] = first.with_changes(leading_lines=[*node.leading_lines, *header, *first.leading_lines])
        return cst.FlattenSentinel(body)

    def point_fields(self, node: cst.With) -> Mapping[str, Any]:
        return {"lock": node_code(node.items[0].item)}

    def describe(self, point: InjectionPoint) -> str:
        lock = point.fields.get("lock", "lock")
        return f"Removed 'with {lock}:' at line {point.line}; the block now races with other threads"
