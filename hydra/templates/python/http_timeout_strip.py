"""
http-timeout-strip (Python)
Removes ``timeout=`` from a requests / httpx call so a stalled server hangs the caller.
"""
from typing import Any, Mapping

import libcst as cst
from libcst.helpers import get_full_name_for_node

from hydra.models.injection import InjectionPoint
from hydra.templates.base import CSTTemplate

_CLIENT_MODULES = {"requests", "httpx"}
_METHODS = {"get", "post", "put", "patch", "delete", "head", "options", "request"}


def _timeout_index(node: cst.Call) -> int:
    for i, arg in enumerate(node.args):
        if arg.keyword is not None and arg.keyword.value == "timeout":
            return i
    return -1


class HttpTimeoutStripTemplate(CSTTemplate):
    name = "http-timeout-strip"
    category = "resource"
    description = "Removes the timeout from an outgoing HTTP call, allowing it to hang forever"
    node_type = cst.Call

    def matches(self, node: cst.Call) -> bool:
        full = get_full_name_for_node(node.func) or ""
        parts = full.split(".")
        if len(parts) != 2 or parts[0] not in _CLIENT_MODULES or parts[1] not in _METHODS:
            return False
        return _timeout_index(node) >= 0

    def mutate(self, node: cst.Call) -> cst.Call:
        idx = _timeout_index(node)
        removed = node.args[idx]
        args = list(node.args[:idx]) + list(node.args[idx + 1:])
        if idx == len(node.args) - 1 and args:
            # The new last argument takes over the removed one's comma (or lack of it)
            args[-1] = args[-1].with_changes(comma=removed.comma)
        return node.with_changes(args=args)

    def point_fields(self, node: cst.Call) -> Mapping[str, Any]:
        return {"call": get_full_name_for_node(node.func) or "request"}

    def describe(self, point: InjectionPoint) -> str:
        call = point.fields.get("call", "request")
        return f"Removed 'timeout=' from {call}() at line {point.line}; a slow server now blocks this call indefinitely"
