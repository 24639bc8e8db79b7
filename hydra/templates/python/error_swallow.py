"""
error-swallow (Python)
Replaces the body of a typed ``except`` clause with ``pass``.

    except ValueError:            except ValueError:
        log.error("bad input")  ->    pass
        raise
"""
from typing import Any, Mapping

import libcst as cst
import libcst.matchers as m

from hydra.models.injection import InjectionPoint
from hydra.templates.base import CSTTemplate, node_code

_PASS_ONLY = m.IndentedBlock(body=[m.SimpleStatementLine(body=[m.Pass()])])


class ErrorSwallowTemplate(CSTTemplate):
    name = "error-swallow"
    category = "error-handling"
    description = "Replaces an except block with 'pass', silently swallowing the error"
    node_type = cst.ExceptHandler

    def matches(self, node: cst.ExceptHandler) -> bool:
        return (
            node.type is not None
            and isinstance(node.body, cst.IndentedBlock)
            and not m.matches(node.body, _PASS_ONLY)
        )

    def mutate(self, node: cst.ExceptHandler) -> cst.ExceptHandler:
        swallowed = cst.SimpleStatementLine(body=[cst.Pass()])
        return node.with_changes(body=node.body.with_changes(body=[swallowed]))

    def point_fields(self, node: cst.ExceptHandler) -> Mapping[str, Any]:
        return {"exception": node_code(node.type)}

    def describe(self, point: InjectionPoint) -> str:
        exc = point.fields.get("exception", "Exception")
        return f"Replaced the 'except {exc}' handler at line {point.line} with 'pass'; failures are now silently ignored"
