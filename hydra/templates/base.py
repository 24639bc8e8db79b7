"""
Template Contract
=================
Every mutation rule implements ``BugTemplate``:

    name, category, description, language
    find_injection_points(parsed, filename) -> list[InjectionPoint]
    inject(parsed, point) -> parsed
    describe(point) -> str

Contract:
    - ``find_injection_points`` is pure; an empty list is not an error.
    - ``inject`` returns a NEW parsed value with exactly one change, and
      only accepts points its own ``find_injection_points`` produced for an
      equal parsed value. A point that no longer matches raises
      ``InjectionError``.
    - ``describe`` returns a non-empty, human-readable impact statement.
      Callers fall back to ``description`` if it raises or returns "".
    - ``category`` is a free-form tag used only for scoring.

Two helpers cover the two adapter strategies:
    CSTTemplate  — libcst trees; points are node ORDINALS in pre-order
                   traversal, never node identities
    LineTemplate — line tuples; points are line indices found by regex
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional, Pattern, Sequence, Tuple, Type, Union

import libcst as cst
from libcst.metadata import MetadataWrapper, PositionProvider

from hydra.core.errors import InjectionError
from hydra.models.injection import InjectionPoint
from hydra.parser.line_parser import ParsedLines, find_matching_lines


class BugTemplate(ABC):
    name: str = ""
    category: str = ""
    description: str = ""
    language: str = ""

    @abstractmethod
    def find_injection_points(self, parsed: Any, filename: str = "") -> List[InjectionPoint]:
        ...

    @abstractmethod
    def inject(self, parsed: Any, point: InjectionPoint) -> Any:
        ...

    def describe(self, point: InjectionPoint) -> str:
        return f"{self.description} (line {point.line})"

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.language}/{self.name}>"


# ---------------------------------------------------------------------------
# Tree strategy (libcst)
# ---------------------------------------------------------------------------
_EMPTY_MODULE = cst.Module(body=[])


def node_code(node: cst.CSTNode) -> str:
    """Source text of a detached node."""
    return _EMPTY_MODULE.code_for_node(node)


class _PointCollector(cst.CSTVisitor):
    METADATA_DEPENDENCIES = (PositionProvider,)

    def __init__(self, template: "CSTTemplate", module: cst.Module, filename: str) -> None:
        super().__init__()
        self.template = template
        self.module = module
        self.filename = filename
        self.points: List[InjectionPoint] = []
        self._ordinal = 0

    def on_visit(self, node: cst.CSTNode) -> bool:
        if isinstance(node, self.template.node_type) and self.template.matches(node):
            pos = self.get_metadata(PositionProvider, node)
            code = self.module.code_for_node(node).strip()
            self.points.append(InjectionPoint(
                line=pos.start.line,
                context=code.splitlines()[0] if code else "",
                index=self._ordinal,
                filename=self.filename,
                fields=self.template.point_fields(node),
            ))
            self._ordinal += 1
        return True


class _OrdinalTransformer(cst.CSTTransformer):
    def __init__(self, template: "CSTTemplate", ordinal: int) -> None:
        super().__init__()
        self.template = template
        self.ordinal = ordinal
        self.applied = False
        self._count = 0
        self._target: Optional[cst.CSTNode] = None

    def on_visit(self, node: cst.CSTNode) -> bool:
        if self._target is None and isinstance(node, self.template.node_type) \
                and self.template.matches(node):
            if self._count == self.ordinal:
                self._target = node
            self._count += 1
        return True

    def on_leave(self, original_node, updated_node):
        if original_node is self._target and not self.applied:
            self.applied = True
            return self.template.mutate(updated_node)
        return updated_node


class CSTTemplate(BugTemplate):
    """
    Base for libcst templates.

    Subclasses set ``node_type`` and implement ``matches(node)`` (pure test on
    one node) and ``mutate(node)`` (returns the replacement node, a
    ``FlattenSentinel`` or a ``RemovalSentinel``). ``point_fields`` may add
    data for ``describe``.
    """
    language = "python"
    node_type: Union[Type[cst.CSTNode], Tuple[Type[cst.CSTNode], ...]] = cst.CSTNode

    @abstractmethod
    def matches(self, node: cst.CSTNode) -> bool:
        ...

    @abstractmethod
    def mutate(self, node: cst.CSTNode) -> Any:
        ...

    def point_fields(self, node: cst.CSTNode) -> Mapping[str, Any]:
        return {}

    def find_injection_points(self, parsed: cst.Module, filename: str = "") -> List[InjectionPoint]:
        wrapper = MetadataWrapper(parsed)
        collector = _PointCollector(self, wrapper.module, filename)
        wrapper.visit(collector)
        return collector.points

    def inject(self, parsed: cst.Module, point: InjectionPoint) -> cst.Module:
        transformer = _OrdinalTransformer(self, point.index)
        mutated = parsed.visit(transformer)
        if not transformer.applied:
            raise InjectionError(
                f"{self.name}: no matching node #{point.index} (line {point.line})"
            )
        return mutated


# ---------------------------------------------------------------------------
# Line strategy
# ---------------------------------------------------------------------------
class LineTemplate(BugTemplate):
    """
    Base for regex-over-lines templates.

    Subclasses set ``pattern`` and either ``removes_line = True`` or implement
    ``rewrite(line, point)``. ``accepts`` can filter points using the
    surrounding lines.
    """
    pattern: Pattern[str]
    comment_prefixes: Sequence[str] = ("//", "/*", "*")
    removes_line: bool = False

    def accepts(self, parsed: ParsedLines, point: InjectionPoint) -> bool:
        return True

    def rewrite(self, line: str, point: InjectionPoint) -> str:
        raise NotImplementedError(f"{self.name} does not rewrite lines")

    def find_injection_points(self, parsed: ParsedLines, filename: str = "") -> List[InjectionPoint]:
        points = find_matching_lines(parsed, self.pattern, filename, self.comment_prefixes)
        return [p for p in points if self.accepts(parsed, p)]

    def inject(self, parsed: ParsedLines, point: InjectionPoint) -> ParsedLines:
        if point.index >= len(parsed) or not self.pattern.search(parsed.lines[point.index]):
            raise InjectionError(f"{self.name}: line {point.line} no longer matches")
        if self.removes_line:
            return parsed.remove_line(point.index)
        return parsed.replace_line(point.index, self.rewrite(parsed.lines[point.index], point))

    @staticmethod
    def match_fields(point: InjectionPoint) -> Dict[str, Any]:
        return dict(point.fields.get("groups") or {})
