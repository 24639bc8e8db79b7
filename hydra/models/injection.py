"""
Injection Models
================
Types that flow through one injection run.

    InjectionPoint      — a location where one template could apply (template output)
    InjectionCandidate  — a point plus its file, template and composite score (ranking unit)
    InjectionOptions    — validated caller options (ratio, severity, scope, language)
    InjectionResult     — a successfully applied mutation, before manifest insertion

Points and candidates live only in memory during one run. Only results are
handed back to the caller, who records them in the manifest.
"""
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field

from hydra.core.config import DEFAULT_RATIO, DEFAULT_SCOPE, DEFAULT_SEVERITY
from hydra.core.constants import MAX_SEVERITY, MIN_SEVERITY


@dataclass(frozen=True)
class InjectionPoint:
    """
    A place in one parsed file where a template can inject.

    Attributes
    ----------
    line : int
        1-based line of the matched construct.
    context : str
        Matched source text (first line for multi-line constructs).
    index : int
        Line index for line-based templates, node ordinal for tree-based ones.
    filename : str
        File the point was found in.
    fields : Mapping[str, Any]
        Template-specific data needed by ``inject`` and ``describe``.
    """
    line: int
    context: str
    index: int
    filename: str = ""
    fields: Mapping[str, Any] = field(default_factory=dict)


@dataclass
class InjectionCandidate:
    """Ranking unit: one point in one file for one template, with its score."""
    file: str
    template: Any
    point: InjectionPoint
    score: float
    adapter: Any = None
    parsed: Any = None
    original_code: str = ""


class InjectionOptions(BaseModel):
    ratio: int = Field(default=DEFAULT_RATIO, ge=1)
    severity: int = Field(default=DEFAULT_SEVERITY, ge=MIN_SEVERITY, le=MAX_SEVERITY)
    scope: str = DEFAULT_SCOPE
    language: Optional[str] = None


class InjectionResult(BaseModel):
    file: str
    line: int
    category: str
    severity: int
    description: str
    original_code: str
    injected_code: str
    diff: str
    template: str = ""
