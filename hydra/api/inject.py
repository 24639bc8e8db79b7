"""
POST /inject
Records a real fix and injects related bugs into the project.

Body:
    file, description, line, diff   — the fix event
    ratio, severity, scope, language — optional injection options
                                       (configured defaults when omitted)
"""
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from hydra.agents.session import HydraSession
from hydra.api.deps import get_session, to_http_error
from hydra.core.errors import HydraError
from hydra.models.fix_event import FixEvent

router = APIRouter()


class InjectRequest(BaseModel):
    file: str
    description: str = ""
    line: int = 0
    diff: str = ""
    ratio: Optional[int] = None
    severity: Optional[int] = None
    scope: Optional[str] = None
    language: Optional[str] = None


@router.post("/inject")
def inject(request: InjectRequest, session: HydraSession = Depends(get_session)):
    fix = FixEvent(file=request.file, description=request.description, line=request.line, diff=request.diff)
    options = request.model_dump(
        include={"ratio", "severity", "scope", "language"},
        exclude_none=True,
    )
    try:
        bugs = session.record_fix_and_inject(fix, options)
    except HydraError as e:
        raise to_http_error(e)
    return {
        "injected": len(bugs),
        "bugs": [b.model_dump(by_alias=True, exclude={"original_code"}) for b in bugs],
    }
