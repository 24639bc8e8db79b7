"""
POST /found
POST /purge
Reviewer actions: claim a found bug, or revert every injected bug.
"""
from fastapi import APIRouter, Depends
from pydantic import BaseModel, field_validator

from hydra.agents.session import HydraSession
from hydra.api.deps import get_session, to_http_error
from hydra.core.errors import HydraError

router = APIRouter()


class FoundRequest(BaseModel):
    bug_id: str
    reviewer: str = "anonymous"

    @field_validator("bug_id", "reviewer")
    @classmethod
    def strip_value(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v.strip()


@router.post("/found")
def mark_found(request: FoundRequest, session: HydraSession = Depends(get_session)):
    try:
        bug = session.mark_found(request.bug_id, request.reviewer)
    except HydraError as e:
        raise to_http_error(e)
    return bug.model_dump(by_alias=True, exclude={"original_code"})


@router.post("/purge")
def purge(session: HydraSession = Depends(get_session)):
    try:
        summary = session.purge()
    except HydraError as e:
        raise to_http_error(e)
    return {"reverted": summary.reverted, "errors": summary.errors}
