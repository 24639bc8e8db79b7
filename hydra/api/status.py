"""
GET /status
GET /reveal
Session progress polling, and spoiler mode listing every injected bug.
"""
from fastapi import APIRouter, Depends

from hydra.agents.session import HydraSession
from hydra.api.deps import get_session, to_http_error
from hydra.core.errors import NoActiveSessionError
from hydra.scoring.difficulty import difficulty_label, rate_difficulty

router = APIRouter()


@router.get("/status")
def get_status(session: HydraSession = Depends(get_session)):
    return session.status()


@router.get("/reveal")
def reveal(session: HydraSession = Depends(get_session)):
    manifest = session.store.load()
    if manifest is None:
        raise to_http_error(NoActiveSessionError())

    bugs = []
    for bug in manifest.injected_bugs:
        entry = bug.model_dump(by_alias=True, exclude={"original_code"})
        difficulty = rate_difficulty(bug)
        entry["difficulty"] = difficulty
        entry["difficultyLabel"] = difficulty_label(difficulty)
        bugs.append(entry)
    return {"branchId": manifest.branch_id, "bugs": bugs}
