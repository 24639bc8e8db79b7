"""
GET /score
Difficulty-weighted scoreboard for the active session.
"""
from fastapi import APIRouter, Depends

from hydra.agents.session import HydraSession
from hydra.api.deps import get_session, to_http_error
from hydra.core.errors import NoActiveSessionError
from hydra.scoring.scoreboard import build_scoreboard

router = APIRouter()


@router.get("/score")
def get_score(session: HydraSession = Depends(get_session)):
    manifest = session.store.load()
    if manifest is None:
        raise to_http_error(NoActiveSessionError())
    return build_scoreboard(manifest)
