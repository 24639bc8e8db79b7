"""
API Dependencies
================
Shared FastAPI dependencies and the mapping from engine errors to HTTP errors.
"""
from fastapi import HTTPException

from hydra.agents.session import HydraSession
from hydra.core.errors import (
    BugNotFoundError,
    HydraError,
    InvalidRequestError,
    NoActiveSessionError,
    ScopeNotFoundError,
)


def get_session() -> HydraSession:
    """Session bound to the configured project root (overridden in tests)."""
    return HydraSession()


def to_http_error(error: HydraError) -> HTTPException:
    if isinstance(error, (NoActiveSessionError, BugNotFoundError, ScopeNotFoundError)):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, InvalidRequestError):
        return HTTPException(status_code=400, detail=str(error))
    return HTTPException(status_code=500, detail=str(error))
