# salon/deps.py

from fastapi import Depends, HTTPException, Request
from sqlmodel import Session

from .cache import LocalCache
from .db import get_session
from .errors import SchedulingError
from .schemas import CacheSnapshot
from .store import SQLDocumentStore
from .timegrid import TimeGrid, get_time_grid


def get_cache(request: Request) -> LocalCache:
    return request.app.state.cache


def get_snapshot(cache: LocalCache = Depends(get_cache)) -> CacheSnapshot:
    return cache.snapshot()


def get_store(
    session: Session = Depends(get_session),
    cache: LocalCache = Depends(get_cache),
) -> SQLDocumentStore:
    # every committed write is pushed to the local cache
    return SQLDocumentStore(session, listeners=[cache.apply])


def get_grid() -> TimeGrid:
    return get_time_grid()


def http_error(exc: SchedulingError) -> HTTPException:
    return HTTPException(status_code=exc.status_code, detail=exc.message)


def require_found(record, what: str):
    if record is None:
        raise HTTPException(status_code=404, detail=f"{what} not found")
    return record
