"""
FastAPI dependencies that hand routers a repository bound to the request's store.
"""

from __future__ import annotations

from collections.abc import Callable

from fastapi import Depends, HTTPException, Path, Query

from . import pagination
from .resource import ResourceRepository
from .schema import parse_bigint
from .store import PostgresStore, get_store


def repository_for(resource: str) -> Callable[..., ResourceRepository]:
    def _dependency(store: PostgresStore = Depends(get_store)) -> ResourceRepository:
        return ResourceRepository(resource, store)

    _dependency.__name__ = f"get_{resource}_repository"
    return _dependency


def requested_page(page: str | None = Query(default=None)) -> int:
    return pagination.parse_page(page)


def path_id(record_id: str = Path(...)) -> int:
    """
    Id from `/{record_id}`. Anything that cannot be a stored id is a 404,
    answered by the app's generic not-found handler.
    """
    raw = record_id.strip()
    value = parse_bigint(raw) if raw.isdigit() else None
    if value is None:
        raise HTTPException(status_code=404)
    return value
