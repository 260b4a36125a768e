"""
User API endpoints.

Besides the uniform CRUD routes this exposes two kinds of views:
- /users/{id}/businesses|reviews|photos: one user's records, paginated
- /users/reviews|photos: a page of users with their reviews/photos attached
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Request, Response

from core import errors, registry
from core.dependencies import path_id, repository_for, requested_page
from core.resource import ResourceRepository
from core.schemas import Created, LinksResponse, Page
from core.store import PostgresStore, get_store

from . import service

router = APIRouter(prefix="/users")

get_repository = repository_for(registry.USERS)


def links(user_id: int) -> dict[str, str]:
    return {"user": f"/users/{user_id}"}


@router.get("", response_model=Page)
async def list_users(
    page: int = Depends(requested_page),
    repo: ResourceRepository = Depends(get_repository),
) -> Page:
    with errors.persistence_failure("Error fetching users list. Try again later."):
        return await repo.list_page(page)


# Declared before /{user_id} so the literal paths win the match.
@router.get("/reviews", response_model=Page)
async def list_users_with_reviews(
    page: int = Depends(requested_page),
    store: PostgresStore = Depends(get_store),
) -> Page:
    with errors.persistence_failure("Unable to fetch users' reviews."):
        return await service.users_page_with(registry.REVIEWS, store=store, requested_page=page)


@router.get("/photos", response_model=Page)
async def list_users_with_photos(
    page: int = Depends(requested_page),
    store: PostgresStore = Depends(get_store),
) -> Page:
    with errors.persistence_failure("Unable to fetch users' photos."):
        return await service.users_page_with(registry.PHOTOS, store=store, requested_page=page)


@router.post("", status_code=201, response_model=Created, response_model_exclude_none=True)
async def create_user(
    payload: Any = Body(default=None),
    repo: ResourceRepository = Depends(get_repository),
) -> Created:
    if not repo.validate(payload):
        raise errors.ValidationFailure("Request body is not a valid user object.")

    with errors.persistence_failure("Error inserting user into DB."):
        user_id = await repo.create(payload)
    return Created(id=user_id)


@router.get("/{record_id}")
async def get_user(
    request: Request,
    user_id: int = Depends(path_id),
    repo: ResourceRepository = Depends(get_repository),
):
    with errors.persistence_failure("Unable to fetch user."):
        user = await repo.fetch_by_id(user_id)
    if user is None:
        return errors.not_found(request)
    return user


@router.put("/{record_id}", response_model=LinksResponse)
async def replace_user(
    request: Request,
    user_id: int = Depends(path_id),
    payload: Any = Body(default=None),
    repo: ResourceRepository = Depends(get_repository),
):
    if not repo.validate(payload):
        raise errors.ValidationFailure("Request body does not contain a valid user object.")

    with errors.persistence_failure("Unable to update user."):
        updated = await repo.update_by_id(user_id, payload)
    if not updated:
        return errors.not_found(request)
    return LinksResponse(links=links(user_id))


@router.delete("/{record_id}", status_code=204)
async def delete_user(
    request: Request,
    user_id: int = Depends(path_id),
    repo: ResourceRepository = Depends(get_repository),
):
    with errors.persistence_failure("Unable to delete user."):
        deleted = await repo.delete_by_id(user_id)
    if not deleted:
        return errors.not_found(request)
    return Response(status_code=204)


async def _owned(related: str, user_id: int, request: Request, store: PostgresStore, page: int):
    with errors.persistence_failure(f"Unable to fetch user's {related}."):
        result = await service.owned_page(related, user_id, store=store, requested_page=page)
    if result is None:
        return errors.not_found(request)
    return result


@router.get("/{record_id}/businesses", response_model=Page)
async def list_user_businesses(
    request: Request,
    user_id: int = Depends(path_id),
    page: int = Depends(requested_page),
    store: PostgresStore = Depends(get_store),
):
    return await _owned(registry.BUSINESSES, user_id, request, store, page)


@router.get("/{record_id}/reviews", response_model=Page)
async def list_user_reviews(
    request: Request,
    user_id: int = Depends(path_id),
    page: int = Depends(requested_page),
    store: PostgresStore = Depends(get_store),
):
    return await _owned(registry.REVIEWS, user_id, request, store, page)


@router.get("/{record_id}/photos", response_model=Page)
async def list_user_photos(
    request: Request,
    user_id: int = Depends(path_id),
    page: int = Depends(requested_page),
    store: PostgresStore = Depends(get_store),
):
    return await _owned(registry.PHOTOS, user_id, request, store, page)
