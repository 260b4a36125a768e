"""
Photo API endpoints.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Request, Response

from core import errors, registry
from core.dependencies import path_id, repository_for, requested_page
from core.resource import ResourceRepository
from core.schemas import Created, LinksResponse, Page

router = APIRouter(prefix="/photos")

get_repository = repository_for(registry.PHOTOS)


def links(photo_id: int, photo: dict[str, Any]) -> dict[str, str]:
    return {
        "photo": f"/photos/{photo_id}",
        "business": f"/businesses/{photo.get('businessid')}",
        "user": f"/users/{photo.get('userid')}",
    }


@router.get("", response_model=Page)
async def list_photos(
    page: int = Depends(requested_page),
    repo: ResourceRepository = Depends(get_repository),
) -> Page:
    with errors.persistence_failure("Error fetching photos list. Try again later."):
        return await repo.list_page(page)


@router.post("", status_code=201, response_model=Created, response_model_exclude_none=True)
async def create_photo(
    payload: Any = Body(default=None),
    repo: ResourceRepository = Depends(get_repository),
) -> Created:
    if not repo.validate(payload):
        raise errors.ValidationFailure("Request body is not a valid photo object.")

    with errors.persistence_failure("Error inserting photo into DB."):
        photo_id = await repo.create(payload)
    return Created(id=photo_id, links=links(photo_id, repo.extract(payload)))


@router.get("/{record_id}")
async def get_photo(
    request: Request,
    photo_id: int = Depends(path_id),
    repo: ResourceRepository = Depends(get_repository),
):
    with errors.persistence_failure("Unable to fetch photo."):
        photo = await repo.fetch_by_id(photo_id)
    if photo is None:
        return errors.not_found(request)
    return photo


@router.put("/{record_id}", response_model=LinksResponse)
async def replace_photo(
    request: Request,
    photo_id: int = Depends(path_id),
    payload: Any = Body(default=None),
    repo: ResourceRepository = Depends(get_repository),
):
    if not repo.validate(payload):
        raise errors.ValidationFailure("Request body does not contain a valid photo object.")

    with errors.persistence_failure("Unable to update photo."):
        updated = await repo.update_by_id(photo_id, payload)
    if not updated:
        return errors.not_found(request)
    return LinksResponse(links=links(photo_id, repo.extract(payload)))


@router.delete("/{record_id}", status_code=204)
async def delete_photo(
    request: Request,
    photo_id: int = Depends(path_id),
    repo: ResourceRepository = Depends(get_repository),
):
    with errors.persistence_failure("Unable to delete photo."):
        deleted = await repo.delete_by_id(photo_id)
    if not deleted:
        return errors.not_found(request)
    return Response(status_code=204)
