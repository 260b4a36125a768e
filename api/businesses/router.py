"""
Business API endpoints.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Request, Response

from core import errors, registry
from core.dependencies import path_id, repository_for, requested_page
from core.resource import ResourceRepository
from core.schemas import Created, LinksResponse, Page

router = APIRouter(prefix="/businesses")

get_repository = repository_for(registry.BUSINESSES)


def links(business_id: int, business: dict[str, Any]) -> dict[str, str]:
    return {
        "business": f"/businesses/{business_id}",
        "owner": f"/users/{business.get('ownerid')}",
    }


@router.get("", response_model=Page)
async def list_businesses(
    page: int = Depends(requested_page),
    repo: ResourceRepository = Depends(get_repository),
) -> Page:
    with errors.persistence_failure("Error fetching businesses list. Try again later."):
        return await repo.list_page(page)


@router.post("", status_code=201, response_model=Created, response_model_exclude_none=True)
async def create_business(
    payload: Any = Body(default=None),
    repo: ResourceRepository = Depends(get_repository),
) -> Created:
    if not repo.validate(payload):
        raise errors.ValidationFailure("Request body is not a valid business object.")

    with errors.persistence_failure("Error inserting business into DB."):
        business_id = await repo.create(payload)
    return Created(id=business_id, links=links(business_id, repo.extract(payload)))


@router.get("/{record_id}")
async def get_business(
    request: Request,
    business_id: int = Depends(path_id),
    repo: ResourceRepository = Depends(get_repository),
):
    with errors.persistence_failure("Unable to fetch business."):
        business = await repo.fetch_by_id(business_id)
    if business is None:
        return errors.not_found(request)
    return business


@router.put("/{record_id}", response_model=LinksResponse)
async def replace_business(
    request: Request,
    business_id: int = Depends(path_id),
    payload: Any = Body(default=None),
    repo: ResourceRepository = Depends(get_repository),
):
    if not repo.validate(payload):
        raise errors.ValidationFailure("Request body does not contain a valid business.")

    with errors.persistence_failure("Unable to update business."):
        updated = await repo.update_by_id(business_id, payload)
    if not updated:
        return errors.not_found(request)
    return LinksResponse(links=links(business_id, repo.extract(payload)))


@router.delete("/{record_id}", status_code=204)
async def delete_business(
    request: Request,
    business_id: int = Depends(path_id),
    repo: ResourceRepository = Depends(get_repository),
):
    with errors.persistence_failure("Unable to delete business."):
        deleted = await repo.delete_by_id(business_id)
    if not deleted:
        return errors.not_found(request)
    return Response(status_code=204)
