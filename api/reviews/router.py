"""
Review API endpoints.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Request, Response

from core import errors, registry
from core.dependencies import path_id, repository_for, requested_page
from core.resource import ResourceRepository
from core.schemas import Created, LinksResponse, Page

router = APIRouter(prefix="/reviews")

get_repository = repository_for(registry.REVIEWS)


def links(review_id: int, review: dict[str, Any]) -> dict[str, str]:
    return {
        "review": f"/reviews/{review_id}",
        "business": f"/businesses/{review.get('businessid')}",
        "user": f"/users/{review.get('userid')}",
    }


@router.get("", response_model=Page)
async def list_reviews(
    page: int = Depends(requested_page),
    repo: ResourceRepository = Depends(get_repository),
) -> Page:
    with errors.persistence_failure("Error fetching reviews list. Try again later."):
        return await repo.list_page(page)


@router.post("", status_code=201, response_model=Created, response_model_exclude_none=True)
async def create_review(
    payload: Any = Body(default=None),
    repo: ResourceRepository = Depends(get_repository),
) -> Created:
    if not repo.validate(payload):
        raise errors.ValidationFailure("Request body is not a valid review object.")

    with errors.persistence_failure("Error inserting review into DB."):
        review_id = await repo.create(payload)
    return Created(id=review_id, links=links(review_id, repo.extract(payload)))


@router.get("/{record_id}")
async def get_review(
    request: Request,
    review_id: int = Depends(path_id),
    repo: ResourceRepository = Depends(get_repository),
):
    with errors.persistence_failure("Unable to fetch review."):
        review = await repo.fetch_by_id(review_id)
    if review is None:
        return errors.not_found(request)
    return review


@router.put("/{record_id}", response_model=LinksResponse)
async def replace_review(
    request: Request,
    review_id: int = Depends(path_id),
    payload: Any = Body(default=None),
    repo: ResourceRepository = Depends(get_repository),
):
    if not repo.validate(payload):
        raise errors.ValidationFailure("Request body does not contain a valid review object.")

    with errors.persistence_failure("Unable to update review."):
        updated = await repo.update_by_id(review_id, payload)
    if not updated:
        return errors.not_found(request)
    return LinksResponse(links=links(review_id, repo.extract(payload)))


@router.delete("/{record_id}", status_code=204)
async def delete_review(
    request: Request,
    review_id: int = Depends(path_id),
    repo: ResourceRepository = Depends(get_repository),
):
    with errors.persistence_failure("Unable to delete review."):
        deleted = await repo.delete_by_id(review_id)
    if not deleted:
        return errors.not_found(request)
    return Response(status_code=204)
