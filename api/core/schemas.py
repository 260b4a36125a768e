"""
Response models shared by all resource routers.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Page(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    items: list[dict[str, Any]]
    page: int
    total_pages: int = Field(..., alias="totalPages")
    page_size: int = Field(..., alias="pageSize")
    count: int


class Created(BaseModel):
    id: int
    links: dict[str, str] | None = None


class LinksResponse(BaseModel):
    links: dict[str, str]
