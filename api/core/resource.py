"""
Generic resource repository.

One instance per resource type, parameterized by the registry schema and an
injected store. Callers validate before `create`/`update_by_id`; the
repository only extracts, converts and persists.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from . import pagination, registry
from .schema import coerce_fields, extract_valid_fields, validate_against_schema
from .schemas import Page
from .store import PostgresStore

logger = logging.getLogger(__name__)


class ResourceRepository:
    def __init__(self, resource: str, store: PostgresStore, *, page_size: int | None = None) -> None:
        self.resource = resource
        self.schema = registry.get_schema(resource)
        self.store = store
        self.page_size = page_size or pagination.page_size()

    def validate(self, record: Any) -> bool:
        return validate_against_schema(record, self.schema)

    def extract(self, record: Mapping[str, Any]) -> dict[str, Any]:
        return extract_valid_fields(record, self.schema)

    def prepare(self, record: Mapping[str, Any]) -> dict[str, Any]:
        """
        Extract, then convert values to column types. Raises FieldTypeError.
        """
        return coerce_fields(self.extract(record), self.schema)

    async def create(self, record: Mapping[str, Any]) -> int:
        new_id = await self.store.insert(self.resource, self.prepare(record))
        logger.info("resource_created resource=%s id=%s", self.resource, new_id)
        return new_id

    async def fetch_by_id(self, record_id: int) -> dict[str, Any] | None:
        return await self.store.fetch_by_id(self.resource, record_id)

    async def update_by_id(self, record_id: int, record: Mapping[str, Any]) -> bool:
        affected = await self.store.update_by_id(self.resource, record_id, self.prepare(record))
        return affected > 0

    async def delete_by_id(self, record_id: int) -> bool:
        affected = await self.store.delete_by_id(self.resource, record_id)
        if affected:
            logger.info("resource_deleted resource=%s id=%s", self.resource, record_id)
        return affected > 0

    async def list_page(self, requested_page: int, *, where: Mapping[str, Any] | None = None) -> Page:
        count = await self.store.count(self.resource, where)
        window = pagination.paginate(requested_page, count, self.page_size)
        items = await self.store.list_window(self.resource, window.offset, window.page_size, where)
        return Page(
            items=items,
            page=window.page,
            total_pages=window.total_pages,
            page_size=window.page_size,
            count=window.count,
        )

    async def list_by(self, column: str, values: Sequence[Any]) -> list[dict[str, Any]]:
        return await self.store.list_where_in(self.resource, column, values)
