from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import pytest
from fastapi.testclient import TestClient

from core.store import StoreError, get_store
from main import app


class MemoryStore:
    """
    In-memory stand-in for PostgresStore with the same primitives.
    """

    def __init__(self) -> None:
        self.tables: dict[str, dict[int, dict[str, Any]]] = {}
        self.next_ids: dict[str, int] = {}
        self.fail = False

    def _check(self) -> None:
        if self.fail:
            raise StoreError("store is down")

    def _rows(self, table: str, where: Mapping[str, Any] | None = None) -> list[dict[str, Any]]:
        rows = [self.tables.get(table, {})[k] for k in sorted(self.tables.get(table, {}))]
        if where:
            rows = [r for r in rows if all(r.get(c) == v for c, v in where.items())]
        return rows

    def seed(self, table: str, **record: Any) -> int:
        new_id = self.next_ids.get(table, 0) + 1
        if "id" in record:
            new_id = int(record.pop("id"))
        self.next_ids[table] = max(new_id, self.next_ids.get(table, 0))
        self.tables.setdefault(table, {})[new_id] = {"id": new_id, **record}
        return new_id

    async def count(self, table: str, where: Mapping[str, Any] | None = None) -> int:
        self._check()
        return len(self._rows(table, where))

    async def insert(self, table: str, record: Mapping[str, Any]) -> int:
        self._check()
        return self.seed(table, **dict(record))

    async def fetch_by_id(self, table: str, record_id: int) -> dict[str, Any] | None:
        self._check()
        row = self.tables.get(table, {}).get(record_id)
        return dict(row) if row is not None else None

    async def update_by_id(self, table: str, record_id: int, record: Mapping[str, Any]) -> int:
        self._check()
        row = self.tables.get(table, {}).get(record_id)
        if row is None:
            return 0
        row.update(record)
        return 1

    async def delete_by_id(self, table: str, record_id: int) -> int:
        self._check()
        return 1 if self.tables.get(table, {}).pop(record_id, None) is not None else 0

    async def list_window(
        self,
        table: str,
        offset: int,
        limit: int,
        where: Mapping[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        self._check()
        return [dict(r) for r in self._rows(table, where)[offset:offset + limit]]

    async def list_where_in(self, table: str, column: str, values: Sequence[Any]) -> list[dict[str, Any]]:
        self._check()
        return [dict(r) for r in self._rows(table) if r.get(column) in set(values)]


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    try:
        # No `with`: skip lifespan so no DB pool is created.
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def business_payload() -> dict[str, Any]:
    return {
        "ownerid": 1,
        "name": "Block 15",
        "address": "300 SW Jefferson Ave.",
        "city": "Corvallis",
        "state": "OR",
        "zip": "97333",
        "phone": "541-758-2077",
        "category": "Restaurant",
        "subcategory": "Brewpub",
        "website": "http://block15.com",
    }
