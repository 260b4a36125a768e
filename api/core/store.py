"""
Store primitives for resource tables (raw SQL over `core.db`).

Repositories never talk to asyncpg directly; they receive a store through
the `get_store` FastAPI dependency so tests can swap in an in-memory one.

Table and column names are never taken from the client: tables come from the
registry and columns from extracted (schema-filtered) records. They are still
quoted as identifiers.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from typing import Any

import asyncpg

from . import db

logger = logging.getLogger(__name__)


class StoreError(RuntimeError):
    pass


def _ident(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


def _where_clause(where: Mapping[str, Any] | None, *, start: int = 1) -> tuple[str, list[Any]]:
    if not where:
        return "", []
    parts = [f"{_ident(column)} = ${i}" for i, column in enumerate(where, start=start)]
    return " WHERE " + " AND ".join(parts), list(where.values())


@contextmanager
def _translate_errors(action: str, table: str) -> Iterator[None]:
    try:
        yield
    except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as exc:
        logger.warning("store_error action=%s table=%s error=%s", action, table, type(exc).__name__)
        raise StoreError(f"Store {action} on {table} failed.") from exc


class PostgresStore:
    async def count(self, table: str, where: Mapping[str, Any] | None = None) -> int:
        clause, args = _where_clause(where)
        with _translate_errors("count", table):
            value = await db.fetch_value(f"SELECT count(*) FROM {_ident(table)}{clause}", *args)
        return int(value or 0)

    async def insert(self, table: str, record: Mapping[str, Any]) -> int:
        columns = ", ".join(_ident(c) for c in record)
        placeholders = ", ".join(f"${i}" for i in range(1, len(record) + 1))
        sql = f"INSERT INTO {_ident(table)} ({columns}) VALUES ({placeholders}) RETURNING id"

        with _translate_errors("insert", table):
            row = await db.fetch_one(sql, *record.values())
        if row is None or "id" not in row:
            raise StoreError(f"Insert into {table} returned no id.")
        return int(row["id"])

    async def fetch_by_id(self, table: str, record_id: int) -> dict[str, Any] | None:
        with _translate_errors("fetch", table):
            return await db.fetch_one(f"SELECT * FROM {_ident(table)} WHERE id = $1", record_id)

    async def update_by_id(self, table: str, record_id: int, record: Mapping[str, Any]) -> int:
        assignments = ", ".join(f"{_ident(c)} = ${i}" for i, c in enumerate(record, start=2))
        with _translate_errors("update", table):
            status = await db.execute(
                f"UPDATE {_ident(table)} SET {assignments} WHERE id = $1",
                record_id,
                *record.values(),
            )
        return db.affected_rows(status)

    async def delete_by_id(self, table: str, record_id: int) -> int:
        with _translate_errors("delete", table):
            status = await db.execute(f"DELETE FROM {_ident(table)} WHERE id = $1", record_id)
        return db.affected_rows(status)

    async def list_window(
        self,
        table: str,
        offset: int,
        limit: int,
        where: Mapping[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        clause, args = _where_clause(where)
        n = len(args)
        with _translate_errors("list", table):
            return await db.fetch_all(
                f"SELECT * FROM {_ident(table)}{clause} ORDER BY id ASC LIMIT ${n + 1} OFFSET ${n + 2}",
                *args,
                limit,
                offset,
            )

    async def list_where_in(self, table: str, column: str, values: Sequence[Any]) -> list[dict[str, Any]]:
        if not values:
            return []
        with _translate_errors("list", table):
            return await db.fetch_all(
                f"SELECT * FROM {_ident(table)} WHERE {_ident(column)} = ANY($1) ORDER BY id ASC",
                list(values),
            )


_store = PostgresStore()


def get_store() -> PostgresStore:
    return _store
