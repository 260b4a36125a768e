"""
Cross-resource aggregation by foreign key.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any


def attach_related(
    records: Iterable[dict[str, Any]],
    related: Sequence[dict[str, Any] | None],
    *,
    name: str,
    foreign_key: str,
    key: str = "id",
) -> list[dict[str, Any]]:
    """
    Return copies of `records`, each with `name` set to the related rows whose
    `foreign_key` equals the record's `key`.

    Linear scan of `related` per record, so keep `related` narrowed to the
    records on the page (see `ResourceRepository.list_by`). Records without
    matches get an empty list.
    """
    return [
        {
            **record,
            name: [
                item
                for item in related
                if item is not None and item.get(foreign_key) == record.get(key)
            ],
        }
        for record in records
    ]
