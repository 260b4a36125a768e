"""
Page window math shared by every list endpoint.

All list endpoints must go through `paginate()` so boundary behavior is
identical across resources. Listing order is always `id` ascending.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass

DEFAULT_PAGE_SIZE = 10


def page_size() -> int:
    raw = os.environ.get("PAGE_SIZE", "").strip()
    if not raw:
        return DEFAULT_PAGE_SIZE
    try:
        value = int(raw)
    except ValueError:
        return DEFAULT_PAGE_SIZE
    return value if value > 0 else DEFAULT_PAGE_SIZE


@dataclass(frozen=True)
class PageWindow:
    page: int
    total_pages: int
    offset: int
    page_size: int
    count: int


def parse_page(raw: str | None) -> int:
    """
    Lenient `?page=` parsing: anything that is not a non-zero integer means page 1.
    """
    try:
        value = int((raw or "").strip())
    except ValueError:
        return 1
    return value or 1


def paginate(requested_page: int, total_count: int, page_size: int = DEFAULT_PAGE_SIZE) -> PageWindow:
    if page_size < 1:
        raise ValueError("page_size must be >= 1.")

    total_pages = math.ceil(total_count / page_size)

    # Clamp to the last page first, then floor at 1. With zero rows the
    # last page is 0, so the result is page 1 / offset 0 over an empty range.
    page = min(requested_page, total_pages)
    page = max(page, 1)

    return PageWindow(
        page=page,
        total_pages=total_pages,
        offset=(page - 1) * page_size,
        page_size=page_size,
        count=total_count,
    )
