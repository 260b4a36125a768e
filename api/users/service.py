"""
User-centric views composed from several resources.
"""

from __future__ import annotations

from core import aggregate, registry
from core.resource import ResourceRepository
from core.schemas import Page
from core.store import PostgresStore

USER_FOREIGN_KEYS = {
    registry.BUSINESSES: "ownerid",
    registry.REVIEWS: "userid",
    registry.PHOTOS: "userid",
}


async def users_page_with(related: str, *, store: PostgresStore, requested_page: int) -> Page:
    """
    A page of users, each carrying its `related` records (reviews or photos).

    Related rows are fetched for the page's user ids only and then matched
    in memory.
    """
    users = ResourceRepository(registry.USERS, store)
    page = await users.list_page(requested_page)

    user_ids = [row["id"] for row in page.items]
    foreign_key = USER_FOREIGN_KEYS[related]
    related_rows = await ResourceRepository(related, store).list_by(foreign_key, user_ids)

    items = aggregate.attach_related(page.items, related_rows, name=related, foreign_key=foreign_key)
    return page.model_copy(update={"items": items})


async def owned_page(
    related: str,
    user_id: int,
    *,
    store: PostgresStore,
    requested_page: int,
) -> Page | None:
    """
    Page of `related` records belonging to one user, or None if the user does not exist.
    """
    user = await ResourceRepository(registry.USERS, store).fetch_by_id(user_id)
    if user is None:
        return None
    repo = ResourceRepository(related, store)
    return await repo.list_page(requested_page, where={USER_FOREIGN_KEYS[related]: user_id})
