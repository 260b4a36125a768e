"""
Schema registry: one fixed schema per resource type.

Resource names double as table names and URL prefixes.
"""

from __future__ import annotations

from types import MappingProxyType

from .schema import Schema, define_schema

BUSINESSES = "businesses"
REVIEWS = "reviews"
PHOTOS = "photos"
USERS = "users"

_SCHEMAS = MappingProxyType(
    {
        BUSINESSES: define_schema(
            required=(
                "ownerid",
                "name",
                "address",
                "city",
                "state",
                "zip",
                "phone",
                "category",
                "subcategory",
            ),
            optional=("website", "email"),
            kinds={"ownerid": int},
        ),
        REVIEWS: define_schema(
            required=("userid", "businessid", "dollars", "stars"),
            optional=("review",),
            kinds={"userid": int, "businessid": int, "dollars": int, "stars": float},
        ),
        PHOTOS: define_schema(
            required=("userid", "businessid"),
            optional=("caption",),
            kinds={"userid": int, "businessid": int},
        ),
        USERS: define_schema(
            required=("name", "email"),
        ),
    }
)


def get_schema(resource: str) -> Schema:
    try:
        return _SCHEMAS[resource]
    except KeyError:
        raise KeyError(f"Unknown resource type: {resource!r}") from None
