"""
Field schemas for resource records.

A schema is plain data: field name -> FieldSpec(required=..., kind=...).
Records stay untyped dicts (they come straight from JSON bodies and asyncpg
rows), so the same helpers work for every resource:

- validate_against_schema: are all required fields present and non-empty?
- extract_valid_fields: drop everything the schema does not declare.
- coerce_fields: convert extracted values to their column type before binding.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

# Postgres bigint bounds; ids and foreign keys are bigint columns.
MIN_BIGINT = -(2**63)
MAX_BIGINT = 2**63 - 1


class FieldTypeError(ValueError):
    pass


@dataclass(frozen=True)
class FieldSpec:
    required: bool = False
    kind: type = str


Schema = Mapping[str, FieldSpec]


def define_schema(
    *,
    required: Iterable[str] = (),
    optional: Iterable[str] = (),
    kinds: Mapping[str, type] | None = None,
) -> Schema:
    """
    Build a read-only schema. Required fields come first, in the given order.

    Fields not named in `kinds` are text.
    """
    kinds = kinds or {}
    fields: dict[str, FieldSpec] = {}
    for name in required:
        fields[name] = FieldSpec(required=True, kind=kinds.get(name, str))
    for name in optional:
        if name in fields:
            raise ValueError(f"Field '{name}' declared both required and optional.")
        fields[name] = FieldSpec(required=False, kind=kinds.get(name, str))

    unknown = set(kinds) - set(fields)
    if unknown:
        raise ValueError(f"Types given for undeclared fields: {sorted(unknown)}")
    return MappingProxyType(fields)


def required_fields(schema: Schema) -> list[str]:
    return [name for name, spec in schema.items() if spec.required]


def _is_empty(value: Any) -> bool:
    return value is None or value == ""


def validate_against_schema(record: Any, schema: Schema) -> bool:
    if not isinstance(record, Mapping):
        return False
    return all(
        name in record and not _is_empty(record[name])
        for name in required_fields(schema)
    )


def extract_valid_fields(record: Mapping[str, Any], schema: Schema) -> dict[str, Any]:
    # Schema order, not request order: keeps generated SQL column lists stable.
    return {name: record[name] for name in schema if name in record}


def parse_bigint(value: Any) -> int | None:
    """
    Read an integer from a JSON scalar or a decimal string; None if it is not
    one or does not fit a bigint.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        number = value
    elif isinstance(value, float) and value.is_integer():
        number = int(value)
    elif isinstance(value, str):
        raw = value.strip()
        digits = raw[1:] if raw[:1] in ("-", "+") else raw
        if not (digits.isascii() and digits.isdigit()):
            return None
        number = int(raw)
    else:
        return None
    return number if MIN_BIGINT <= number <= MAX_BIGINT else None


def _coerce(name: str, value: Any, kind: type) -> Any:
    if value is None:
        return None
    if isinstance(value, (bool, list, dict)):
        raise FieldTypeError(f"Field '{name}' must be a {kind.__name__} scalar.")

    if kind is int:
        number = parse_bigint(value)
        if number is None:
            raise FieldTypeError(f"Field '{name}' must be an integer.")
        return number

    if kind is float:
        try:
            return float(value)
        except ValueError:
            raise FieldTypeError(f"Field '{name}' must be a number.") from None

    return str(value)


def coerce_fields(record: Mapping[str, Any], schema: Schema) -> dict[str, Any]:
    return {name: _coerce(name, value, schema[name].kind) for name, value in record.items()}
