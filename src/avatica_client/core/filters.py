"""Metadata search filters.

Converts a sparse filter into the partial request payload used by the
getSchemas/getTables/getColumns calls. Absent fields are left out of the
request entirely; they are never replaced with wildcards.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from avatica_client.core.exceptions import InterfaceError

# filter attribute -> request field
_FILTER_FIELDS: dict[str, str] = {
    "catalog": "catalog",
    "schema": "schemaPattern",
    "table": "tableNamePattern",
    "column": "columnNamePattern",
}


@dataclass(frozen=True)
class MetadataFilter:
    catalog: str | None = None
    schema: str | None = None
    table: str | None = None
    column: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> MetadataFilter:
        unknown = set(data) - set(_FILTER_FIELDS)
        if unknown:
            msg = f"Unknown filter fields: {', '.join(sorted(unknown))}"
            raise InterfaceError(msg)
        return cls(**data)


FilterLike = MetadataFilter | Mapping[str, Any] | None


def as_filter(value: FilterLike) -> MetadataFilter:
    if value is None:
        return MetadataFilter()
    if isinstance(value, MetadataFilter):
        return value
    return MetadataFilter.from_mapping(value)


def build_filter_request(
    request: str, connection_id: str, search: FilterLike = None
) -> dict[str, Any]:
    """Build a metadata request carrying only the filter fields that are set."""
    search = as_filter(search)
    payload: dict[str, Any] = {"request": request, "connectionId": connection_id}
    for attr, field_name in _FILTER_FIELDS.items():
        value = getattr(search, attr)
        if value is not None:
            payload[field_name] = value
    return payload


def strip_fields(payload: dict[str, Any], *field_names: str) -> dict[str, Any]:
    """Drop request fields that the target call does not accept."""
    for field_name in field_names:
        payload.pop(field_name, None)
    return payload
