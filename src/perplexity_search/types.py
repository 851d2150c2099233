"""
Common type definitions for the search package.

TypedDict definitions for the on-disk cache records.
"""

from typing import Any, TypedDict


class QueryMetadata(TypedDict):
    """Metadata sidecar stored next to each cached result."""

    query: str
    search_type: str
    timestamp: str  # ISO-8601, UTC
    model: str
    parameters: dict[str, Any]


class QueryListItem(TypedDict):
    """Index entry returned when listing cached results."""

    query: str
    unique_id: str
    datetime: str
    search_type: str
