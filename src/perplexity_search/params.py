"""
Argument conversion.

Turns the loosely-typed argument bag handed over by the tool layer into a
single validated SearchParams value.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from .errors import SearchValidationError
from .models import SEARCH_TYPES, SearchParams


def _describe(error: dict[str, Any]) -> str:
    location = ".".join(str(part) for part in error.get("loc", ())) or "arguments"
    message = error.get("msg", "invalid value")
    # pydantic prefixes custom validator messages with "Value error, "
    message = message.removeprefix("Value error, ")
    return f"{location}: {message}"


def parse_search_params(search_type: str, arguments: Mapping[str, Any]) -> SearchParams:
    """
    Build validated SearchParams for one operation.

    Args:
        search_type: One of "general", "academic", "financial" or "filtered"
        arguments: Named arguments from the caller; None values mean "not supplied"

    Returns:
        SearchParams with search_type set

    Raises:
        SearchValidationError: If the query is empty or any value is invalid
    """
    if search_type not in SEARCH_TYPES:
        raise SearchValidationError(
            f"unknown search type '{search_type}', expected one of: {', '.join(SEARCH_TYPES)}"
        )

    supplied = {key: value for key, value in arguments.items() if value is not None}
    if not isinstance(supplied.get("query"), str) or not supplied["query"].strip():
        raise SearchValidationError("query parameter is required")
    supplied["search_type"] = search_type

    try:
        return SearchParams.model_validate(supplied)
    except ValidationError as e:
        details = "; ".join(_describe(error) for error in e.errors())
        raise SearchValidationError(f"invalid parameters: {details}") from e
