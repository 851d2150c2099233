"""
Error types raised by the search package.

Validation errors never reach the network. API errors carry the upstream
status, type and message. Cache errors cover identifier generation, I/O and
lookups against a disabled or empty cache.
"""


class PerplexitySearchError(Exception):
    """Base class for all errors raised by this package."""


class SearchValidationError(PerplexitySearchError):
    """Invalid caller input, detected before any remote call."""


class InvalidResultIDError(SearchValidationError):
    """A cache identifier with the wrong length or alphabet."""


class APIError(PerplexitySearchError):
    """Non-success reply or transport failure talking to the search API."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        error_type: str | None = None,
        upstream_message: str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.error_type = error_type
        self.upstream_message = upstream_message


class AuthenticationError(APIError):
    """HTTP 401 from the search API."""


class RateLimitError(APIError):
    """HTTP 429 from the search API."""


class BadRequestError(APIError):
    """HTTP 400 from the search API."""


class ServerError(APIError):
    """HTTP 500 from the search API."""


class CacheError(PerplexitySearchError):
    """Failure reading or writing the result cache."""


class IDGenerationError(CacheError):
    """No free identifier was found within the attempt budget."""


class ResultNotFoundError(CacheError):
    """A well-formed identifier with no stored result."""


class CachingDisabledError(CacheError):
    """Cache lookup requested while no results root folder is configured."""
