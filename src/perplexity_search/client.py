"""
Perplexity API client.

One POST per call against the chat completions endpoint with bearer-token
auth. Non-success replies are mapped to typed errors; nothing is retried.
"""

import logging

import httpx
from pydantic import ValidationError

from .errors import (
    APIError,
    AuthenticationError,
    BadRequestError,
    RateLimitError,
    ServerError,
)
from .models import PerplexityRequest, PerplexityResponse

BASE_URL = "https://api.perplexity.ai/chat/completions"

logger = logging.getLogger("perplexity_search.client")


def handle_api_error(status_code: int, error_type: str, message: str) -> APIError:
    """Convert an upstream error envelope into a typed error with a usage hint."""
    details = {
        "status_code": status_code,
        "error_type": error_type,
        "upstream_message": message,
    }

    if status_code == 401:
        return AuthenticationError(
            f"authentication failed: {message}. "
            "Please check your PERPLEXITY_API_KEY environment variable",
            **details,
        )
    if status_code == 429:
        return RateLimitError(
            f"rate limit exceeded: {message}. "
            "Try reducing request frequency or using the 'sonar' model",
            **details,
        )
    if status_code == 400:
        if "Invalid model" in message:
            return BadRequestError(
                f"bad request: {message}. "
                "Use 'sonar' for quick searches or 'sonar-pro' for comprehensive searches",
                **details,
            )
        return BadRequestError(
            f"bad request: {message}. "
            "Check your query parameters and try simplifying the request",
            **details,
        )
    if status_code == 500:
        return ServerError(
            f"server error: {message}. "
            "The Perplexity API is experiencing issues, please try again later",
            **details,
        )
    return APIError(f"API error ({error_type}): {message}", **details)


class PerplexityClient:
    """Thin async client for the Perplexity chat completions endpoint."""

    def __init__(
        self,
        api_key: str,
        timeout: float = 30.0,
        *,
        base_url: str = BASE_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the client

        Args:
            api_key: Bearer token for the API
            timeout: Overall timeout in seconds for a single request
            base_url: Endpoint URL, overridable for testing
            transport: Optional httpx transport, used by tests to stub the API
        """
        self.api_key = api_key
        self.timeout = timeout
        self.base_url = base_url
        self.transport = transport

    async def chat_completion(self, request: PerplexityRequest) -> PerplexityResponse:
        """
        Send one chat completion request.

        Raises:
            APIError: Or one of its subclasses, for non-success replies,
                unparseable bodies, timeouts and transport failures
        """
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

        async with httpx.AsyncClient(
            timeout=self.timeout, transport=self.transport
        ) as client:
            try:
                response = await client.post(
                    self.base_url, headers=headers, json=request.to_payload()
                )
            except httpx.TimeoutException as e:
                logger.warning("Request to %s timed out", self.base_url)
                raise APIError("request timed out") from e
            except httpx.HTTPError as e:
                raise APIError(f"request failed: {str(e)}") from e

        if not response.is_success:
            raise self._error_from_response(response)

        try:
            return PerplexityResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise APIError(f"failed to parse response: {str(e)}") from e

    def _error_from_response(self, response: httpx.Response) -> APIError:
        status_code = response.status_code
        logger.warning("Search API returned status %d", status_code)

        try:
            error = response.json()["error"]
            error_type = str(error.get("type", ""))
            message = str(error.get("message", ""))
        except (ValueError, KeyError, TypeError, AttributeError):
            return APIError(
                f"API error (status {status_code}): {response.text}",
                status_code=status_code,
                upstream_message=response.text,
            )

        return handle_api_error(status_code, error_type, message)
