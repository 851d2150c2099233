"""
Typed search parameters and wire models for the Perplexity chat completions API.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

SearchType = Literal["general", "academic", "financial", "filtered"]
RecencyFilter = Literal["hour", "day", "week", "month", "year"]

SEARCH_TYPES: tuple[str, ...] = ("general", "academic", "financial", "filtered")
RECENCY_FILTERS: tuple[str, ...] = ("hour", "day", "week", "month", "year")

_OPTIONAL_STRING_FIELDS = (
    "model",
    "search_recency_filter",
    "date_range_start",
    "date_range_end",
    "location",
    "subject_area",
    "ticker",
    "company_name",
    "report_type",
    "content_type",
    "file_type",
    "language",
    "country",
)


class SearchParams(BaseModel):
    """Strongly-typed parameters for a single search call."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    # Common parameters
    query: str
    search_type: SearchType = "general"
    model: str | None = None
    search_domain_filter: list[str] | None = None
    search_exclude_domains: list[str] | None = None
    search_recency_filter: RecencyFilter | None = None
    # Accepted for compatibility only, citations are always requested
    return_citations: bool | None = None
    return_images: bool | None = None
    return_related_questions: bool | None = None
    max_tokens: int | None = Field(default=None, gt=0)
    temperature: float | None = Field(default=None, ge=0.0, le=2.0)
    date_range_start: str | None = None
    date_range_end: str | None = None
    location: str | None = None
    search_context_size: int | None = Field(default=None, gt=0)

    # Academic-specific parameters
    subject_area: str | None = None

    # Financial-specific parameters
    ticker: str | None = None
    company_name: str | None = None
    report_type: str | None = None

    # Filtered search parameters
    content_type: str | None = None
    file_type: str | None = None
    language: str | None = None
    country: str | None = None
    custom_filters: dict[str, Any] | None = None

    @field_validator("query")
    @classmethod
    def query_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("query parameter is required")
        return value

    @field_validator(*_OPTIONAL_STRING_FIELDS, mode="before")
    @classmethod
    def empty_string_as_missing(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def to_cache_parameters(self) -> dict[str, Any]:
        """Snapshot of the supplied parameters for the cache metadata record."""
        # Citations are always requested, so the caller flag is not recorded
        return self.model_dump(exclude_none=True, exclude={"return_citations"})


class Message(BaseModel):
    role: str
    content: str


class PerplexityRequest(BaseModel):
    """Request body for the chat completions endpoint."""

    model: str
    messages: list[Message]
    max_tokens: int | None = None
    temperature: float | None = None
    top_p: float | None = None
    top_k: int | None = None
    search_domain_filter: list[str] | None = None
    search_exclude_domains: list[str] | None = None
    search_recency_filter: str | None = None
    return_citations: bool = True
    return_images: bool | None = None
    return_related_questions: bool | None = None
    search_mode: str | None = None
    date_range_start: str | None = None
    date_range_end: str | None = None
    location: str | None = None
    search_context_size: int | None = None

    def to_payload(self) -> dict[str, Any]:
        """JSON body with unset options left out."""
        return self.model_dump(exclude_none=True)


class Choice(BaseModel):
    model_config = ConfigDict(extra="ignore")

    index: int = 0
    finish_reason: str | None = None
    message: Message


class Usage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class SearchResult(BaseModel):
    model_config = ConfigDict(extra="ignore")

    url: str
    title: str = ""
    snippet: str = ""


class PerplexityResponse(BaseModel):
    """Parsed reply from the chat completions endpoint."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = ""
    model: str = ""
    choices: list[Choice] = Field(default_factory=list)
    usage: Usage | None = None
    citations: list[str] = Field(default_factory=list)
    search_results: list[SearchResult] = Field(default_factory=list)
    related_questions: list[str] = Field(default_factory=list)

    @field_validator("citations", "search_results", "related_questions", mode="before")
    @classmethod
    def null_as_empty(cls, value):
        return [] if value is None else value
