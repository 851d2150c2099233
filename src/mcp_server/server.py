"""
Perplexity Search MCP Server Implementation

Provides MCP tools for web, academic, financial and filtered search through
the Perplexity API, plus lookups of previously cached results.
"""

from functools import lru_cache
from typing import Any

from mcp.server.fastmcp import FastMCP

from perplexity_search import (
    Searcher,
    get_settings,
    parse_search_params,
    setup_logging,
)

# Create the FastMCP server instance
mcp = FastMCP("Perplexity Search")


@lru_cache
def get_searcher() -> Searcher:
    """Create the searcher once from environment settings."""
    settings = get_settings()
    setup_logging(settings.log_dir, settings.log_level)
    return Searcher(settings)


async def run_search(search_type: str, arguments: dict[str, Any]) -> str:
    """Validate the argument bag and dispatch to the matching search operation."""
    try:
        params = parse_search_params(search_type, arguments)
        return await get_searcher().run(params)

    except Exception as e:
        return f"Search failed: {str(e)}"


@mcp.tool()
async def search(
    query: str,
    model: str | None = None,
    search_domain_filter: list[str] | None = None,
    search_exclude_domains: list[str] | None = None,
    search_recency_filter: str | None = None,
    return_images: bool | None = None,
    return_related_questions: bool | None = None,
    max_tokens: int | None = None,
    temperature: float | None = None,
    date_range_start: str | None = None,
    date_range_end: str | None = None,
    location: str | None = None,
) -> str:
    """
    General web search with up-to-date information and source URLs.

    Args:
        query: The search query or question
        model: Model override ("sonar" for quick answers, "sonar-pro" for depth)
        search_domain_filter: Only search these domains
        search_exclude_domains: Never search these domains
        search_recency_filter: One of "hour", "day", "week", "month", "year"
        return_images: Include images in the answer
        return_related_questions: Append related follow-up questions
        max_tokens: Maximum tokens in the answer
        temperature: Sampling temperature between 0 and 2
        date_range_start: Earliest publication date (e.g. "01/01/2024")
        date_range_end: Latest publication date
        location: Location hint for localized results

    Returns:
        Answer text followed by source URLs, and a Result ID when caching is on
    """
    return await run_search("general", dict(locals()))


@mcp.tool()
async def academic_search(
    query: str,
    subject_area: str | None = None,
    model: str | None = None,
    search_domain_filter: list[str] | None = None,
    search_exclude_domains: list[str] | None = None,
    search_recency_filter: str | None = None,
    return_images: bool | None = None,
    return_related_questions: bool | None = None,
    max_tokens: int | None = None,
    temperature: float | None = None,
    date_range_start: str | None = None,
    date_range_end: str | None = None,
    location: str | None = None,
    search_context_size: int | None = None,
) -> str:
    """
    Search scholarly sources: papers, journals and academic publications.

    Args:
        query: The research question
        subject_area: Field of study used to focus the search (e.g. "neuroscience")
        model: Model override, defaults to "sonar-pro"
        search_domain_filter: Only search these domains
        search_exclude_domains: Never search these domains
        search_recency_filter: One of "hour", "day", "week", "month", "year"
        return_images: Include images in the answer
        return_related_questions: Append related follow-up questions
        max_tokens: Maximum tokens in the answer
        temperature: Sampling temperature between 0 and 2
        date_range_start: Earliest publication date
        date_range_end: Latest publication date
        location: Location hint for localized results
        search_context_size: Amount of search context to use (default 10)

    Returns:
        Answer text followed by source URLs, and a Result ID when caching is on
    """
    return await run_search("academic", dict(locals()))


@mcp.tool()
async def financial_search(
    query: str,
    ticker: str | None = None,
    company_name: str | None = None,
    report_type: str | None = None,
    model: str | None = None,
    search_domain_filter: list[str] | None = None,
    search_exclude_domains: list[str] | None = None,
    search_recency_filter: str | None = None,
    return_images: bool | None = None,
    return_related_questions: bool | None = None,
    max_tokens: int | None = None,
    temperature: float | None = None,
    date_range_start: str | None = None,
    date_range_end: str | None = None,
    location: str | None = None,
) -> str:
    """
    Search financial data, SEC filings, earnings reports and market news.

    Args:
        query: The financial question
        ticker: Stock ticker symbol (e.g. "AAPL")
        company_name: Company name
        report_type: Filing or report type (e.g. "10-K", "earnings call")
        model: Model override, defaults to "sonar-pro"
        search_domain_filter: Only search these domains
        search_exclude_domains: Never search these domains
        search_recency_filter: One of "hour", "day", "week", "month", "year"
        return_images: Include images in the answer
        return_related_questions: Append related follow-up questions
        max_tokens: Maximum tokens in the answer
        temperature: Sampling temperature between 0 and 2
        date_range_start: Earliest publication date
        date_range_end: Latest publication date
        location: Location hint for localized results

    Returns:
        Answer text followed by source URLs, and a Result ID when caching is on
    """
    return await run_search("financial", dict(locals()))


@mcp.tool()
async def filtered_search(
    query: str,
    content_type: str | None = None,
    file_type: str | None = None,
    language: str | None = None,
    country: str | None = None,
    custom_filters: dict[str, Any] | None = None,
    model: str | None = None,
    search_domain_filter: list[str] | None = None,
    search_exclude_domains: list[str] | None = None,
    search_recency_filter: str | None = None,
    return_images: bool | None = None,
    return_related_questions: bool | None = None,
    max_tokens: int | None = None,
    temperature: float | None = None,
    date_range_start: str | None = None,
    date_range_end: str | None = None,
    location: str | None = None,
) -> str:
    """
    Search with advanced filters on content type, file type, language and country.

    Args:
        query: The search query
        content_type: Kind of content wanted (e.g. "news", "tutorial")
        file_type: File type wanted (e.g. "pdf")
        language: Language of the sources
        country: Country focus, also used as location when location is not given
        custom_filters: Extra key/value filters added to the query context
        model: Model override, defaults to "sonar-pro"
        search_domain_filter: Only search these domains
        search_exclude_domains: Never search these domains
        search_recency_filter: One of "hour", "day", "week", "month", "year"
        return_images: Include images in the answer
        return_related_questions: Append related follow-up questions
        max_tokens: Maximum tokens in the answer
        temperature: Sampling temperature between 0 and 2
        date_range_start: Earliest publication date
        date_range_end: Latest publication date
        location: Location hint, takes precedence over country

    Returns:
        Answer text followed by source URLs, and a Result ID when caching is on
    """
    return await run_search("filtered", dict(locals()))


@mcp.tool()
async def list_previous() -> str:
    """
    List previously cached search queries, most recent first.

    Only available when PERPLEXITY_RESULTS_ROOT_FOLDER is set.

    Returns:
        JSON array of {query, unique_id, datetime, search_type} objects
    """
    try:
        return await get_searcher().list_previous()
    except Exception as e:
        return f"Error listing previous queries: {str(e)}"


@mcp.tool()
async def get_previous_result(unique_id: str) -> str:
    """
    Retrieve a cached search result by its Result ID.

    Args:
        unique_id: The 10-character Result ID shown after a search or in list_previous

    Returns:
        The stored result text
    """
    try:
        return await get_searcher().get_previous_result(unique_id)
    except Exception as e:
        return f"Error retrieving previous result: {str(e)}"


def main() -> None:
    mcp.run()


if __name__ == "__main__":
    main()
