"""
Search Orchestration Logic

Builds one API request per call from typed parameters and per-operation
defaults, formats the reply, and records it in the result cache when caching
is enabled.
"""

import json
import logging
import time

from ..client import PerplexityClient
from ..errors import CacheError, CachingDisabledError
from ..models import Message, PerplexityRequest, PerplexityResponse, SearchParams
from ..processing import ResultFormatter
from ..settings import MODEL_SONAR_PRO, Settings
from .cache import CACHING_DISABLED_MESSAGE, ResultCache

ACADEMIC_SEARCH_MODE = "academic"
ACADEMIC_CONTEXT_SIZE = 10

logger = logging.getLogger("perplexity_search.searcher")


def _join_prefix(parts: list[str]) -> str:
    return ", ".join(parts)


def academic_prefix(params: SearchParams) -> str:
    if params.subject_area:
        return f"[Subject: {params.subject_area}] "
    return ""


def financial_prefix(params: SearchParams) -> str:
    parts = []
    if params.ticker:
        parts.append(f"Ticker: {params.ticker}")
    if params.company_name:
        parts.append(f"Company: {params.company_name}")
    if params.report_type:
        parts.append(f"Report Type: {params.report_type}")
    if not parts:
        return ""
    return f"[{_join_prefix(parts)}] "


def filtered_content(params: SearchParams) -> str:
    """Query text for a filtered search, wrapped in its filter prefixes."""
    parts = []
    if params.content_type:
        parts.append(f"Content Type: {params.content_type}")
    if params.file_type:
        parts.append(f"File Type: {params.file_type}")
    if params.language:
        parts.append(f"Language: {params.language}")
    if params.country:
        parts.append(f"Country: {params.country}")

    content = params.query
    if parts:
        content = f"[Filters: {_join_prefix(parts)}] {content}"

    if params.custom_filters:
        custom = _join_prefix(
            [f"{key}: {value}" for key, value in params.custom_filters.items()]
        )
        content = f"[Custom Filters: {custom}] {content}"

    return content


class Searcher:
    """
    Runs the four search operations and the two cache lookups.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        client: PerplexityClient | None = None,
        cache: ResultCache | None = None,
        formatter: ResultFormatter | None = None,
    ):
        self.settings = settings
        self.client = client or PerplexityClient(settings.api_key, settings.timeout)
        self.cache = cache or ResultCache(settings.results_root_folder)
        self.formatter = formatter or ResultFormatter()

    async def run(self, params: SearchParams) -> str:
        """Dispatch to the operation matching params.search_type."""
        operations = {
            "general": self.search,
            "academic": self.academic_search,
            "financial": self.financial_search,
            "filtered": self.filtered_search,
        }
        return await operations[params.search_type](params)

    async def search(self, params: SearchParams) -> str:
        """General web search using the configured default model."""
        params = params.model_copy(update={"search_type": "general"})
        request = self.build_request(params, self.settings.default_model)
        return await self._execute(params, request)

    async def academic_search(self, params: SearchParams) -> str:
        """Scholarly search with a subject prefix and the academic search mode."""
        params = params.model_copy(update={"search_type": "academic"})
        request = self.build_request(params, MODEL_SONAR_PRO)

        request.search_mode = ACADEMIC_SEARCH_MODE
        if params.search_context_size is None:
            request.search_context_size = ACADEMIC_CONTEXT_SIZE
        request.messages[0].content = academic_prefix(params) + params.query

        return await self._execute(params, request)

    async def financial_search(self, params: SearchParams) -> str:
        """Financial search with ticker, company and report type in the prefix."""
        params = params.model_copy(update={"search_type": "financial"})
        request = self.build_request(params, MODEL_SONAR_PRO)

        request.messages[0].content = financial_prefix(params) + params.query

        return await self._execute(params, request)

    async def filtered_search(self, params: SearchParams) -> str:
        """Search with content, file type, language, country and custom filters."""
        params = params.model_copy(update={"search_type": "filtered"})
        request = self.build_request(params, MODEL_SONAR_PRO)

        # An explicit location wins over the country filter
        if params.country and request.location is None:
            request.location = params.country
        request.messages[0].content = filtered_content(params)

        return await self._execute(params, request)

    def build_request(
        self, params: SearchParams, default_model: str
    ) -> PerplexityRequest:
        """
        Create the wire request from parameters and configured defaults.

        Optional fields are copied only when supplied. Citations are always
        requested, whatever the caller asked for.
        """
        settings = self.settings

        return PerplexityRequest(
            model=params.model or default_model,
            messages=[Message(role="user", content=params.query)],
            max_tokens=(
                params.max_tokens
                if params.max_tokens is not None
                else settings.max_tokens
            ),
            temperature=(
                params.temperature
                if params.temperature is not None
                else settings.temperature
            ),
            top_p=settings.top_p,
            top_k=settings.top_k or None,
            search_domain_filter=params.search_domain_filter or None,
            search_exclude_domains=params.search_exclude_domains or None,
            search_recency_filter=params.search_recency_filter,
            return_citations=True,
            return_images=(
                params.return_images
                if params.return_images is not None
                else settings.return_images
            ),
            return_related_questions=(
                params.return_related_questions
                if params.return_related_questions is not None
                else settings.return_related
            ),
            date_range_start=params.date_range_start,
            date_range_end=params.date_range_end,
            location=params.location,
            search_context_size=params.search_context_size,
        )

    async def _execute(self, params: SearchParams, request: PerplexityRequest) -> str:
        start = time.time()
        logger.info(
            "Running %s search with model %s: %s",
            params.search_type,
            request.model,
            params.query,
        )

        response: PerplexityResponse = await self.client.chat_completion(request)
        logger.info(
            "%s search completed in %.2f seconds",
            params.search_type.capitalize(),
            time.time() - start,
        )

        content = self.formatter.format_response(response)
        return self._cache_result(params, request.model, content)

    def _cache_result(self, params: SearchParams, model: str, content: str) -> str:
        if not self.cache.is_enabled():
            return content

        try:
            unique_id = self.cache.save(
                params.query,
                params.search_type,
                model,
                content,
                params.to_cache_parameters(),
            )
        except (CacheError, OSError) as e:
            # Cache failures never fail the search
            logger.warning("Failed to cache result for %s: %s", params.query, e)
            return content

        return self.formatter.append_result_id(content, unique_id)

    async def list_previous(self) -> str:
        """
        List cached queries, most recent first, as indented JSON.

        Raises:
            CachingDisabledError: If caching is not enabled
            CacheError: If the cache folder cannot be read
        """
        if not self.cache.is_enabled():
            raise CachingDisabledError(CACHING_DISABLED_MESSAGE)

        queries = self.cache.list_queries()
        return json.dumps(queries, indent=2, ensure_ascii=False)

    async def get_previous_result(self, unique_id: str) -> str:
        """
        Retrieve a cached result by its identifier.

        Raises:
            CachingDisabledError: If caching is not enabled
            InvalidResultIDError: If the identifier is malformed
            ResultNotFoundError: If nothing is stored under the identifier
        """
        return self.cache.get(unique_id)
