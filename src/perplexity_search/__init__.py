"""
Perplexity Search Package

Exposes general, academic, financial and filtered web search through the
Perplexity API, with an optional on-disk cache of formatted results.
"""

from perplexity_search.client import PerplexityClient
from perplexity_search.logger import setup_logging
from perplexity_search.params import parse_search_params
from perplexity_search.search import ResultCache, Searcher
from perplexity_search.settings import Settings, get_settings

__version__ = "1.0.0"
__all__ = [
    "PerplexityClient",
    "ResultCache",
    "Searcher",
    "Settings",
    "get_settings",
    "parse_search_params",
    "setup_logging",
]
