"""
Search and Caching Package

Provides the search orchestrator and its on-disk result cache.
"""

from .cache import ResultCache
from .searcher import Searcher

__all__ = ["Searcher", "ResultCache"]
