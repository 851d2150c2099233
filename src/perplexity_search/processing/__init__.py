"""
Search result processing components.
"""

from .result_formatter import ResultFormatter

__all__ = ["ResultFormatter"]
