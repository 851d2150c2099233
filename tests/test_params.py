"""
Unit tests for argument conversion into SearchParams.
"""

import pytest

from perplexity_search.errors import SearchValidationError
from perplexity_search.params import parse_search_params


class TestParseSearchParams:
    """Test cases for parse_search_params."""

    @pytest.mark.parametrize("query", ["", "   ", "\n\t"])
    @pytest.mark.parametrize("search_type", ["general", "academic", "financial", "filtered"])
    def test_blank_query_rejected(self, search_type, query):
        """Test empty or whitespace-only queries fail for every operation."""
        with pytest.raises(SearchValidationError, match="query parameter is required"):
            parse_search_params(search_type, {"query": query})

    def test_missing_query_rejected(self):
        """Test a missing query fails validation."""
        with pytest.raises(SearchValidationError, match="query"):
            parse_search_params("general", {"model": "sonar"})

    def test_non_string_query_rejected(self):
        """Test a non-string query fails validation."""
        with pytest.raises(SearchValidationError):
            parse_search_params("general", {"query": 42})

    def test_unknown_search_type(self):
        """Test an unknown operation kind is rejected."""
        with pytest.raises(SearchValidationError, match="unknown search type"):
            parse_search_params("images", {"query": "cats"})

    def test_invalid_recency_rejected(self):
        """Test an unknown recency value is rejected with the field name."""
        with pytest.raises(SearchValidationError, match="search_recency_filter"):
            parse_search_params(
                "general", {"query": "news", "search_recency_filter": "decade"}
            )

    @pytest.mark.parametrize("recency", ["hour", "day", "week", "month", "year"])
    def test_valid_recency_accepted(self, recency):
        """Test every documented recency value is accepted."""
        params = parse_search_params(
            "general", {"query": "news", "search_recency_filter": recency}
        )
        assert params.search_recency_filter == recency

    @pytest.mark.parametrize("temperature", [-0.1, 2.5])
    def test_temperature_range(self, temperature):
        """Test temperature outside 0-2 is rejected."""
        with pytest.raises(SearchValidationError, match="temperature"):
            parse_search_params("general", {"query": "q", "temperature": temperature})

    def test_non_positive_max_tokens(self):
        """Test max_tokens must be positive."""
        with pytest.raises(SearchValidationError, match="max_tokens"):
            parse_search_params("general", {"query": "q", "max_tokens": 0})

    def test_none_values_mean_not_supplied(self):
        """Test None arguments are treated as absent."""
        params = parse_search_params(
            "financial", {"query": "earnings", "ticker": "AAPL", "model": None}
        )

        assert params.model is None
        assert params.ticker == "AAPL"
        assert params.search_type == "financial"

    def test_empty_strings_normalised(self):
        """Test empty optional strings are dropped."""
        params = parse_search_params(
            "filtered", {"query": "q", "country": "", "location": "  "}
        )

        assert params.country is None
        assert params.location is None

    def test_query_kept_verbatim(self):
        """Test the query text is not trimmed or altered."""
        params = parse_search_params("general", {"query": "  spaced query "})
        assert params.query == "  spaced query "

    def test_unknown_arguments_ignored(self):
        """Test extra keys in the argument bag are ignored."""
        params = parse_search_params("general", {"query": "q", "unexpected": 1})
        assert not hasattr(params, "unexpected")

    def test_cache_parameters_snapshot(self):
        """Test the cache snapshot holds only supplied values."""
        params = parse_search_params(
            "academic", {"query": "q", "subject_area": "physics", "max_tokens": 100}
        )

        assert params.to_cache_parameters() == {
            "query": "q",
            "search_type": "academic",
            "subject_area": "physics",
            "max_tokens": 100,
        }

    def test_cache_parameters_omit_return_citations(self):
        """Test the ignored citations flag is not recorded in the snapshot."""
        params = parse_search_params(
            "general", {"query": "q", "return_citations": False}
        )

        snapshot = params.to_cache_parameters()

        assert "return_citations" not in snapshot
        assert snapshot == {"query": "q", "search_type": "general"}
