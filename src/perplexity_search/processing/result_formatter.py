"""
Result formatting and output processing.

Turns a parsed API reply into the display text handed back to tool callers.
"""

from ..models import PerplexityResponse

NO_RESPONSE_TEXT = "No response from Perplexity API"


class ResultFormatter:
    """Formats search replies into human-readable text."""

    def format_response(self, response: PerplexityResponse) -> str:
        """
        Format a reply as answer text followed by its optional sections.

        Sections appear in a fixed order (Source URLs, Detailed Sources,
        Related Questions) and are left out entirely when empty.

        Args:
            response: Parsed reply from the search API

        Returns:
            Display text for the reply
        """
        if not response.choices:
            return NO_RESPONSE_TEXT

        content = response.choices[0].message.content
        content += self.format_citations(response.citations)
        content += self.format_search_results(response)
        content += self.format_related_questions(response.related_questions)
        return content

    def format_citations(self, citations: list[str]) -> str:
        if not citations:
            return ""

        section = "\n\n## Source URLs\n"
        for i, url in enumerate(citations, 1):
            section += f"{i}. {url}\n"
        return section

    def format_search_results(self, response: PerplexityResponse) -> str:
        if not response.search_results:
            return ""

        section = "\n\n## Detailed Sources\n"
        for i, result in enumerate(response.search_results, 1):
            section += f"\n{i}. **{result.title or result.url}**\n"
            section += f"   URL: {result.url}\n"
            if result.snippet:
                section += f"   Snippet: {result.snippet}\n"
        return section

    def format_related_questions(self, questions: list[str]) -> str:
        if not questions:
            return ""

        section = "\n\n## Related Questions\n"
        for question in questions:
            section += f"- {question}\n"
        return section

    def append_result_id(self, content: str, result_id: str) -> str:
        """Append the cache identifier line to formatted text."""
        if not result_id:
            return content
        return f"{content}\n\n**Result ID:** {result_id}"
