"""
Perplexity Search - Command Line Entry Point

Runs a single search, or inspects the result cache, from the terminal.
"""

import argparse
import asyncio
import sys

from pydantic import ValidationError

from perplexity_search import Searcher, get_settings, parse_search_params, setup_logging
from perplexity_search.errors import PerplexitySearchError
from perplexity_search.models import RECENCY_FILTERS, SEARCH_TYPES


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Perplexity Search",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python cli/main.py "What is the capital of France?"
  python cli/main.py "earnings" --type financial --ticker AAPL
  python cli/main.py "CRISPR off-target effects" --type academic --subject-area genetics
  python cli/main.py --list
  python cli/main.py --get AB12CD34EF
        """,
    )
    parser.add_argument("query", nargs="?", help="Search query")
    parser.add_argument("--type", choices=SEARCH_TYPES, default="general")
    parser.add_argument("--model", help="Model override")
    parser.add_argument("--recency", choices=RECENCY_FILTERS)
    parser.add_argument("--subject-area", help="Academic subject area")
    parser.add_argument("--ticker", help="Stock ticker for financial search")
    parser.add_argument("--company-name", help="Company for financial search")
    parser.add_argument("--report-type", help="Report type for financial search")
    parser.add_argument("--language", help="Source language for filtered search")
    parser.add_argument("--country", help="Country for filtered search")
    parser.add_argument(
        "--list", action="store_true", help="List previously cached queries"
    )
    parser.add_argument("--get", metavar="ID", help="Print a cached result by ID")
    return parser


async def run(args: argparse.Namespace) -> str:
    settings = get_settings()
    setup_logging(settings.log_dir, settings.log_level)
    searcher = Searcher(settings)

    if args.list:
        return await searcher.list_previous()
    if args.get:
        return await searcher.get_previous_result(args.get)

    params = parse_search_params(
        args.type,
        {
            "query": args.query,
            "model": args.model,
            "search_recency_filter": args.recency,
            "subject_area": args.subject_area,
            "ticker": args.ticker,
            "company_name": args.company_name,
            "report_type": args.report_type,
            "language": args.language,
            "country": args.country,
        },
    )
    return await searcher.run(params)


def main() -> int:
    parser = build_parser()
    args = parser.parse_args()
    if not (args.query or args.list or args.get):
        parser.error("a query, --list or --get is required")

    try:
        print(asyncio.run(run(args)))
    except (PerplexitySearchError, ValidationError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
