"""Typed and chained fetching."""

from .chain import ChainedFetch, ChainState, ChainStep, fetch_composite
from .fetcher import TypedFetcher, deliver, format_query_date, parse_query_date

__all__ = [
    "ChainState",
    "ChainStep",
    "ChainedFetch",
    "TypedFetcher",
    "deliver",
    "fetch_composite",
    "format_query_date",
    "parse_query_date",
]
