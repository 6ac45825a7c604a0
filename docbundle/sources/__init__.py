"""External source normalisation and fetching."""

from .fetcher import SourceFetcher, fetch_sources
from .normalizer import normalize_source, normalize_source_url, parse_source_list

__all__ = [
    "SourceFetcher",
    "fetch_sources",
    "normalize_source",
    "normalize_source_url",
    "parse_source_list",
]
