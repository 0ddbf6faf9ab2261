"""
PrintFinder services.

Printing resolution, Moxfield formatting and catalog maintenance.
"""

from printfinder.services.card_catalog import CatalogLookup, LookupCapability, lookup_request
from printfinder.services.catalog_download import download_bulk_data, get_bulk_data_url
from printfinder.services.lookup_cache import CacheStats, LookupCache
from printfinder.services.moxfield_formatter import (
    effective_finish,
    format_card_line,
    format_card_list,
    format_outcome,
)
from printfinder.services.printing_resolver import (
    chunk_requests,
    convert_card_list,
    resolve_requests,
)

__all__ = [
    "CacheStats",
    "CatalogLookup",
    "LookupCache",
    "LookupCapability",
    "chunk_requests",
    "convert_card_list",
    "download_bulk_data",
    "effective_finish",
    "format_card_line",
    "format_card_list",
    "format_outcome",
    "get_bulk_data_url",
    "lookup_request",
    "resolve_requests",
]
