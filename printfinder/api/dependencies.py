"""
Shared FastAPI dependencies.

Tests override these to point lookups at an in-memory catalog and to give
each test its own cache.
"""

from fastapi import Request

from printfinder.db.database import async_session_factory
from printfinder.services.card_catalog import CatalogLookup, LookupCapability
from printfinder.services.lookup_cache import LookupCache


def get_catalog_lookup() -> LookupCapability:
    """Lookup capability backed by the application database."""
    return CatalogLookup(async_session_factory)


def get_lookup_cache(request: Request) -> LookupCache:
    """The cache owned by the running application (see main.py)."""
    cache: LookupCache = request.app.state.lookup_cache
    return cache
