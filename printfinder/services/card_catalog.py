"""
Card catalog lookup.

The resolver never talks to the database directly. It calls a lookup
capability: an async callable that takes a batch of requests and a sort
order and returns one LookupResult per request, in the same order.
CatalogLookup is the database-backed implementation; tests and remote
clients can supply their own.
"""

import logging
from collections.abc import Sequence
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from printfinder.db.operations import find_printing, printing_to_record
from printfinder.models.card_request import ParsedRequest, SortOrder
from printfinder.models.resolution import LookupResult

logger = logging.getLogger(__name__)


class LookupCapability(Protocol):
    """Batch lookup used by the resolver."""

    async def __call__(
        self,
        requests: Sequence[ParsedRequest],
        sort_order: SortOrder,
    ) -> list[LookupResult]: ...


async def lookup_request(
    session: AsyncSession,
    request: ParsedRequest,
    sort_order: SortOrder,
) -> LookupResult:
    """Resolve one request against the catalog."""
    db_printing = await find_printing(session, request.name, sort_order)
    if db_printing is None:
        logger.debug("No printing found for %r", request.name)
        return LookupResult.miss(request)

    printing = printing_to_record(db_printing)
    logger.debug(
        "Resolved %r to %s (%s) %s",
        request.name,
        printing.name,
        printing.set_code,
        printing.collector_number,
    )
    return LookupResult.hit(request, printing)


class CatalogLookup:
    """
    Lookup capability backed by the catalog database.

    Each call opens its own session. The resolver runs sub-batches
    concurrently and an AsyncSession must not be shared between tasks.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def __call__(
        self,
        requests: Sequence[ParsedRequest],
        sort_order: SortOrder,
    ) -> list[LookupResult]:
        async with self._session_factory() as session:
            return [await lookup_request(session, request, sort_order) for request in requests]
