"""
Printing Resolution Service.

Turns parsed card requests into Moxfield lines by asking a lookup capability
for the printing each name resolves to.

INVARIANTS:
1. Every request lands in exactly one of `succeeded` or `failed`
2. Quantity, tags and requested finish always come from the request
3. A failing sub-batch only fails its own requests
4. Nothing raises past this module except cancellation and empty input
"""

import asyncio
import logging
from collections.abc import Sequence
from typing import TypeVar

from printfinder.config import settings
from printfinder.models.card_request import ParsedRequest, SortOrder
from printfinder.models.failure import EmptyCardListError
from printfinder.models.resolution import (
    NOT_FOUND_REASON,
    UNKNOWN_ERROR_REASON,
    FailedCard,
    LookupResult,
    ResolutionOutcome,
    ResolutionReport,
)
from printfinder.parsers.card_list import parse_card_list
from printfinder.services.card_catalog import LookupCapability
from printfinder.services.lookup_cache import LookupCache
from printfinder.services.moxfield_formatter import format_outcome

logger = logging.getLogger(__name__)

# Per-request outcome: a rendered line or the reason it failed
Rendered = str | FailedCard

T = TypeVar("T")


def chunk_requests(items: Sequence[T], batch_size: int) -> list[list[T]]:
    """Split requests (or indexed requests) into sub-batches of at most `batch_size`."""
    if batch_size < 1:
        raise ValueError("batch_size must be positive")
    return [list(items[i : i + batch_size]) for i in range(0, len(items), batch_size)]


def _render_results(
    batch: Sequence[tuple[int, ParsedRequest]],
    results: Sequence[LookupResult],
    sort_order: SortOrder,
    cache: LookupCache | None,
) -> list[tuple[int, Rendered]]:
    """
    Merge lookup results back onto the requests they came from, by position.

    Lines are rendered from the submitted request. `_check_results` has
    already confirmed that each echoed `result.request` is equal to it.
    """
    rendered: list[tuple[int, Rendered]] = []

    for (index, request), result in zip(batch, results, strict=True):
        if result.printing is None:
            rendered.append((index, FailedCard(name=request.name, reason=NOT_FOUND_REASON)))
            continue

        if cache is not None:
            cache.put(request, sort_order, result.printing)
        rendered.append((index, format_outcome(request, ResolutionOutcome.from_lookup(result))))

    return rendered


def _check_results(requests: Sequence[ParsedRequest], results: Sequence[object]) -> None:
    """Reject lookup output that cannot be matched back to its requests."""
    if len(results) != len(requests):
        raise LookupError(f"Lookup returned {len(results)} results for {len(requests)} cards")
    for request, result in zip(requests, results):
        if not isinstance(result, LookupResult):
            raise TypeError(f"Lookup returned {type(result).__name__}, expected LookupResult")
        if result.request != request:
            raise LookupError(
                f"Lookup answered '{result.request.name}' where '{request.name}' was asked"
            )


async def _resolve_sub_batch(
    batch: Sequence[tuple[int, ParsedRequest]],
    sort_order: SortOrder,
    lookup: LookupCapability,
    cache: LookupCache | None,
) -> list[tuple[int, Rendered]]:
    requests = [request for _, request in batch]

    try:
        results = await lookup(requests, sort_order)
        _check_results(requests, results)
    except Exception as e:
        logger.error("Lookup failed for batch of %d cards: %s", len(requests), e)
        reason = str(e) or UNKNOWN_ERROR_REASON
        return [(index, FailedCard(name=request.name, reason=reason)) for index, request in batch]

    return _render_results(batch, results, sort_order, cache)


async def resolve_requests(
    requests: Sequence[ParsedRequest],
    sort_order: SortOrder,
    lookup: LookupCapability,
    *,
    batch_size: int | None = None,
    cache: LookupCache | None = None,
) -> ResolutionReport:
    """
    Resolve requests to printings and render them.

    Args:
        requests: Parsed card requests, in input order
        sort_order: Pick the oldest or newest printing of each name
        lookup: Batch lookup capability (see card_catalog.CatalogLookup)
        batch_size: Requests per lookup call. Defaults to settings.lookup_batch_size
        cache: Optional memo consulted before, and filled after, lookups

    Returns:
        ResolutionReport with lines and failures both in input order.
    """
    if batch_size is None:
        batch_size = settings.lookup_batch_size

    slots: dict[int, Rendered] = {}
    pending: list[tuple[int, ParsedRequest]] = []
    report = ResolutionReport()

    for index, request in enumerate(requests):
        cached = cache.get(request, sort_order) if cache is not None else None
        if cached is not None:
            outcome = ResolutionOutcome.from_lookup(LookupResult.hit(request, cached))
            slots[index] = format_outcome(request, outcome)
            report.cache_hits += 1
        else:
            pending.append((index, request))

    if cache is not None:
        report.cache_misses = len(pending)

    if pending:
        sub_batches = chunk_requests(pending, batch_size)
        batch_outputs = await asyncio.gather(
            *(_resolve_sub_batch(batch, sort_order, lookup, cache) for batch in sub_batches)
        )
        for output in batch_outputs:
            slots.update(output)

    for index in range(len(requests)):
        outcome = slots[index]
        if isinstance(outcome, FailedCard):
            report.failed.append(outcome)
        else:
            report.succeeded.append(outcome)

    logger.info(
        "Resolved %d cards (%s): %d succeeded, %d failed, %d from cache",
        report.total,
        sort_order.value,
        len(report.succeeded),
        len(report.failed),
        report.cache_hits,
    )
    return report


async def convert_card_list(
    text: str,
    sort_order: SortOrder,
    lookup: LookupCapability,
    *,
    batch_size: int | None = None,
    cache: LookupCache | None = None,
) -> ResolutionReport:
    """
    Parse, resolve and render a pasted card list.

    Raises:
        EmptyCardListError: If the text has no card lines at all
    """
    requests = parse_card_list(text)
    if not requests:
        raise EmptyCardListError()

    return await resolve_requests(
        requests,
        sort_order,
        lookup,
        batch_size=batch_size,
        cache=cache,
    )
