"""
Card list conversion API.

POST /convert takes pasted text (or the contents of an uploaded file) and
returns it re-rendered as Moxfield import lines, plus the cards that could
not be resolved.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from printfinder.api.cards import default_sort_order
from printfinder.api.dependencies import get_catalog_lookup, get_lookup_cache
from printfinder.models.card_request import SortOrder
from printfinder.models.failure import ApiResponse, create_success
from printfinder.services.card_catalog import LookupCapability
from printfinder.services.lookup_cache import CacheStats, LookupCache
from printfinder.services.moxfield_formatter import format_card_list
from printfinder.services.printing_resolver import convert_card_list

router = APIRouter(prefix="/convert", tags=["convert"])


class ConvertRequest(BaseModel):
    """Request model for converting a card list."""

    text: str = Field(
        ...,
        description="One card per line: '[N[x]] Name [(SET) NUM] [*F*|*E*] [#Tag ...]'",
        examples=["4 Lightning Bolt\n1x Sol Ring *F* #Ramp"],
    )
    sort_order: SortOrder = Field(
        default_factory=default_sort_order,
        description="Pick the oldest or newest printing of each card",
    )
    use_cache: bool = Field(
        default=True,
        description="Reuse printings resolved by earlier conversions",
    )


class FailedCardResponse(BaseModel):
    name: str
    reason: str


class CacheStatsResponse(BaseModel):
    """Lookup cache counters."""

    hits: int = 0
    misses: int = 0
    size: int = 0

    @classmethod
    def from_stats(cls, stats: CacheStats) -> "CacheStatsResponse":
        return cls(hits=stats.hits, misses=stats.misses, size=stats.size)


class ConvertResult(BaseModel):
    """Converted card list."""

    succeeded: list[str] = Field(default_factory=list)
    failed: list[FailedCardResponse] = Field(default_factory=list)
    output: str = Field(
        default="",
        description="Succeeded lines joined with newlines, ready to paste into Moxfield",
    )
    cache_hits: int = 0
    cache_misses: int = 0


@router.post("", response_model=ApiResponse[ConvertResult])
async def convert(
    request: ConvertRequest,
    lookup: Annotated[LookupCapability, Depends(get_catalog_lookup)],
    cache: Annotated[LookupCache, Depends(get_lookup_cache)],
) -> ApiResponse[ConvertResult]:
    """
    Convert a card list to Moxfield format.

    Cards that cannot be resolved are listed in `failed` without failing the
    request. Text with no card lines at all is a known failure (400).
    """
    report = await convert_card_list(
        request.text,
        request.sort_order,
        lookup,
        cache=cache if request.use_cache else None,
    )

    return create_success(
        ConvertResult(
            succeeded=report.succeeded,
            failed=[FailedCardResponse(name=f.name, reason=f.reason) for f in report.failed],
            output=format_card_list(report.succeeded),
            cache_hits=report.cache_hits,
            cache_misses=report.cache_misses,
        )
    )


@router.get("/cache", response_model=CacheStatsResponse)
async def get_cache_stats(
    cache: Annotated[LookupCache, Depends(get_lookup_cache)],
) -> CacheStatsResponse:
    """Current lookup cache counters."""
    return CacheStatsResponse.from_stats(cache.stats())


@router.delete("/cache", response_model=CacheStatsResponse)
async def clear_cache(
    cache: Annotated[LookupCache, Depends(get_lookup_cache)],
) -> CacheStatsResponse:
    """Forget every cached printing. Returns the emptied counters."""
    cache.clear()
    return CacheStatsResponse.from_stats(cache.stats())
