"""
Card lookup API endpoints.

GET /cards resolves one name. POST /cards/batch is the wire form of the
lookup capability: one tagged result per submitted card, in order.
"""

import asyncio
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.ext.asyncio import AsyncSession

from printfinder.api.dependencies import get_catalog_lookup
from printfinder.config import settings
from printfinder.db.database import get_session
from printfinder.db.operations import find_printing, printing_to_record
from printfinder.models.card_request import Finish, ParsedRequest, SortOrder
from printfinder.models.printing import PrintingRecord
from printfinder.models.resolution import LookupResult
from printfinder.services.card_catalog import LookupCapability
from printfinder.services.printing_resolver import chunk_requests

router = APIRouter(prefix="/cards", tags=["cards"])


def default_sort_order() -> SortOrder:
    return SortOrder(settings.default_sort_order)


class PrintingResponse(BaseModel):
    """A catalog printing as returned to clients."""

    name: str
    set_code: str
    set_name: str
    collector_number: str
    released_at: date | None = None
    finishes: list[str] = Field(default_factory=list)
    default_finish: Finish = Field(
        default=Finish.NONE,
        description="Finish used when the request does not specify one: F, E or empty",
    )

    @classmethod
    def from_record(cls, printing: PrintingRecord) -> "PrintingResponse":
        return cls(
            name=printing.name,
            set_code=printing.set_code,
            set_name=printing.set_name,
            collector_number=printing.collector_number,
            released_at=printing.released_at,
            finishes=sorted(printing.finishes),
            default_finish=printing.default_finish,
        )


class CardLookupResponse(BaseModel):
    """Response model for a single-name lookup."""

    found: bool
    card: PrintingResponse | None = None


class CardRequestModel(BaseModel):
    """One card in a batch lookup."""

    name: str = Field(..., examples=["Lightning Bolt"])
    quantity: int = Field(default=1, ge=1)
    requested_finish: Finish = Finish.NONE
    tags: str = ""

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Card names cannot be empty")
        return value

    def to_request(self) -> ParsedRequest:
        return ParsedRequest(
            name=self.name,
            quantity=self.quantity,
            requested_finish=self.requested_finish,
            tags=self.tags,
        )

    @classmethod
    def from_request(cls, request: ParsedRequest) -> "CardRequestModel":
        return cls(
            name=request.name,
            quantity=request.quantity,
            requested_finish=request.requested_finish,
            tags=request.tags,
        )


class BatchLookupRequest(BaseModel):
    """Request model for a batch lookup."""

    cards: list[CardRequestModel] = Field(..., min_length=1)
    sort_order: SortOrder = Field(default_factory=default_sort_order)


class BatchLookupResult(BaseModel):
    """Tagged result for one card: the echoed request plus the printing, if any."""

    found: bool
    request: CardRequestModel
    printing: PrintingResponse | None = None

    @classmethod
    def from_result(cls, result: LookupResult) -> "BatchLookupResult":
        return cls(
            found=result.found,
            request=CardRequestModel.from_request(result.request),
            printing=PrintingResponse.from_record(result.printing) if result.printing else None,
        )


class BatchLookupResponse(BaseModel):
    """Response model for a batch lookup."""

    results: list[BatchLookupResult] = Field(default_factory=list)


@router.get(
    "",
    response_model=CardLookupResponse,
    responses={404: {"model": CardLookupResponse}},
)
async def lookup_card(
    response: Response,
    session: Annotated[AsyncSession, Depends(get_session)],
    name: Annotated[str, Query(description="Card name to resolve")] = "",
    sort_order: Annotated[SortOrder, Query()] = SortOrder(settings.default_sort_order),
) -> CardLookupResponse:
    """
    Resolve a single card name to one printing.

    Returns 404 with found=false when nothing matches.
    """
    name = name.strip()
    if not name:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing required query parameter: name",
        )

    db_printing = await find_printing(session, name, sort_order)
    if db_printing is None:
        response.status_code = status.HTTP_404_NOT_FOUND
        return CardLookupResponse(found=False)

    printing = printing_to_record(db_printing)
    return CardLookupResponse(found=True, card=PrintingResponse.from_record(printing))


@router.post("/batch", response_model=BatchLookupResponse)
async def lookup_card_batch(
    request: BatchLookupRequest,
    lookup: Annotated[LookupCapability, Depends(get_catalog_lookup)],
) -> BatchLookupResponse:
    """
    Resolve many card names at once.

    Cards are looked up in concurrent chunks of settings.lookup_batch_size.
    Results come back in submission order.
    """
    requests = [card.to_request() for card in request.cards]
    chunks = chunk_requests(requests, settings.lookup_batch_size)

    chunk_results = await asyncio.gather(*(lookup(chunk, request.sort_order) for chunk in chunks))

    return BatchLookupResponse(
        results=[
            BatchLookupResult.from_result(result) for results in chunk_results for result in results
        ]
    )
