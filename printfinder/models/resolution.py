"""
Result types for printing resolution.

LookupResult is what the lookup capability hands back for each request.
ResolutionReport is what the resolver hands back for a whole card list.
"""

from dataclasses import dataclass, field

from printfinder.models.card_request import Finish, ParsedRequest
from printfinder.models.printing import PrintingRecord

NOT_FOUND_REASON = "Card not found in database"
UNKNOWN_ERROR_REASON = "Unknown error"


@dataclass(frozen=True, slots=True)
class LookupResult:
    """
    Tagged outcome of looking up one request.

    `found` is True exactly when `printing` is set; anything else is rejected
    at construction so malformed results never reach the formatter.
    """

    found: bool
    request: ParsedRequest
    printing: PrintingRecord | None = None

    def __post_init__(self) -> None:
        if self.found != (self.printing is not None):
            raise ValueError(
                f"Lookup result for '{self.request.name}' has found={self.found} "
                f"but printing={'set' if self.printing else 'missing'}"
            )

    @classmethod
    def hit(cls, request: ParsedRequest, printing: PrintingRecord) -> "LookupResult":
        return cls(found=True, request=request, printing=printing)

    @classmethod
    def miss(cls, request: ParsedRequest) -> "LookupResult":
        return cls(found=False, request=request, printing=None)


@dataclass(frozen=True, slots=True)
class ResolutionOutcome:
    """Per-request outcome of one resolution pass."""

    matched: bool
    printing: PrintingRecord | None
    effective_finish: Finish = Finish.NONE

    @classmethod
    def from_lookup(cls, result: LookupResult) -> "ResolutionOutcome":
        if result.printing is None:
            return cls(matched=False, printing=None)

        finish = result.printing.finish_for(result.request.requested_finish)
        return cls(matched=True, printing=result.printing, effective_finish=finish)


@dataclass(frozen=True, slots=True)
class FailedCard:
    """A request that produced no output line, with the reason why."""

    name: str
    reason: str


@dataclass
class ResolutionReport:
    """
    Output of resolving a card list.

    Every request ends up in exactly one of `succeeded` (as a rendered line)
    or `failed`.
    """

    succeeded: list[str] = field(default_factory=list)
    failed: list[FailedCard] = field(default_factory=list)
    cache_hits: int = 0
    cache_misses: int = 0

    @property
    def total(self) -> int:
        return len(self.succeeded) + len(self.failed)
