from printfinder.models.card_request import Finish, ParsedRequest, SortOrder
from printfinder.models.failure import (
    ApiResponse,
    EmptyCardListError,
    FailureDetail,
    FailureKind,
    KnownError,
    OutcomeType,
    create_known_failure,
    create_success,
    create_unknown_failure,
    finalize_response,
)
from printfinder.models.printing import KNOWN_FINISHES, PrintingRecord
from printfinder.models.resolution import (
    NOT_FOUND_REASON,
    UNKNOWN_ERROR_REASON,
    FailedCard,
    LookupResult,
    ResolutionOutcome,
    ResolutionReport,
)

__all__ = [
    "KNOWN_FINISHES",
    "NOT_FOUND_REASON",
    "UNKNOWN_ERROR_REASON",
    "ApiResponse",
    "EmptyCardListError",
    "FailedCard",
    "FailureDetail",
    "FailureKind",
    "Finish",
    "KnownError",
    "LookupResult",
    "OutcomeType",
    "ParsedRequest",
    "PrintingRecord",
    "ResolutionOutcome",
    "ResolutionReport",
    "SortOrder",
    "create_known_failure",
    "create_success",
    "create_unknown_failure",
    "finalize_response",
]
