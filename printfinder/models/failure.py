"""
Response envelope for endpoints that can fail as a whole.

Per-card problems (not found, failed sub-batch) are ordinary data inside a
successful conversion. This envelope is for failures of the request itself:

- success: data is set, failure is None
- known_failure: we can say what was wrong with the request
- unknown_failure: something broke; only the exception type is reported

Every envelope passes through `finalize_response()` before it is returned.
"""

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class FailureKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    EMPTY_RESULT = "empty_result"
    NOT_FOUND = "not_found"
    SERVICE_UNAVAILABLE = "service_unavailable"
    UNKNOWN = "unknown"


class OutcomeType(str, Enum):
    SUCCESS = "success"
    KNOWN_FAILURE = "known_failure"
    UNKNOWN_FAILURE = "unknown_failure"


class FailureDetail(BaseModel):
    """What went wrong, phrased for the person who pasted the list."""

    kind: FailureKind
    message: str
    detail: str | None = None
    suggestion: str | None = None


class ApiResponse(BaseModel, Generic[T]):
    outcome: OutcomeType
    data: T | None = None
    failure: FailureDetail | None = None

    @classmethod
    def success(cls, data: T) -> "ApiResponse[T]":
        return cls(outcome=OutcomeType.SUCCESS, data=data)

    @classmethod
    def known_failure(
        cls,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ) -> "ApiResponse[Any]":
        failure = FailureDetail(kind=kind, message=message, detail=detail, suggestion=suggestion)
        return cls(outcome=OutcomeType.KNOWN_FAILURE, failure=failure)


class KnownError(Exception):
    """
    A request-level failure we can explain.

    Raised anywhere below the API layer; the handler in main.py turns it into
    a known_failure envelope with `status_code`.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
        status_code: int = 400,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        self.status_code = status_code

    def to_response(self) -> ApiResponse[Any]:
        return ApiResponse.known_failure(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class EmptyCardListError(KnownError):
    """The submitted text had no card lines once blanks and headers were dropped."""

    def __init__(self) -> None:
        super().__init__(
            kind=FailureKind.EMPTY_RESULT,
            message="No card names found in input.",
            suggestion="Paste one card per line, e.g. '1 Lightning Bolt'.",
            status_code=400,
        )


STANDARD_UNKNOWN_MESSAGE = "Something went wrong while converting and the cause is unknown."
STANDARD_UNKNOWN_SUGGESTION = "Retry in a moment. If it keeps happening, report the input you used."


def finalize_response(response: ApiResponse[Any]) -> ApiResponse[Any]:
    """
    Check that outcome and failure agree.

    Raises:
        ValueError: success with failure details, or a failure without them
    """
    has_failure = response.failure is not None
    if response.outcome == OutcomeType.SUCCESS and has_failure:
        raise ValueError("Success response must not have failure details")
    if response.outcome != OutcomeType.SUCCESS and not has_failure:
        raise ValueError(f"{response.outcome.value} response must have failure details")
    return response


def create_success(data: T) -> ApiResponse[T]:
    return finalize_response(ApiResponse[T](outcome=OutcomeType.SUCCESS, data=data))


def create_known_failure(error: KnownError) -> ApiResponse[Any]:
    return finalize_response(error.to_response())


def create_unknown_failure(exception: Exception, include_type: bool = True) -> ApiResponse[Any]:
    """Envelope for an unexpected exception. Its message is never included."""
    failure = FailureDetail(
        kind=FailureKind.UNKNOWN,
        message=STANDARD_UNKNOWN_MESSAGE,
        detail=type(exception).__name__ if include_type else None,
        suggestion=STANDARD_UNKNOWN_SUGGESTION,
    )
    return finalize_response(ApiResponse(outcome=OutcomeType.UNKNOWN_FAILURE, failure=failure))
