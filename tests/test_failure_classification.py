"""
Tests for the Failure Classification System.

These tests verify the core invariant:

    No raw 500 error may reach the frontend.
    Every failure must be classified and explained.
"""

import pytest
from fastapi import APIRouter
from httpx import ASGITransport, AsyncClient

from printfinder.main import app
from printfinder.models.failure import (
    STANDARD_UNKNOWN_MESSAGE,
    ApiResponse,
    EmptyCardListError,
    FailureKind,
    KnownError,
    OutcomeType,
    create_known_failure,
    create_success,
    create_unknown_failure,
    finalize_response,
)


class TestFailureEnvelope:
    """Tests for the ApiResponse failure envelope."""

    def test_success_response_structure(self) -> None:
        response = ApiResponse.success({"data": "value"})

        assert response.outcome == OutcomeType.SUCCESS
        assert response.data == {"data": "value"}
        assert response.failure is None

    def test_known_failure_response_structure(self) -> None:
        response = ApiResponse.known_failure(
            kind=FailureKind.NOT_FOUND,
            message="Resource not found",
            detail="Card 'xyz' does not exist",
        )

        assert response.outcome == OutcomeType.KNOWN_FAILURE
        assert response.data is None
        assert response.failure is not None
        assert response.failure.kind == FailureKind.NOT_FOUND

    def test_unknown_failure_hides_exception_message(self) -> None:
        response = create_unknown_failure(RuntimeError("password=hunter2"))

        assert response.outcome == OutcomeType.UNKNOWN_FAILURE
        assert response.failure is not None
        assert response.failure.kind == FailureKind.UNKNOWN
        assert response.failure.detail == "RuntimeError"
        assert response.failure.message == STANDARD_UNKNOWN_MESSAGE


class TestFinalizeResponse:
    def test_success_with_failure_rejected(self) -> None:
        response = create_success({"ok": True})
        response.failure = EmptyCardListError().to_response().failure

        with pytest.raises(ValueError):
            finalize_response(response)

    def test_failure_without_detail_rejected(self) -> None:
        response: ApiResponse[None] = ApiResponse(outcome=OutcomeType.KNOWN_FAILURE)

        with pytest.raises(ValueError):
            finalize_response(response)


class TestKnownErrorException:
    def test_known_error_converts_to_response(self) -> None:
        error = KnownError(
            kind=FailureKind.INVALID_INPUT,
            message="Invalid format",
            detail="Expected text",
            status_code=400,
        )

        response = create_known_failure(error)

        assert response.outcome == OutcomeType.KNOWN_FAILURE
        assert response.failure is not None
        assert response.failure.kind == FailureKind.INVALID_INPUT
        assert response.failure.message == "Invalid format"

    def test_empty_card_list_error(self) -> None:
        error = EmptyCardListError()

        assert error.kind == FailureKind.EMPTY_RESULT
        assert error.status_code == 400
        assert error.suggestion is not None


class TestExceptionHandlers:
    """Tests for global exception handlers in main.py."""

    @pytest.fixture
    async def raw_client(self):
        router = APIRouter()

        @router.get("/_test/known")
        async def raise_known() -> None:
            raise KnownError(kind=FailureKind.SERVICE_UNAVAILABLE, message="Down", status_code=503)

        @router.get("/_test/unexpected")
        async def raise_unexpected() -> None:
            raise RuntimeError("boom")

        app.include_router(router)
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client

        app.router.routes[:] = [
            route for route in app.router.routes if not getattr(route, "path", "").startswith("/_test")
        ]

    async def test_known_error_returns_classified_status(self, raw_client: AsyncClient) -> None:
        response = await raw_client.get("/_test/known")

        assert response.status_code == 503
        body = response.json()
        assert body["outcome"] == "known_failure"
        assert body["failure"]["kind"] == "service_unavailable"

    async def test_unexpected_error_returns_classified_500(self, raw_client: AsyncClient) -> None:
        response = await raw_client.get("/_test/unexpected")

        assert response.status_code == 500
        body = response.json()
        assert body["outcome"] == "unknown_failure"
        assert "boom" not in response.text
