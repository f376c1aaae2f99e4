"""
Tests for the failure envelope.

Every response leaving the API is classified, and a failure never carries
a partial document.
"""

import pytest

from explainmycard.models import failure as failure_module
from explainmycard.models.failure import (
    STANDARD_MESSAGES,
    ApiResponse,
    FailureDetail,
    FailureKind,
    KnownError,
    OutcomeType,
    create_success,
    create_unknown_failure,
    finalize_response,
)


def _finalized(response: ApiResponse) -> bool:
    return id(response) in failure_module._finalized_responses


class TestFailureEnvelope:
    """Tests for the ApiResponse failure envelope."""

    def test_success_response_structure(self) -> None:
        """Success response has correct structure."""
        response = create_success({"data": "value"})

        assert response.outcome == OutcomeType.SUCCESS
        assert response.data == {"data": "value"}
        assert response.failure is None
        assert _finalized(response)

    def test_outcomes(self) -> None:
        """A request either succeeds or fails with a classified failure."""
        assert {o.value for o in OutcomeType} == {
            "success",
            "known_failure",
            "unknown_failure",
        }

    def test_unknown_failure_uses_standard_message(self) -> None:
        """Unknown failures never echo the exception message."""
        response = create_unknown_failure(RuntimeError("secret internals"))

        assert response.outcome == OutcomeType.UNKNOWN_FAILURE
        assert response.failure is not None
        assert response.failure.message == STANDARD_MESSAGES[OutcomeType.UNKNOWN_FAILURE]
        assert response.failure.detail == "RuntimeError"
        assert "secret" not in response.model_dump_json()

    def test_unknown_failure_without_type(self) -> None:
        response = create_unknown_failure(ValueError("x"), include_type=False)

        assert response.failure is not None
        assert response.failure.detail is None


class TestFinalizeResponse:
    def test_success_with_failure_rejected(self) -> None:
        response: ApiResponse[dict] = ApiResponse(
            outcome=OutcomeType.SUCCESS,
            failure=FailureDetail(kind=FailureKind.UNKNOWN, message="x"),
        )
        with pytest.raises(ValueError, match="must not have failure"):
            finalize_response(response)

    def test_failure_without_detail_rejected(self) -> None:
        response: ApiResponse[dict] = ApiResponse(outcome=OutcomeType.KNOWN_FAILURE)

        with pytest.raises(ValueError, match="must have failure details"):
            finalize_response(response)

    def test_failure_with_data_rejected(self) -> None:
        """A failed lookup never yields a partial document."""
        response: ApiResponse[dict] = ApiResponse(
            outcome=OutcomeType.KNOWN_FAILURE,
            data={"sections": []},
            failure=FailureDetail(kind=FailureKind.NOT_FOUND, message="Card not found."),
        )
        with pytest.raises(ValueError, match="must not carry data"):
            finalize_response(response)

    def test_unfinalized_response(self) -> None:
        response: ApiResponse[dict] = ApiResponse(outcome=OutcomeType.SUCCESS, data={})
        assert not _finalized(response)


class TestKnownError:
    def test_to_response(self) -> None:
        error = KnownError(
            kind=FailureKind.NOT_FOUND,
            message="Card not found.",
            detail="No card named 'X'",
            suggestion="Check the spelling.",
            status_code=404,
        )
        response = error.to_response()

        assert response.outcome == OutcomeType.KNOWN_FAILURE
        assert response.data is None
        assert response.failure is not None
        assert response.failure.kind == FailureKind.NOT_FOUND
        assert response.failure.suggestion == "Check the spelling."
        assert _finalized(response)

    def test_default_status(self) -> None:
        assert KnownError(FailureKind.MISSING_REQUIRED, "bad").status_code == 400
