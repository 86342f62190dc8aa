"""Error Hierarchy — verifies codes, statuses, and the REST envelope.

Tests:
    - Each error maps to its code and HTTP status
    - to_response() produces the uniform envelope without internal details
"""

import pytest

from progress_sync.core.errors import (
    ErrorCategory,
    ErrorContext,
    InvalidSyncKeyError,
    MalformedPayloadError,
    PayloadTooLargeError,
    ProgressSyncError,
    SyncInternalError,
    SyncRecordNotFoundError,
    SyncStoreError,
    SyncUnavailableError,
)


@pytest.mark.parametrize(
    "error, code, http_status",
    [
        (InvalidSyncKeyError("empty"), "INVALID_SYNC_KEY", 400),
        (MalformedPayloadError("bad"), "INVALID_PAYLOAD", 400),
        (PayloadTooLargeError(2048, 1024), "PAYLOAD_TOO_LARGE", 413),
        (SyncRecordNotFoundError(), "NOT_FOUND", 404),
        (SyncUnavailableError(), "SYNC_UNAVAILABLE", 503),
        (SyncStoreError("down", "get"), "STORE_ERROR", 503),
        (SyncInternalError("boom"), "SERVER_ERROR", 500),
    ],
)
def test_error_codes_and_statuses(error, code, http_status):
    assert isinstance(error, ProgressSyncError)
    assert error.code == code
    assert error.http_status == http_status


def test_to_response_envelope():
    error = SyncRecordNotFoundError(ErrorContext(operation="fetch"))
    body = error.to_response()["error"]
    assert body["code"] == "NOT_FOUND"
    assert body["category"] == ErrorCategory.RESOURCE_NOT_FOUND.value
    assert body["message"] == "No synced progress found for this key."
    assert "timestamp" in body


def test_invalid_key_message_does_not_echo_reason():
    error = InvalidSyncKeyError("disallowed_characters")
    assert "disallowed" not in error.message
    assert error.reason == "disallowed_characters"
