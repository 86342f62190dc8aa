"""Error Hierarchy — typed, categorized exceptions for all progress-sync failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client input errors (400/413) are raised before any store access
    - SyncStoreError never crosses the service boundary (mapped to SyncUnavailableError)
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with ProgressSyncError base: FastAPI global handler catches all (ADR: uniform error shape)
    - Conflict is NOT an exception: the resolver outcome is returned, not raised
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    STORAGE = "storage"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class ProgressSyncError(Exception):
    """Base exception for all progress-sync errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            }
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class InvalidSyncKeyError(ProgressSyncError):
    """x-sync-key header missing, empty, oversized, or outside the allow-list."""
    def __init__(self, reason: str, context: ErrorContext | None = None):
        super().__init__(
            "x-sync-key is missing or invalid.",
            "INVALID_SYNC_KEY", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.reason = reason


class MalformedPayloadError(ProgressSyncError):
    """Submit body has the wrong shape or field types."""
    def __init__(self, message: str, field: str | None = None, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_PAYLOAD", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


class PayloadTooLargeError(ProgressSyncError):
    """Serialized snapshot exceeds the size ceiling."""
    def __init__(self, size_bytes: int, limit_bytes: int, context: ErrorContext | None = None):
        super().__init__(
            f"Snapshot is too large ({size_bytes} bytes, limit {limit_bytes}).",
            "PAYLOAD_TOO_LARGE", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 413,
        )
        self.size_bytes = size_bytes
        self.limit_bytes = limit_bytes


class SyncRecordNotFoundError(ProgressSyncError):
    """No (unexpired, well-formed) record exists for the sync key."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "No synced progress found for this key.",
            "NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, context, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class SyncStoreError(ProgressSyncError):
    """Raw store call failed. Raised by store implementations only."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Sync store {operation} failed: {message}",
            "STORE_ERROR", ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class SyncUnavailableError(ProgressSyncError):
    """Sync backend unconfigured or unreachable."""
    def __init__(self, message: str = "Progress sync backend is not available.", context: ErrorContext | None = None):
        super().__init__(
            message, "SYNC_UNAVAILABLE", ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, context, 503,
        )


class SyncInternalError(ProgressSyncError):
    """Unexpected failure inside a sync operation."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "SERVER_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
