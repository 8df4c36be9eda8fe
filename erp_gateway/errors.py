"""Gateway error types.

Error codes are stable strings for programmatic handling by API clients.
Authentication and internal failures never expose their diagnostic message:
the caller only sees the generic class-level message, while the specific
message (and ``reason``) stays available for logs and tests.
"""

from __future__ import annotations

from typing import Any


class GatewayError(Exception):
    """Base error for all gateway exceptions."""

    code: str = "internal_error"
    message: str = "An internal error occurred"
    status_code: int = 500
    expose_message: bool = True

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.__class__.message
        self.details = details or {}
        super().__init__(self.message)

    @property
    def public_message(self) -> str:
        """Message safe to return to the API client."""
        if self.expose_message:
            return self.message
        return type(self).message

    def to_dict(self, request_id: str | None = None) -> dict[str, Any]:
        """Render the error body returned to clients."""
        error: dict[str, Any] = {
            "code": self.code,
            "message": self.public_message,
            "request_id": request_id,
        }
        if self.expose_message and self.details:
            error["details"] = self.details
        return {"error": error}


class ConfigurationError(GatewayError):
    """Invalid or missing startup configuration. Fatal: the process must not start."""

    code = "configuration_error"
    message = "Invalid gateway configuration"
    status_code = 500
    expose_message = False


class ValidationError(GatewayError):
    """Request validation error (400)."""

    code = "validation_error"
    message = "Validation error"
    status_code = 400


class UnauthorizedError(GatewayError):
    """Authentication failed (401).

    ``reason`` records which check failed. It is logged, never returned.
    """

    code = "unauthorized"
    message = "Unauthorized"
    status_code = 401
    expose_message = False

    def __init__(
        self,
        message: str | None = None,
        reason: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.reason = reason


class NotFoundError(GatewayError):
    """Resource not found (404)."""

    code = "not_found"
    message = "Resource not found"
    status_code = 404


class ConflictError(GatewayError):
    """State conflict (409)."""

    code = "conflict"
    message = "Conflict"
    status_code = 409


class InternalError(GatewayError):
    """Server-side failure that is not the client's fault (500)."""

    code = "internal_error"
    message = "Internal server error"
    status_code = 500
    expose_message = False


class CredentialDecryptionError(InternalError):
    """A stored secret could not be decrypted.

    Indicates a corrupted credential record or a master key mismatch.
    """

    code = "internal_error"
