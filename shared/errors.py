"""Error taxonomy shared by the gateway and the ledger controllers."""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Stable error codes surfaced to the view layer."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    NETWORK_ERROR = "NETWORK_ERROR"
    SERVER_ERROR = "SERVER_ERROR"


class LedgerError(Exception):
    """Recoverable failure of a ledger operation."""

    code: ErrorCode = ErrorCode.SERVER_ERROR

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


class ValidationError(LedgerError):
    """Bad or missing field, fixed by the user before retrying."""

    code = ErrorCode.VALIDATION_ERROR

    def __init__(
        self,
        message: str,
        *,
        field_errors: dict[str, str] | None = None,
        status: int | None = None,
    ) -> None:
        super().__init__(message, status=status)
        self.field_errors = dict(field_errors or {})


class NotFoundError(LedgerError):
    """Target record no longer exists on the remote store."""

    code = ErrorCode.NOT_FOUND


class NetworkError(LedgerError):
    """Transport failure before a reply was received."""

    code = ErrorCode.NETWORK_ERROR


class ServerError(LedgerError):
    """Remote store rejected or failed the request."""

    code = ErrorCode.SERVER_ERROR


class SessionRequiredError(RuntimeError):
    """Raised when ledger services are built without an authenticated user."""
