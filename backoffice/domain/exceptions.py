"""Back office error types.

Every error the core raises derives from BackofficeException and carries a
stable error_code; the API maps codes to HTTP statuses in
backoffice.core.exception_handlers. Callers branch on error_code (and
details["reason"] for eligibility), never on message text.
"""

from datetime import datetime
from typing import Any


class BackofficeException(Exception):
    """Root of the back office error hierarchy.

    Attributes:
        message: Text safe to show to the user.
        error_code: Stable machine-readable code.
        details: Structured context (reason, field, resource id, ...).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """JSON body for API error responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(BackofficeException):
    """Input is malformed or names an unknown role, department or identity."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, "VALIDATION_ERROR", {"field": field} if field else {})


class AuthenticationException(BackofficeException):
    """Raised when the bearer token is missing, invalid, or names no usable user."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(BackofficeException):
    """Raised when the actor lacks rank or override for the requested change.

    Never retried automatically; surfaced verbatim to the UI layer.
    """

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        if resource and action:
            message = f"Permission denied: {action} on {resource}"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class EligibilityException(BackofficeException):
    """Raised when a user may not submit an application right now.

    Recoverable by waiting or choosing another department. When a cooldown
    applies, the exact expiry is in the message and in details["cooldown_until"].
    """

    def __init__(
        self,
        reason: str,
        message: str,
        department: str | None = None,
        cooldown_until: datetime | None = None,
    ) -> None:
        """Initialize with a reason code and optional department/cooldown.

        Args:
            reason: EligibilityReason value.
            message: Human-readable description.
            department: Department the user tried to apply to.
            cooldown_until: Expiry of the blocking cooldown, if any.
        """
        details: dict[str, Any] = {"reason": reason}
        if department:
            details["department"] = department
        if cooldown_until is not None:
            details["cooldown_until"] = cooldown_until.isoformat()
        self.reason = reason
        self.cooldown_until = cooldown_until
        super().__init__(message, "ELIGIBILITY_ERROR", details)


class StateTransitionException(BackofficeException):
    """Raised when an action is invalid for the application's current state.

    Indicates a caller/UI bug or a lost race; logged by the caller.
    """

    def __init__(
        self,
        message: str,
        status: str,
        interview_status: str | None,
        attempted: str,
    ) -> None:
        super().__init__(
            message,
            "STATE_ERROR",
            {
                "status": status,
                "interview_status": interview_status,
                "attempted": attempted,
            },
        )


class ExternalSyncException(BackofficeException):
    """Raised when the community platform lookup fails after the single retry.

    Role sync is best-effort: callers treat this as "no role change".
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        details: dict[str, Any] = {}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, "EXTERNAL_SYNC_ERROR", details)


class ResourceNotFoundException(BackofficeException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str | int) -> None:
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": str(resource_id)},
        )


class SqlNotConfiguredException(BackofficeException):
    """Raised when an operation requires Postgres but DATABASE_URL is not set."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
