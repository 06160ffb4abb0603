"""
Error taxonomy for the dealership API.

Services raise these; the HTTP layer (see ``dealership.main``) is the only
place that turns them into status codes and response bodies.
"""

from typing import Any


class DealershipError(Exception):
    """Base exception for the dealership API."""

    status_code = 500
    default_message = "An unexpected error occurred"

    def __init__(self, message: str | None = None, errors: list[dict[str, Any]] | None = None):
        self.message = message or self.default_message
        self.errors = errors or []
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a response body."""
        body: dict[str, Any] = {"message": self.message}
        if self.errors:
            body["errors"] = self.errors
        return body


class ValidationError(DealershipError):
    """Client sent structurally invalid data."""

    status_code = 400
    default_message = "Invalid request data"

    @classmethod
    def from_errors(
        cls, errors: list[dict[str, Any]], message: str | None = None
    ) -> "ValidationError":
        """Build from a pydantic error list, keeping only JSON-safe keys."""
        details = [
            {
                "loc": list(err.get("loc", ())),
                "msg": err.get("msg", ""),
                "type": err.get("type", ""),
            }
            for err in errors
        ]
        return cls(message, errors=details)


class PasswordMismatchError(ValidationError):
    default_message = "Passwords do not match"


class ConflictError(DealershipError):
    """Request collides with existing state."""

    status_code = 400
    default_message = "Resource already exists"


class EmailTakenError(ConflictError):
    default_message = "Email already in use"


class NotFoundError(DealershipError):
    status_code = 404
    default_message = "Resource not found"


class AuthenticationError(DealershipError):
    """Bad credentials or an invalid bearer token."""

    status_code = 401
    default_message = "Invalid authentication credentials"


class UserNotFoundError(AuthenticationError):
    status_code = 400
    default_message = "User not found"


class InvalidCredentialsError(AuthenticationError):
    status_code = 400
    default_message = "Invalid credentials"


class TokenExpiredError(AuthenticationError):
    default_message = "Token has expired"


class MalformedTokenError(AuthenticationError):
    default_message = "Token is malformed"


class SignatureMismatchError(AuthenticationError):
    default_message = "Token signature mismatch"


class InfrastructureError(DealershipError):
    """Backing store unreachable or errored. The message is never sent to clients."""

    status_code = 500
    default_message = "Internal processing error"
