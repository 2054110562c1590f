"""Application error taxonomy. Each error carries the HTTP status it maps to."""


class AppError(Exception):
    """Base for errors that are returned to the client as {"success": false, "error": message}."""

    status_code: int = 500
    default_message: str = "Internal server error."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """Missing or malformed input the user can correct."""

    status_code = 400
    default_message = "Invalid request."


class ConflictError(AppError):
    """Uniqueness violation (email or NIK already registered)."""

    status_code = 400
    default_message = "Email or NIK is already registered."


class InvalidCredentialsError(AppError):
    """Login failure. Deliberately does not say whether the email exists."""

    status_code = 401
    default_message = "Invalid email or password."


class UnauthenticatedError(AppError):
    """Missing, malformed, mis-signed or expired bearer token."""

    status_code = 401
    default_message = "Not authenticated."


class ForbiddenError(AppError):
    """Authenticated, but not allowed to perform the operation."""

    status_code = 403
    default_message = "Access denied."


class NotFoundError(AppError):
    status_code = 404
    default_message = "Resource not found."


class InternalError(AppError):
    """Storage or unexpected failure; the detail is logged, never returned."""

    status_code = 500
    default_message = "Internal server error. Please try again."
