"""Custom exceptions for RentalHub Core.

Every exception carries a human-readable ``message`` and an optional
``details`` dict. The Flask error handlers in ``main.py`` map each class to
an HTTP status code:

- ValidationError     -> 400
- ConflictError       -> 400
- AuthenticationError -> 401
- ResourceNotFound    -> 404
- everything else     -> 500
"""


class RentalHubError(Exception):
    """Base exception for all RentalHub errors."""

    status_code = 500

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(RentalHubError):
    """Request data is missing or malformed."""

    status_code = 400


class ConflictError(RentalHubError):
    """Resource already exists (e.g. duplicate email on signup)."""

    status_code = 400


class AuthenticationError(RentalHubError):
    """Credentials or token are missing, invalid, or expired."""

    status_code = 401


class ResourceNotFound(RentalHubError):
    """Requested resource does not exist."""

    status_code = 404


class DatabaseError(RentalHubError):
    """Credential store is unreachable or failed."""


class TokenSigningError(RentalHubError):
    """Token could not be signed (e.g. missing secret)."""
