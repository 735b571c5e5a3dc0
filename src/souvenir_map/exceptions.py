"""Application exception hierarchy.

Every error the API maps to an HTTP status derives from ``SouvenirMapError``.
"""


class SouvenirMapError(Exception):
    """Base exception for souvenir map errors."""

    status_code = 500

    def __init__(self, detail: str = "Internal server error") -> None:
        self.detail = detail
        super().__init__(detail)


class AuthenticationError(SouvenirMapError):
    """Raised when a session token is missing or invalid."""

    status_code = 401


class ValidationError(SouvenirMapError):
    """Raised when a request is missing required data or is out of range."""

    status_code = 400


class StorageError(SouvenirMapError):
    """Raised when the object store or database rejects a write."""

    status_code = 500


class InvalidTransitionError(SouvenirMapError):
    """Raised when a workflow action is not legal in the current state."""

    status_code = 409
