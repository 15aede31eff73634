"""Error taxonomy for fire searches."""

from __future__ import annotations

import enum


class FireFinderError(Exception):
    """Base class for every failure a search can surface to the user."""


class ValidationError(FireFinderError):
    """Raised when a search request is malformed. No network call is made."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Invalid search request: {'; '.join(errors)}")


class NetworkError(FireFinderError):
    """Raised when the provider request does not complete with a 2xx status."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class ProviderErrorKind(enum.Enum):
    INVALID_CREDENTIAL = "invalid_credential"


class ProviderError(FireFinderError):
    """Raised when the provider signals a failure inside a 200 response."""

    def __init__(self, kind: ProviderErrorKind, message: str):
        self.kind = kind
        super().__init__(message)
