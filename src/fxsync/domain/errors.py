# src/fxsync/domain/errors.py
"""
Domain Errors - Fetch Failure Taxonomy

Provider failures are modelled as exception classes so they carry a type
and a message, but the provider client returns them as values inside a
FetchResult instead of raising them. The sync service classifies them into
user-facing messages.
"""
from typing import Optional


class DomainError(Exception):
    """Base exception for domain errors."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "")
        self.message = message or None


class FetchError(DomainError):
    """Base class for failures reported by the provider client."""
    pass


class NoDataError(FetchError):
    """The transport produced no response or an empty body."""
    pass


class TransportError(FetchError):
    """Network, HTTP status or parse failure with an underlying message."""

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class SoftProviderError(DomainError):
    """A well-formed payload marked ``success: false`` with an error string."""
    pass


class GenericError(DomainError):
    """Any failure without a usable message."""
    pass
