# src/fxsync/domain/__init__.py
"""
Domain Layer - Pure Business Objects

This package contains domain models and the fetch error taxonomy.
No dependencies on infrastructure or external systems.
"""

from fxsync.domain.models import (
    ProviderSelection,
    RateSet,
    SyncStatus,
    Timeline,
    timeline_key,
)
from fxsync.domain.errors import (
    DomainError,
    FetchError,
    GenericError,
    NoDataError,
    SoftProviderError,
    TransportError,
)

__all__ = [
    "RateSet",
    "Timeline",
    "ProviderSelection",
    "SyncStatus",
    "timeline_key",
    "DomainError",
    "FetchError",
    "NoDataError",
    "TransportError",
    "SoftProviderError",
    "GenericError",
]
