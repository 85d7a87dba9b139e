# src/fxsync/application/__init__.py
"""
Application Layer - Use Cases and Services

This package contains the sync service that orchestrates the provider
client and the local store.
"""

from fxsync.application.sync_service import SyncService, classify, format_error

__all__ = [
    "SyncService",
    "classify",
    "format_error",
]
