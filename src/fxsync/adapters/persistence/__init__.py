# src/fxsync/adapters/persistence/__init__.py
"""
Persistence Adapters - Data Storage

This package contains adapters for persisting data:
- Atomic JSON file helpers
- The observable LocalStore
"""

from fxsync.adapters.persistence.file_store import read_json, write_json_atomic
from fxsync.adapters.persistence.local_store import LocalStore

__all__ = [
    "LocalStore",
    "read_json",
    "write_json_atomic",
]
