# src/fxsync/adapters/__init__.py
"""
Adapters Layer - External Interfaces

This package contains all adapters for external systems:
- Providers (remote rate APIs)
- Persistence (local JSON storage)
"""

__all__ = []
