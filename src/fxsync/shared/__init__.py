# src/fxsync/shared/__init__.py
"""
Shared Utilities - Cross-cutting Concerns

This package contains shared utilities used across all layers:
- Observable state streams
- Localized messages
- Logging configuration
"""

from fxsync.shared.observable import Observable, Subscription
from fxsync.shared.language import (
    translate,
    LANG_ENGLISH,
    LANG_GERMAN,
)

__all__ = [
    "Observable",
    "Subscription",
    "translate",
    "LANG_ENGLISH",
    "LANG_GERMAN",
]
