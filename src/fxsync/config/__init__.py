# src/fxsync/config/__init__.py
"""
Configuration Module

Provides centralized configuration management using Pydantic Settings.
"""

from fxsync.config.settings import SUPPORTED_LANGUAGES, Settings, settings

__all__ = ["Settings", "settings", "SUPPORTED_LANGUAGES"]
