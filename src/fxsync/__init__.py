# src/fxsync/__init__.py
"""
fxsync - Exchange-Rate Synchronization Core

Fetches latest and historical foreign-exchange rates from interchangeable
remote providers, persists them locally and exposes rates, timelines,
loading and error state as hot observables for any front-end.
"""

__version__ = "1.0.0"
