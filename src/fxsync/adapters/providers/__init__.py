# src/fxsync/adapters/providers/__init__.py
"""
Provider Adapters - External API Clients

This package contains adapters for remote exchange-rate APIs and the
ProviderClient that dispatches to them. All adapters implement RateProvider.
"""

from fxsync.adapters.providers.base import FetchResult, RateProvider
from fxsync.adapters.providers.client import ProviderClient
from fxsync.adapters.providers.exchangerate_host import ExchangerateHostProvider
from fxsync.adapters.providers.frankfurter import FerEeProvider, FrankfurterProvider

__all__ = [
    "RateProvider",
    "FetchResult",
    "ProviderClient",
    "ExchangerateHostProvider",
    "FrankfurterProvider",
    "FerEeProvider",
]
