# src/fxsync/adapters/providers/frankfurter.py
"""
Frankfurter-style API Providers (frankfurter.app, fer.ee)

Both services expose the ECB reference rates with the same payload shape:
``{"amount": 1.0, "base": "EUR", "date": "...", "rates": {...}}``. They never
send a ``success`` flag; failures come back as HTTP errors with a
``{"message": "..."}`` body. fer.ee has no time-series endpoint.

Files that USE this module:
- fxsync.adapters.providers.client (FRANKFURTER_APP and FER_EE selections)
- tests.test_providers (unit tests)

Files that this module USES:
- fxsync.adapters.providers.base (RateProvider interface)
"""
from datetime import date

from fxsync.adapters.providers.base import RateProvider, Request
from fxsync.domain.models import ProviderSelection


class FrankfurterProvider(RateProvider):
    selection = ProviderSelection.FRANKFURTER_APP

    def __init__(self, base_url: str = "https://api.frankfurter.app"):
        super().__init__(base_url)

    def latest_request(self) -> Request:
        return f"{self.base_url}/latest", {}

    def timeline_request(self, base: str, target: str, start: date, end: date) -> Request:
        url = f"{self.base_url}/{start.isoformat()}..{end.isoformat()}"
        return url, {"from": base.upper(), "to": target.upper()}


class FerEeProvider(FrankfurterProvider):
    selection = ProviderSelection.FER_EE

    def __init__(self, base_url: str = "https://api.fer.ee"):
        super().__init__(base_url)

    def timeline_request(self, base: str, target: str, start: date, end: date) -> Request:
        raise NotImplementedError("fer.ee does not provide a timeline endpoint")
