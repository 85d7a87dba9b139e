# src/fxsync/adapters/providers/exchangerate_host.py
"""
exchangerate.host API Provider

Latest rates come from ``/latest``, the trailing-year series from
``/timeseries``. Payloads carry a ``success`` flag; on failure ``error`` is
either a string or an object with an ``info`` message.

Files that USE this module:
- fxsync.adapters.providers.client (default provider, timeline fallback)
- tests.test_providers (unit tests)

Files that this module USES:
- fxsync.adapters.providers.base (RateProvider interface)
"""
from datetime import date
from typing import Any, Dict, Optional

from fxsync.adapters.providers.base import RateProvider, Request
from fxsync.domain.models import ProviderSelection


class ExchangerateHostProvider(RateProvider):
    selection = ProviderSelection.EXCHANGERATE_HOST

    def __init__(self, base_url: str = "https://api.exchangerate.host", access_key: Optional[str] = None):
        super().__init__(base_url)
        self.access_key = access_key or None

    def _params(self, **params: Any) -> Dict[str, Any]:
        if self.access_key:
            params["access_key"] = self.access_key
        return params

    def latest_request(self) -> Request:
        return f"{self.base_url}/latest", self._params()

    def timeline_request(self, base: str, target: str, start: date, end: date) -> Request:
        params = self._params(
            start_date=start.isoformat(),
            end_date=end.isoformat(),
            base=base.upper(),
            symbols=target.upper(),
        )
        return f"{self.base_url}/timeseries", params
