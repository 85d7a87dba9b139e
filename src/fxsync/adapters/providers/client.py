# src/fxsync/adapters/providers/client.py
"""
Provider Client - HTTP Access to Remote Rate Providers

Selects the adapter for a ProviderSelection, performs exactly one HTTP
request and turns the outcome into a FetchResult. Nothing raises past this
boundary: transport, HTTP and parse failures all come back as FetchError
values. Payload-level failures (``success: false``) are passed through as
error RateSet/Timeline values for the sync service to interpret.

Files that USE this module:
- fxsync.application.sync_service (fetch_rates, fetch_timeline)
- fxsync.app (builds the client from settings)
- tests.test_providers (unit tests)

Files that this module USES:
- fxsync.adapters.providers.* (adapters)
- fxsync.config (Settings for URLs and timeout)
- fxsync.domain (errors and models)
"""
from __future__ import annotations

import logging  # Standard library for logging messages
from datetime import date, timedelta  # Timeline window calculation
from typing import Any, Callable, Dict, Mapping, Optional, Union

import requests  # HTTP library for making API requests

from fxsync.adapters.providers.base import FetchResult, RateProvider, payload_error  # Adapter interface and call outcome
from fxsync.adapters.providers.exchangerate_host import ExchangerateHostProvider
from fxsync.adapters.providers.frankfurter import FerEeProvider, FrankfurterProvider
from fxsync.config import Settings  # Provider URLs, key and timeout
from fxsync.domain.errors import FetchError, NoDataError, TransportError  # Transport error taxonomy
from fxsync.domain.models import ProviderSelection, RateSet, Timeline

log = logging.getLogger(__name__)

_PARSE_ERRORS = (KeyError, ValueError, TypeError, AttributeError, ArithmeticError)


class ProviderClient:
    """
    Single-attempt client for the latest-rates and timeline endpoints.

    Args:
        settings: Settings with provider URLs, HTTP timeout and timeline length
        session: Optional requests.Session (a new one is created by default)
        today: Callable returning the end date of the timeline window
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
        today: Callable[[], date] = date.today,
    ):
        self.settings = settings or Settings()
        if session is None:
            session = requests.Session()
            session.headers.update({"Accept": "application/json"})
        self.session = session
        self.timeout = self.settings.http_timeout_seconds
        self.timeline_days = self.settings.timeline_days
        self.today = today
        self.providers: Dict[ProviderSelection, RateProvider] = {
            ProviderSelection.EXCHANGERATE_HOST: ExchangerateHostProvider(
                self.settings.exchangerate_host_url, self.settings.exchangerate_host_key
            ),
            ProviderSelection.FRANKFURTER_APP: FrankfurterProvider(self.settings.frankfurter_url),
            ProviderSelection.FER_EE: FerEeProvider(self.settings.fer_ee_url),
        }

    def provider_for(self, selection: Union[ProviderSelection, int]) -> RateProvider:
        return self.providers[ProviderSelection.from_value(selection)]

    def timeline_provider_for(self, selection: Union[ProviderSelection, int]) -> RateProvider:
        """Providers without a timeline endpoint are served by exchangerate.host."""
        provider = self.provider_for(selection)
        if not provider.supports_timeline:
            log.debug("%s has no timeline endpoint, using %s", provider.name,
                      ProviderSelection.EXCHANGERATE_HOST.label)
            return self.providers[ProviderSelection.EXCHANGERATE_HOST]
        return provider

    def fetch_rates(self, selection: Union[ProviderSelection, int]) -> FetchResult[RateSet]:
        """
        Fetch the latest rates from the selected provider.

        Returns:
            FetchResult holding a RateSet (possibly a ``success=False`` one)
            or a NoDataError/TransportError
        """
        provider = self.provider_for(selection)
        url, params = provider.latest_request()
        log.info("Fetching latest rates from %s", provider.name)
        data = self._get_json(provider, url, params)
        if isinstance(data, FetchError):
            return FetchResult.failure(data)
        try:
            rates = provider.parse_latest(data)
        except _PARSE_ERRORS as e:
            log.error("%s returned an unexpected latest-rates payload: %s", provider.name, e)
            return FetchResult.failure(TransportError(f"{provider.name} payload error: {e!r}"))
        log.info("Received %d rates from %s (base=%s, date=%s)",
                 len(rates.rates), provider.name, rates.base, rates.date)
        return FetchResult.success(rates)

    def fetch_timeline(
        self, selection: Union[ProviderSelection, int], base: str, target: str
    ) -> FetchResult[Timeline]:
        """
        Fetch the trailing ``timeline_days`` of daily rates for base→target.

        Returns:
            FetchResult holding a Timeline (possibly a ``success=False`` one)
            or a NoDataError/TransportError
        """
        provider = self.timeline_provider_for(selection)
        end = self.today()
        start = end - timedelta(days=self.timeline_days)
        url, params = provider.timeline_request(base, target, start, end)
        log.info("Fetching %s/%s timeline %s..%s from %s", base, target, start, end, provider.name)
        data = self._get_json(provider, url, params)
        if isinstance(data, FetchError):
            return FetchResult.failure(data)
        try:
            timeline = provider.parse_timeline(data, base, target)
        except _PARSE_ERRORS as e:
            log.error("%s returned an unexpected timeline payload: %s", provider.name, e)
            return FetchResult.failure(TransportError(f"{provider.name} payload error: {e!r}"))
        return FetchResult.success(timeline)

    def _get_json(
        self, provider: RateProvider, url: str, params: Mapping[str, Any]
    ) -> Union[Dict[str, Any], FetchError]:
        """Perform the GET and decode a JSON object, mapping every failure to a FetchError."""
        try:
            resp = self.session.get(url, params=dict(params), timeout=self.timeout)
        except requests.exceptions.Timeout:
            log.warning("%s API timeout after %d seconds", provider.name, self.timeout)
            return TransportError(f"{provider.name} API timeout after {self.timeout}s")
        except requests.exceptions.ConnectionError as e:
            log.warning("%s API unreachable, no response received: %s", provider.name, e)
            return NoDataError(str(e))
        except requests.exceptions.RequestException as e:
            log.error("%s API request failed: %s", provider.name, e)
            return TransportError(str(e))

        if resp.status_code == 204 or not resp.content:
            log.warning("%s API returned no content (HTTP %d)", provider.name, resp.status_code)
            return NoDataError(None)

        try:
            resp.raise_for_status()
        except requests.exceptions.HTTPError as e:
            message = _error_body(resp) or str(e)
            log.error("%s API HTTP error %d: %s", provider.name, resp.status_code, message)
            return TransportError(message, status_code=resp.status_code)

        try:
            data = resp.json()
        except ValueError as e:
            log.error("%s API returned invalid JSON: %s", provider.name, e)
            return TransportError(f"{provider.name} API returned invalid JSON: {e}")

        if not isinstance(data, dict):
            log.error("%s unexpected response type: %r", provider.name, type(data))
            return TransportError(f"{provider.name} returned non-object JSON")
        return data

    def close(self) -> None:
        self.session.close()


def _error_body(resp: requests.Response) -> Optional[str]:
    try:
        data = resp.json()
    except ValueError:
        return None
    if isinstance(data, dict):
        return payload_error(data)
    return None
