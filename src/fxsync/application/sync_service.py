# src/fxsync/application/sync_service.py
"""
Sync Service - Background Synchronization of Rates and Timelines

This module coordinates refreshes: it publishes the loading flag, runs one
provider call on a background worker, classifies the outcome, writes
successes into the local store and publishes failures as localized error
messages. Consumers only ever read Observables.

Each refresh:
1. records its start time and publishes ``loading = True``
2. reads the provider selection from the store and runs exactly one
   provider client call via ``loop.run_in_executor``
3. on transport failure or a ``success: false`` payload, publishes
   ``loading = False`` and the error; the store is not touched
4. on success, writes the store on a background worker, then keeps
   ``loading`` true until ``min_loading_seconds`` have passed since the start

Refreshes are not de-duplicated and cannot be cancelled; concurrent calls
each run to completion and the last write/publish wins.

Files that USE this module:
- fxsync.app (builds SyncService)
- tests.test_sync_service (unit tests)

Files that this module USES:
- fxsync.adapters.persistence.local_store (LocalStore)
- fxsync.adapters.providers.client (ProviderClient, FetchResult)
- fxsync.domain (errors, SyncStatus)
- fxsync.shared (Observable, translate)
"""
from __future__ import annotations

import asyncio  # Event loop, tasks and executor offloading
import logging  # Standard library for logging messages
import time  # Monotonic clock for the loading floor
from concurrent.futures import Executor  # Optional worker pool for blocking calls
from typing import Any, Callable, Optional, Set

from fxsync.adapters.persistence.local_store import LocalStore  # Destination of successful results
from fxsync.adapters.providers.base import FetchResult
from fxsync.adapters.providers.client import ProviderClient  # Performs the HTTP calls
from fxsync.config import Settings
from fxsync.domain.errors import DomainError, GenericError, NoDataError, SoftProviderError
from fxsync.domain.models import ProviderSelection, RateSet, SyncStatus, Timeline
from fxsync.shared.language import translate  # Localized error messages
from fxsync.shared.observable import Observable  # Loading and error state streams

logger = logging.getLogger(__name__)


def classify(result: FetchResult) -> Optional[DomainError]:
    """
    Turn a provider client result into the error to publish, or None on success.

    Returns:
        NoDataError/TransportError for transport failures, SoftProviderError
        for ``success: false`` payloads with a message, GenericError for
        ``success: false`` without one, None for usable payloads
    """
    if not result.ok:
        return result.error
    payload = result.value
    if payload.is_success:
        return None
    if payload.error:
        return SoftProviderError(payload.error)
    return GenericError()


def format_error(error: DomainError, lang: str = "en") -> str:
    """User-facing message for a classified error."""
    if isinstance(error, NoDataError):
        return translate("error_no_data", lang)
    if error.message:
        return translate("error", lang, message=error.message)
    return translate("error_api_error", lang)


class SyncService:
    """
    Orchestrates refreshes between the provider client and the local store.

    Args:
        store: LocalStore receiving successful results
        client: ProviderClient performing the HTTP calls
        settings: Settings for the loading floor and message language
        executor: Executor for network calls (loop default when None)
        clock: Monotonic clock in seconds
    """

    def __init__(
        self,
        store: LocalStore,
        client: ProviderClient,
        settings: Optional[Settings] = None,
        executor: Optional[Executor] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.store = store
        self.client = client
        self.settings = settings or Settings()
        self.min_loading_seconds = self.settings.min_loading_seconds
        self.language = self.settings.language
        self._executor = executor
        self._clock = clock
        self._loading: Observable[bool] = Observable(False, name="loading")
        self._error: Observable[str] = Observable(None, name="error")
        self._tasks: Set[asyncio.Task] = set()
        self.last_task: Optional[asyncio.Task] = None

    # --- consumer API ---

    def refresh_rates(self) -> Observable[RateSet]:
        """
        Start a background refresh of the latest rates.

        Must be called from the event loop thread.

        Returns:
            The store's live rates Observable (updates when the refresh lands)
        """
        self._launch("rates", self.client.fetch_rates, self.store.insert_rates)
        return self.store.get_rates()

    def refresh_timeline(self, base: str, target: str) -> Observable[Timeline]:
        """Start a background refresh of the base→target timeline."""
        observable = self.store.get_timeline(base, target)

        def fetch(provider: ProviderSelection) -> FetchResult[Timeline]:
            return self.client.fetch_timeline(provider, base, target)

        self._launch(f"timeline {base.upper()}/{target.upper()}", fetch, self.store.insert_timeline)
        return observable

    def observe_rates(self) -> Observable[RateSet]:
        return self.store.get_rates()

    def observe_timeline(self, base: str, target: str) -> Observable[Timeline]:
        return self.store.get_timeline(base, target)

    def observe_loading(self) -> Observable[bool]:
        return self._loading

    def observe_error(self) -> Observable[str]:
        return self._error

    def status(self) -> SyncStatus:
        return SyncStatus(is_loading=bool(self._loading.value), last_error=self._error.value)

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    async def wait_idle(self) -> None:
        """Wait until every refresh started so far has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    # --- internals ---

    def _launch(
        self,
        what: str,
        fetch: Callable[[ProviderSelection], FetchResult],
        insert: Callable[[Any], None],
    ) -> asyncio.Task:
        loop = asyncio.get_running_loop()
        self._bind_loop(loop)
        start = self._clock()
        self._loading.set_value(True)
        task = loop.create_task(self._sync(what, start, fetch, insert))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        self.last_task = task
        return task

    def _bind_loop(self, loop: asyncio.AbstractEventLoop) -> None:
        self._loading.bind_loop(loop)
        self._error.bind_loop(loop)
        self.store.bind_loop(loop)

    async def _sync(
        self,
        what: str,
        start: float,
        fetch: Callable[[ProviderSelection], FetchResult],
        insert: Callable[[Any], None],
    ) -> None:
        try:
            provider = self.store.get_provider_selection()
            logger.info("Refreshing %s from %s", what, provider.label)
            loop = asyncio.get_running_loop()
            result = await loop.run_in_executor(self._executor, fetch, provider)

            error = classify(result)
            if error is not None:
                logger.warning("Refreshing %s failed: %s: %s", what, type(error).__name__, error.message)
                self._publish_error(error)
                return

            # disk write stays off the loop; the store posts its update back onto it
            await loop.run_in_executor(self._executor, insert, result.value)
            await self._finish_loading(start)
            logger.info("Refreshed %s in %.0f ms", what, (self._clock() - start) * 1000)
        except Exception:
            logger.exception("Unexpected failure while refreshing %s", what)
            self._publish_error(GenericError())

    async def _finish_loading(self, start: float) -> None:
        """Keep loading visible until ``min_loading_seconds`` after ``start``."""
        remaining = self.min_loading_seconds - (self._clock() - start)
        while remaining > 0:
            await asyncio.sleep(remaining)
            remaining = self.min_loading_seconds - (self._clock() - start)
        self._loading.set_value(False)

    def _publish_error(self, error: DomainError) -> None:
        self._loading.set_value(False)
        self._error.set_value(format_error(error, self.language))
