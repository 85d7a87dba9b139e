# src/fxsync/adapters/persistence/local_store.py
"""
Local Store - Last-Known Rates, Timelines and Provider Preference

Keeps the last successful RateSet, one Timeline per currency pair and the
selected provider. Every cached value is exposed as an Observable so
consumers see replacements without polling. Values are mirrored to JSON
files under ``data_dir`` and reloaded on construction.

Reads never touch the network and never raise; a failed disk write is
logged and the in-memory value is still replaced.

Layout of ``data_dir``:
    rates.json                      last RateSet
    timelines/<BASE>_<TARGET>.json  one Timeline per pair
    preferences.json                {"api_provider": <int>}

Files that USE this module:
- fxsync.application.sync_service (reads provider, writes results)
- fxsync.app (constructs the store from settings)

Files that this module USES:
- fxsync.adapters.persistence.file_store (atomic JSON read/write)
- fxsync.domain.models (RateSet, Timeline, ProviderSelection)
- fxsync.shared.observable (Observable)
"""
from __future__ import annotations

import asyncio
import logging
import threading
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from fxsync.adapters.persistence.file_store import read_json, write_json_atomic
from fxsync.domain.models import ProviderSelection, RateSet, Timeline, timeline_key
from fxsync.shared.observable import Observable

logger = logging.getLogger(__name__)

RATES_FILE = "rates.json"
TIMELINES_DIR = "timelines"
PREFERENCES_FILE = "preferences.json"


class LocalStore:
    """Observable, file-backed cache of the last synchronized values."""

    def __init__(
        self,
        data_dir: Union[str, Path],
        default_provider: ProviderSelection = ProviderSelection.EXCHANGERATE_HOST,
    ):
        """
        Initialize the store and load persisted rates and preferences.

        Args:
            data_dir: Directory holding the JSON files
            default_provider: Provider used until one is explicitly selected
        """
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self._lock = threading.RLock()
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._default_provider = default_provider
        self._rates: Observable[RateSet] = Observable(self._load_rates(), name="rates")
        self._timelines: Dict[Tuple[str, str], Observable[Timeline]] = {}
        self._provider = self._load_provider()

    # --- event loop ---

    def bind_loop(self, loop: Optional[asyncio.AbstractEventLoop]) -> None:
        """Marshal updates posted from other threads onto ``loop``."""
        with self._lock:
            self._loop = loop
            self._rates.bind_loop(loop)
            for observable in self._timelines.values():
                observable.bind_loop(loop)

    # --- rates ---

    def get_rates(self) -> Observable[RateSet]:
        return self._rates

    def insert_rates(self, rates: RateSet) -> None:
        """Replace the current RateSet and notify subscribers."""
        self._persist(self.data_dir / RATES_FILE, rates.to_json())
        self._rates.post_value(rates)
        logger.info("Stored %d rates (base=%s, date=%s)", len(rates.rates), rates.base, rates.date)

    def _load_rates(self) -> Optional[RateSet]:
        data = read_json(self.data_dir / RATES_FILE)
        if data is None:
            logger.info("No persisted rates found")
            return None
        if not isinstance(data, dict):
            logger.warning("Persisted rates are not a JSON object, ignoring")
            return None
        try:
            rates = RateSet.from_json(data)
        except (KeyError, ValueError, TypeError, AttributeError, ArithmeticError) as e:
            logger.warning("Persisted rates unreadable, ignoring: %s", e)
            return None
        logger.info("Loaded persisted rates: base=%s, date=%s", rates.base, rates.date)
        return rates

    # --- timelines ---

    def get_timeline(self, base: str, target: str) -> Observable[Timeline]:
        """Observable for one currency pair, loaded from disk on first access."""
        key = timeline_key(base, target)
        with self._lock:
            observable = self._timelines.get(key)
            if observable is None:
                observable = Observable(
                    self._load_timeline(key), loop=self._loop, name=f"timeline {key[0]}/{key[1]}"
                )
                self._timelines[key] = observable
            return observable

    def insert_timeline(self, timeline: Timeline) -> None:
        """Replace the Timeline cached for its pair; other pairs are untouched."""
        key = timeline.key
        self._persist(self._timeline_path(key), timeline.to_json())
        self.get_timeline(*key).post_value(timeline)
        logger.info("Stored %s/%s timeline with %d points", key[0], key[1], len(timeline.rates))

    def _timeline_path(self, key: Tuple[str, str]) -> Path:
        return self.data_dir / TIMELINES_DIR / f"{key[0]}_{key[1]}.json"

    def _load_timeline(self, key: Tuple[str, str]) -> Optional[Timeline]:
        data = read_json(self._timeline_path(key))
        if data is None:
            return None
        if not isinstance(data, dict):
            logger.warning("Persisted %s/%s timeline is not a JSON object, ignoring", key[0], key[1])
            return None
        try:
            return Timeline.from_json(data)
        except (KeyError, ValueError, TypeError, AttributeError, ArithmeticError) as e:
            logger.warning("Persisted %s/%s timeline unreadable, ignoring: %s", key[0], key[1], e)
            return None

    # --- provider preference ---

    def get_provider_selection(self) -> ProviderSelection:
        with self._lock:
            return self._provider

    def set_provider_selection(self, provider: Union[ProviderSelection, int]) -> None:
        selection = ProviderSelection.from_value(provider)
        with self._lock:
            self._provider = selection
        self._persist(self.data_dir / PREFERENCES_FILE, {"api_provider": int(selection)})
        logger.info("Provider selection set to %s", selection.label)

    def _load_provider(self) -> ProviderSelection:
        data = read_json(self.data_dir / PREFERENCES_FILE)
        if not isinstance(data, dict) or "api_provider" not in data:
            return self._default_provider
        return ProviderSelection.from_value(data["api_provider"])

    # --- persistence ---

    def _persist(self, path: Path, data: dict) -> None:
        try:
            write_json_atomic(path, data)
        except OSError as e:
            # in-memory value is still replaced by the caller
            logger.error("Failed to persist %s: %s", path, e)
