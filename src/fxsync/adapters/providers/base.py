# src/fxsync/adapters/providers/base.py
"""
Base Provider Interface for Exchange Rate Providers

This module defines the abstract base class every remote provider adapter
implements, plus the discriminated FetchResult the provider client returns.
Adapters only know their own request shapes and payload formats; HTTP and
error mapping live in fxsync.adapters.providers.client.

Files that USE this module:
- fxsync.adapters.providers.exchangerate_host (implements RateProvider)
- fxsync.adapters.providers.frankfurter (implements RateProvider)
- fxsync.adapters.providers.client (dispatches to adapters, builds FetchResult)
- fxsync.application.sync_service (consumes FetchResult)

Files that this module USES:
- fxsync.domain (RateSet, Timeline, ProviderSelection, FetchError)
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Generic, Mapping, Optional, Tuple, TypeVar

from fxsync.domain.errors import FetchError
from fxsync.domain.models import ProviderSelection, RateSet, Timeline

T = TypeVar("T")

Request = Tuple[str, Dict[str, Any]]


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """Either a parsed payload (``value``) or a ``FetchError``, never both."""
    value: Optional[T] = None
    error: Optional[FetchError] = None

    def __post_init__(self) -> None:
        if (self.value is None) == (self.error is None):
            raise ValueError("FetchResult needs exactly one of value or error")

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "FetchResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: FetchError) -> "FetchResult[T]":
        return cls(error=error)


def payload_error(data: Mapping[str, Any]) -> Optional[str]:
    """
    Extract a provider error message from a JSON payload.

    Providers report errors either as a plain string or as an object such
    as ``{"code": 101, "type": "missing_access_key", "info": "..."}``.
    """
    error = data.get("error")
    if error is None:
        error = data.get("message")
    if isinstance(error, dict):
        error = error.get("info") or error.get("type") or error.get("message")
    if error is None or error == "":
        return None
    return str(error)


class RateProvider(ABC):
    """Request builder and payload parser for one remote provider."""

    selection: ProviderSelection

    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip("/")

    @property
    def name(self) -> str:
        return self.selection.label

    @property
    def supports_timeline(self) -> bool:
        return self.selection.supports_timeline

    @abstractmethod
    def latest_request(self) -> Request:
        """Return (url, query params) for the latest-rates endpoint."""
        raise NotImplementedError

    @abstractmethod
    def timeline_request(self, base: str, target: str, start: date, end: date) -> Request:
        """Return (url, query params) for the historical timeline endpoint."""
        raise NotImplementedError

    def parse_latest(self, data: Mapping[str, Any]) -> RateSet:
        """
        Build a RateSet from a latest-rates payload.

        A payload flagged ``success: false`` becomes an error RateSet; the
        sync service decides what to do with it.

        Raises:
            KeyError, ValueError, TypeError, ArithmeticError: malformed payload
        """
        success = data.get("success")
        if success is False:
            return RateSet(success=False, error=payload_error(data), provider=self.selection)
        return RateSet(
            base=data["base"],
            date=data["date"],
            rates=data["rates"],
            success=success,
            provider=self.selection,
        )

    def parse_timeline(self, data: Mapping[str, Any], base: str, target: str) -> Timeline:
        """
        Build a Timeline from a time-series payload shaped like
        ``{"rates": {"2024-01-01": {"EUR": 0.9}, ...}}``.

        Raises:
            KeyError, ValueError, TypeError, ArithmeticError: malformed payload
        """
        success = data.get("success")
        if success is False:
            return Timeline(
                base=base, target=target, success=False,
                error=payload_error(data), provider=self.selection,
            )
        target = target.upper()
        points = []
        for day, day_rates in data["rates"].items():
            if target in day_rates and day_rates[target] is not None:
                points.append((day, day_rates[target]))
        return Timeline(
            # keyed by the requested pair, whatever base the provider echoes
            base=base,
            target=target,
            rates=tuple(points),
            success=success,
            provider=self.selection,
        )
