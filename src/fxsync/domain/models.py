# src/fxsync/domain/models.py
"""
Domain Models - Rate Snapshots, Timelines and Provider Selection

This module contains the value objects exchanged between the provider
client, the local store and the sync service:
- RateSet: all rates for one base currency as of one date
- Timeline: a trailing series of daily rates between two currencies
- ProviderSelection: which remote provider to use
- SyncStatus: transient loading/error snapshot

Files that USE this module:
- fxsync.adapters.providers.* (providers build RateSet/Timeline from JSON)
- fxsync.adapters.persistence.local_store (JSON persistence)
- fxsync.application.sync_service (classification and publishing)

Files that this module USES:
- None (pure domain layer, no external dependencies)
"""
from __future__ import annotations  # Enable postponed evaluation of annotations

from dataclasses import dataclass, field  # Immutable value objects
from datetime import date  # Rate and timeline dates
from decimal import Decimal  # Exact rate values
from enum import IntEnum  # Persisted provider preference values
from types import MappingProxyType  # Read-only rate mappings
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple


class ProviderSelection(IntEnum):
    """Remote rate provider; the integer value is what gets persisted."""
    EXCHANGERATE_HOST = 0
    FRANKFURTER_APP = 1
    FER_EE = 2

    @property
    def label(self) -> str:
        return _PROVIDER_LABELS[self]

    @property
    def supports_timeline(self) -> bool:
        return self is not ProviderSelection.FER_EE

    @classmethod
    def from_value(cls, value: Any) -> "ProviderSelection":
        """
        Map a stored preference to a provider.

        Unknown or malformed values fall back to EXCHANGERATE_HOST, matching
        how the preference has always been interpreted.
        """
        try:
            return cls(int(value))
        except (TypeError, ValueError):
            return cls.EXCHANGERATE_HOST


_PROVIDER_LABELS = {
    ProviderSelection.EXCHANGERATE_HOST: "exchangerate.host",
    ProviderSelection.FRANKFURTER_APP: "frankfurter.app",
    ProviderSelection.FER_EE: "fer.ee",
}


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _parse_date(value: Any) -> Optional[date]:
    if value is None or isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


@dataclass(frozen=True)
class RateSet:
    """
    Snapshot of exchange rates for one base currency as of one date.

    Attributes:
        base: Base currency code (e.g. "EUR")
        date: Date the provider reports the rates for
        rates: Read-only mapping of currency code to rate
        success: Payload success flag; None when the provider omits it
        error: Provider error message for soft failures
        provider: Provider the snapshot came from
    """
    base: Optional[str] = None
    date: Optional[date] = None
    rates: Mapping[str, Decimal] = field(default_factory=dict)
    success: Optional[bool] = None
    error: Optional[str] = None
    provider: Optional[ProviderSelection] = None

    def __post_init__(self) -> None:
        rates = {str(k).upper(): _to_decimal(v) for k, v in dict(self.rates).items()}
        if rates and self.error:
            raise ValueError("RateSet cannot carry both rates and an error")
        object.__setattr__(self, "rates", MappingProxyType(rates))
        if self.base:
            object.__setattr__(self, "base", self.base.upper())
        object.__setattr__(self, "date", _parse_date(self.date))

    @property
    def is_success(self) -> bool:
        return self.success is None or self.success is True

    def to_json(self) -> Dict[str, Any]:
        return {
            "base": self.base,
            "date": self.date.isoformat() if self.date else None,
            "rates": {k: str(v) for k, v in self.rates.items()},
            "success": self.success,
            "error": self.error,
            "provider": int(self.provider) if self.provider is not None else None,
        }

    @staticmethod
    def from_json(data: Mapping[str, Any]) -> "RateSet":
        provider = data.get("provider")
        return RateSet(
            base=data.get("base"),
            date=data.get("date"),
            rates=data.get("rates") or {},
            success=data.get("success"),
            error=data.get("error"),
            provider=ProviderSelection.from_value(provider) if provider is not None else None,
        )


@dataclass(frozen=True)
class Timeline:
    """Daily rates of ``target`` per one ``base``, sorted by date ascending."""
    base: Optional[str] = None
    target: Optional[str] = None
    rates: Tuple[Tuple[date, Decimal], ...] = ()
    success: Optional[bool] = None
    error: Optional[str] = None
    provider: Optional[ProviderSelection] = None

    def __post_init__(self) -> None:
        points = sorted(
            ((_parse_date(d), _to_decimal(r)) for d, r in self.rates),
            key=lambda point: point[0],
        )
        if points and self.error:
            raise ValueError("Timeline cannot carry both rates and an error")
        object.__setattr__(self, "rates", tuple(points))
        if self.base:
            object.__setattr__(self, "base", self.base.upper())
        if self.target:
            object.__setattr__(self, "target", self.target.upper())

    @property
    def is_success(self) -> bool:
        return self.success is None or self.success is True

    @property
    def key(self) -> Tuple[str, str]:
        return timeline_key(self.base or "", self.target or "")

    @property
    def start_date(self) -> Optional[date]:
        return self.rates[0][0] if self.rates else None

    @property
    def end_date(self) -> Optional[date]:
        return self.rates[-1][0] if self.rates else None

    def latest_rate(self) -> Optional[Decimal]:
        return self.rates[-1][1] if self.rates else None

    def min_rate(self) -> Optional[Decimal]:
        return min((r for _, r in self.rates), default=None)

    def max_rate(self) -> Optional[Decimal]:
        return max((r for _, r in self.rates), default=None)

    def average_rate(self) -> Optional[Decimal]:
        if not self.rates:
            return None
        return sum((r for _, r in self.rates), Decimal(0)) / len(self.rates)

    def to_json(self) -> Dict[str, Any]:
        return {
            "base": self.base,
            "target": self.target,
            "rates": [[d.isoformat(), str(r)] for d, r in self.rates],
            "success": self.success,
            "error": self.error,
            "provider": int(self.provider) if self.provider is not None else None,
        }

    @staticmethod
    def from_json(data: Mapping[str, Any]) -> "Timeline":
        provider = data.get("provider")
        points: Iterable = data.get("rates") or []
        return Timeline(
            base=data.get("base"),
            target=data.get("target"),
            rates=tuple((d, r) for d, r in points),
            success=data.get("success"),
            error=data.get("error"),
            provider=ProviderSelection.from_value(provider) if provider is not None else None,
        )


def timeline_key(base: str, target: str) -> Tuple[str, str]:
    """Normalized cache key for a currency pair."""
    return base.upper(), target.upper()


@dataclass(frozen=True)
class SyncStatus:
    """Transient loading/error state; never persisted."""
    is_loading: bool = False
    last_error: Optional[str] = None
