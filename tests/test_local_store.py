# tests/test_local_store.py
"""
Local Store Tests - Observable Persistence of Rates, Timelines and Preferences

Files that this module USES:
- fxsync.adapters.persistence (LocalStore)
- unittest.mock (patch for disk write failures)
"""
from decimal import Decimal
from unittest.mock import patch

from fxsync.adapters.persistence import LocalStore
from fxsync.domain.models import ProviderSelection, RateSet, Timeline


def _rates(**rates):
    return RateSet(base="EUR", date="2024-01-01", rates=rates)


class TestRates:
    def test_empty_store(self, store):
        assert store.get_rates().value is None

    def test_insert_then_read_back(self, store):
        rates = RateSet(base="USD", date="2024-01-01", rates={"EUR": 0.9}, success=None)
        store.insert_rates(rates)
        assert store.get_rates().value == rates

    def test_insert_replaces_wholesale(self, store):
        received = []
        store.get_rates().subscribe(received.append)

        store.insert_rates(_rates(USD=1.1, GBP=0.86))
        store.insert_rates(_rates(USD=1.2))

        assert received[-1].rates == {"USD": Decimal("1.2")}
        assert len(received) == 3

    def test_rates_survive_restart(self, settings, store):
        rates = _rates(USD="1.0987654321")
        store.insert_rates(rates)

        reopened = LocalStore(settings.data_dir)

        assert reopened.get_rates().value == rates

    def test_corrupt_file_is_backed_up(self, settings):
        settings.data_dir.mkdir(parents=True, exist_ok=True)
        (settings.data_dir / "rates.json").write_text("{not json", encoding="utf-8")

        store = LocalStore(settings.data_dir)

        assert store.get_rates().value is None
        assert (settings.data_dir / "rates.json.corrupt").exists()
        assert not (settings.data_dir / "rates.json").exists()

    def test_non_object_json_is_ignored(self, settings):
        settings.data_dir.mkdir(parents=True, exist_ok=True)
        (settings.data_dir / "rates.json").write_text("[1, 2]", encoding="utf-8")

        store = LocalStore(settings.data_dir)

        assert store.get_rates().value is None

    def test_invalid_utf8_is_backed_up(self, settings):
        settings.data_dir.mkdir(parents=True, exist_ok=True)
        (settings.data_dir / "rates.json").write_bytes(b"\xff\xfe{}")

        store = LocalStore(settings.data_dir)

        assert store.get_rates().value is None
        assert (settings.data_dir / "rates.json.corrupt").exists()

    def test_write_failure_still_updates_memory(self, store):
        with patch(
            "fxsync.adapters.persistence.local_store.write_json_atomic",
            side_effect=OSError("disk full"),
        ):
            store.insert_rates(_rates(USD=1.1))
        assert store.get_rates().value.rates == {"USD": Decimal("1.1")}


class TestTimelines:
    def test_pairs_are_cached_independently(self, store):
        usd = Timeline(base="EUR", target="USD", rates=[("2024-01-01", 1.1)])
        gbp = Timeline(base="EUR", target="GBP", rates=[("2024-01-01", 0.86)])

        store.insert_timeline(usd)
        store.insert_timeline(gbp)

        assert store.get_timeline("EUR", "USD").value == usd
        assert store.get_timeline("EUR", "GBP").value == gbp

    def test_same_observable_per_pair(self, store):
        assert store.get_timeline("eur", "usd") is store.get_timeline("EUR", "USD")

    def test_subscribers_notified(self, store):
        received = []
        store.get_timeline("EUR", "USD").subscribe(received.append)
        timeline = Timeline(base="EUR", target="USD", rates=[("2024-01-01", 1.1)])

        store.insert_timeline(timeline)

        assert received == [None, timeline]

    def test_timeline_survives_restart(self, settings, store):
        timeline = Timeline(base="EUR", target="USD", rates=[("2024-01-01", 1.1)])
        store.insert_timeline(timeline)

        reopened = LocalStore(settings.data_dir)

        assert reopened.get_timeline("EUR", "USD").value == timeline
        assert reopened.get_timeline("EUR", "GBP").value is None

    def test_corrupt_timeline_is_ignored(self, settings):
        timelines_dir = settings.data_dir / "timelines"
        timelines_dir.mkdir(parents=True, exist_ok=True)
        (timelines_dir / "EUR_USD.json").write_bytes(b"\xff\xfe{}")
        (timelines_dir / "EUR_GBP.json").write_text('"just a string"', encoding="utf-8")

        store = LocalStore(settings.data_dir)

        assert store.get_timeline("EUR", "USD").value is None
        assert store.get_timeline("EUR", "GBP").value is None
        assert (timelines_dir / "EUR_USD.json.corrupt").exists()


class TestProviderSelection:
    def test_default(self, store):
        assert store.get_provider_selection() is ProviderSelection.EXCHANGERATE_HOST

    def test_configured_default(self, settings):
        store = LocalStore(settings.data_dir, default_provider=ProviderSelection.FER_EE)
        assert store.get_provider_selection() is ProviderSelection.FER_EE

    def test_set_and_persist(self, settings, store):
        store.set_provider_selection(1)
        assert store.get_provider_selection() is ProviderSelection.FRANKFURTER_APP
        assert LocalStore(settings.data_dir).get_provider_selection() is ProviderSelection.FRANKFURTER_APP

    def test_unknown_value_falls_back(self, store):
        store.set_provider_selection(42)
        assert store.get_provider_selection() is ProviderSelection.EXCHANGERATE_HOST
