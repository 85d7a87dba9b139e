# tests/test_providers.py
"""
Provider Tests - Unit Tests for the Provider Client and Adapters

Covers request shapes per provider, payload parsing, soft-error
pass-through and the mapping of transport failures to FetchError values.

Files that this module USES:
- fxsync.adapters.providers (ProviderClient and adapters)
- unittest.mock (Mock session instead of real HTTP)
"""
from datetime import date
from decimal import Decimal
from unittest.mock import Mock  # Mock session so no real HTTP calls are made

import pytest  # Testing framework for writing and running tests
import requests  # HTTP library (used for its exception types)

from fxsync.adapters.providers import ProviderClient  # Provider client under test
from fxsync.adapters.providers.base import FetchResult
from fxsync.domain.errors import NoDataError, TransportError
from fxsync.domain.models import ProviderSelection, RateSet

from conftest import make_response  # Fake requests.Response builder

TODAY = date(2024, 1, 31)


@pytest.fixture
def session():
    return Mock()


@pytest.fixture
def client(settings, session):
    return ProviderClient(settings, session=session, today=lambda: TODAY)


class TestFetchResult:
    def test_requires_exactly_one_side(self):
        with pytest.raises(ValueError):
            FetchResult()
        with pytest.raises(ValueError):
            FetchResult(value=RateSet(), error=NoDataError())

    def test_ok(self):
        assert FetchResult.success(RateSet()).ok
        assert not FetchResult.failure(NoDataError()).ok


class TestFetchRates:
    def test_exchangerate_host_success(self, client, session):
        session.get.return_value = make_response({
            "success": True, "base": "EUR", "date": "2024-01-01",
            "rates": {"USD": 1.1, "GBP": 0.86},
        })

        result = client.fetch_rates(ProviderSelection.EXCHANGERATE_HOST)

        assert result.ok
        rates = result.value
        assert rates.base == "EUR"
        assert rates.date == date(2024, 1, 1)
        assert rates.rates == {"USD": Decimal("1.1"), "GBP": Decimal("0.86")}
        assert rates.provider is ProviderSelection.EXCHANGERATE_HOST
        url = session.get.call_args[0][0]
        assert url == "https://api.exchangerate.host/latest"

    def test_access_key_is_sent_when_configured(self, make_settings, session):
        client = ProviderClient(make_settings(EXCHANGERATE_HOST_KEY="secret"), session=session)
        session.get.return_value = make_response({"base": "EUR", "date": "2024-01-01", "rates": {}})

        client.fetch_rates(ProviderSelection.EXCHANGERATE_HOST)

        assert session.get.call_args[1]["params"] == {"access_key": "secret"}

    def test_soft_error_object_is_passed_through(self, client, session):
        session.get.return_value = make_response({
            "success": False,
            "error": {"code": 104, "type": "rate_limit_reached", "info": "rate limit"},
        })

        result = client.fetch_rates(ProviderSelection.EXCHANGERATE_HOST)

        assert result.ok
        assert result.value.success is False
        assert result.value.error == "rate limit"
        assert not result.value.is_success
        assert dict(result.value.rates) == {}

    def test_soft_error_string(self, client, session):
        session.get.return_value = make_response({"success": False, "error": "rate limit"})

        result = client.fetch_rates(0)

        assert result.value.error == "rate limit"

    def test_frankfurter_without_success_flag(self, client, session):
        session.get.return_value = make_response({
            "amount": 1.0, "base": "EUR", "date": "2024-01-01", "rates": {"USD": 1.1},
        })

        result = client.fetch_rates(ProviderSelection.FRANKFURTER_APP)

        assert result.value.success is None
        assert result.value.is_success
        assert session.get.call_args[0][0] == "https://api.frankfurter.app/latest"

    def test_fer_ee_url(self, client, session):
        session.get.return_value = make_response({"base": "EUR", "date": "2024-01-01", "rates": {}})

        result = client.fetch_rates(ProviderSelection.FER_EE)

        assert result.value.provider is ProviderSelection.FER_EE
        assert session.get.call_args[0][0] == "https://api.fer.ee/latest"

    def test_timeout_is_transport_error(self, client, session):
        session.get.side_effect = requests.exceptions.ReadTimeout()

        result = client.fetch_rates(ProviderSelection.EXCHANGERATE_HOST)

        assert isinstance(result.error, TransportError)
        assert "timeout" in result.error.message

    def test_connection_error_is_no_data(self, client, session):
        session.get.side_effect = requests.exceptions.ConnectionError("Name or service not known")

        result = client.fetch_rates(ProviderSelection.EXCHANGERATE_HOST)

        assert isinstance(result.error, NoDataError)

    def test_no_content_is_no_data(self, client, session):
        session.get.return_value = make_response(status=204, content=b"")

        result = client.fetch_rates(ProviderSelection.FRANKFURTER_APP)

        assert isinstance(result.error, NoDataError)

    def test_http_error_uses_body_message(self, client, session):
        session.get.return_value = make_response({"message": "not found"}, status=404)

        result = client.fetch_rates(ProviderSelection.FRANKFURTER_APP)

        assert isinstance(result.error, TransportError)
        assert result.error.message == "not found"
        assert result.error.status_code == 404

    def test_invalid_json(self, client, session):
        session.get.return_value = make_response(content=b"<html>")

        result = client.fetch_rates(ProviderSelection.EXCHANGERATE_HOST)

        assert isinstance(result.error, TransportError)
        assert "invalid JSON" in result.error.message

    def test_non_object_json(self, client, session):
        session.get.return_value = make_response(["EUR", "USD"])

        result = client.fetch_rates(ProviderSelection.EXCHANGERATE_HOST)

        assert isinstance(result.error, TransportError)

    def test_missing_rates_is_transport_error(self, client, session):
        session.get.return_value = make_response({"base": "EUR", "date": "2024-01-01"})

        result = client.fetch_rates(ProviderSelection.EXCHANGERATE_HOST)

        assert isinstance(result.error, TransportError)
        assert "payload error" in result.error.message


class TestFetchTimeline:
    def test_exchangerate_host_timeseries(self, client, session):
        session.get.return_value = make_response({
            "success": True, "timeseries": True, "base": "EUR",
            "rates": {"2024-01-02": {"USD": 1.2}, "2024-01-01": {"USD": 1.1}},
        })

        result = client.fetch_timeline(ProviderSelection.EXCHANGERATE_HOST, "eur", "usd")

        timeline = result.value
        assert timeline.key == ("EUR", "USD")
        assert timeline.rates == (
            (date(2024, 1, 1), Decimal("1.1")),
            (date(2024, 1, 2), Decimal("1.2")),
        )
        url = session.get.call_args[0][0]
        params = session.get.call_args[1]["params"]
        assert url == "https://api.exchangerate.host/timeseries"
        assert params == {
            "start_date": "2023-01-31", "end_date": "2024-01-31",
            "base": "EUR", "symbols": "USD",
        }

    def test_keyed_by_requested_pair(self, client, session):
        # provider ignored the requested base and answered in EUR
        session.get.return_value = make_response({
            "success": True, "base": "EUR",
            "rates": {"2024-01-01": {"GBP": 0.86}},
        })

        result = client.fetch_timeline(ProviderSelection.EXCHANGERATE_HOST, "usd", "gbp")

        assert result.value.key == ("USD", "GBP")

    def test_frankfurter_range(self, client, session):
        session.get.return_value = make_response({
            "amount": 1.0, "base": "EUR", "start_date": "2023-01-31", "end_date": "2024-01-31",
            "rates": {"2023-01-31": {"USD": 1.08}},
        })

        result = client.fetch_timeline(ProviderSelection.FRANKFURTER_APP, "EUR", "USD")

        assert result.value.latest_rate() == Decimal("1.08")
        assert session.get.call_args[0][0] == "https://api.frankfurter.app/2023-01-31..2024-01-31"
        assert session.get.call_args[1]["params"] == {"from": "EUR", "to": "USD"}

    def test_fer_ee_timeline_served_by_exchangerate_host(self, client, session):
        session.get.return_value = make_response({"rates": {}})

        result = client.fetch_timeline(ProviderSelection.FER_EE, "EUR", "USD")

        assert result.value.provider is ProviderSelection.EXCHANGERATE_HOST
        assert session.get.call_args[0][0] == "https://api.exchangerate.host/timeseries"

    def test_soft_error(self, client, session):
        session.get.return_value = make_response({"success": False, "error": "invalid symbol"})

        result = client.fetch_timeline(ProviderSelection.EXCHANGERATE_HOST, "EUR", "XXX")

        assert result.value.error == "invalid symbol"
        assert result.value.rates == ()

    def test_days_missing_target_are_skipped(self, client, session):
        session.get.return_value = make_response({
            "rates": {"2024-01-01": {"USD": 1.1}, "2024-01-02": {}},
        })

        result = client.fetch_timeline(ProviderSelection.EXCHANGERATE_HOST, "EUR", "USD")

        assert len(result.value.rates) == 1
