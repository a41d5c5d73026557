# tests/test_rates.py

import os

import pytest
import requests

from core import config
from services import rates as rates_mod
from services.rates import RateCache


class _FakeResponse:
    def __init__(self, body, status=200):
        self._body = body
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if isinstance(self._body, Exception):
            raise self._body
        return self._body


def _patch_get(monkeypatch, result):
    calls = []

    def fake_get(url, timeout):
        calls.append(url)
        if isinstance(result, Exception):
            raise result
        return result

    monkeypatch.setattr(rates_mod.requests, "get", fake_get)
    return calls


def test_live_rates_overwrite_only_present_codes(monkeypatch):
    _patch_get(monkeypatch, _FakeResponse({"result": "success", "rates": {"INR": 1, "USD": 0.0125}}))
    cache = RateCache()
    outcome = cache.refresh()

    assert outcome.live
    assert outcome.updated == ["INR", "USD"]
    assert cache.lookup("USD") == 0.0125
    assert cache.lookup("EUR") == config.FALLBACK_RATES["EUR"]


def test_network_error_keeps_fallback_table(monkeypatch):
    _patch_get(monkeypatch, requests.ConnectionError("offline"))
    cache = RateCache()
    outcome = cache.refresh()

    assert outcome.source == "fallback"
    assert "offline" in outcome.error
    assert cache.table() == config.FALLBACK_RATES


@pytest.mark.parametrize(
    "response",
    [
        _FakeResponse({"result": "error"}),
        _FakeResponse(ValueError("not json")),
        _FakeResponse({"rates": {"USD": 0.012}}, status=503),
        _FakeResponse(["USD", 0.012]),
    ],
)
def test_malformed_responses_fall_back(monkeypatch, response):
    _patch_get(monkeypatch, response)
    cache = RateCache()
    assert cache.refresh().source == "fallback"
    assert all(cache.lookup(c) > 0 for c in config.SUPPORTED_CURRENCIES)


def test_invalid_live_values_are_ignored(monkeypatch):
    _patch_get(monkeypatch, _FakeResponse({"rates": {"USD": -1, "EUR": "abc", "GBP": 0, "JPY": True}}))
    cache = RateCache()
    outcome = cache.refresh()

    assert outcome.source == "fallback"
    assert cache.table() == config.FALLBACK_RATES


def test_rates_are_fetched_once_per_cache(monkeypatch):
    calls = _patch_get(monkeypatch, _FakeResponse({"rates": {"USD": 0.013}}))
    cache = RateCache()
    first = cache.refresh()
    second = cache.refresh()

    assert first is second
    assert len(calls) == 1


def test_unknown_code_is_rejected():
    with pytest.raises(ValueError):
        RateCache().lookup("XYZ")


@pytest.mark.skipif(not os.getenv("RUN_LIVE_TESTS"), reason="RUN_LIVE_TESTS absent : test sauté")
def test_live_rate_service():
    """Hits the real rate API; only run on demand."""
    cache = RateCache()
    cache.refresh()
    assert all(cache.lookup(c) > 0 for c in cache.codes)
