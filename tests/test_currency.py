# tests/test_currency.py

import pytest
import requests

from services import currency as cur
from services import rates as rates_mod
from services.rates import RateCache


@pytest.fixture
def offline_rates(monkeypatch):
    def fake_get(url, timeout):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(rates_mod.requests, "get", fake_get)
    cache = RateCache()
    cache.refresh()
    return cache


@pytest.mark.parametrize("amount", [0, 1, 8800, 123456789, -200])
def test_base_currency_is_identity(amount):
    assert cur.convert(amount, "INR", RateCache()) == amount


def test_conversion_uses_rate_table():
    rates = RateCache(fallback={"INR": 1.0, "USD": 0.012})
    assert cur.convert(10000, "usd", rates) == pytest.approx(120.0)


@pytest.mark.parametrize(
    "amount, code, expected",
    [
        (8800, "INR", "₹8,800"),
        (1234567, "INR", "₹12,34,567"),
        (500, "INR", "₹500"),
        (-200, "INR", "-₹200"),
        (1234.5, "USD", "$1,234.50"),
        (105.6, "EUR", "€105.60"),
        (99.999, "GBP", "£100.00"),
        (15664.4, "JPY", "¥15,664"),
        (-0.001, "USD", "$0.00"),
    ],
)
def test_format_amount(amount, code, expected):
    assert cur.format_amount(amount, code) == expected


def test_unknown_currency_cannot_be_formatted():
    with pytest.raises(ValueError):
        cur.format_amount(10, "XYZ")


def test_display_with_fallback_rates_after_failed_fetch(offline_rates):
    assert not offline_rates.outcome.live
    text = cur.display(8800, "USD", offline_rates)
    assert text == "$105.60"
    assert cur.convert(8800, "USD", offline_rates) > 0
