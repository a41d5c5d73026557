# tests/test_api.py

import json

import pytest
import requests
from fastapi.testclient import TestClient

import main
from ai import gemini
from services import rates as rates_mod
from services.rates import RateCache

PLAN = [
    {"day": 1, "dayTotal": 3000, "activities": [
        {"name": "Netarhat sunrise", "time": "Morning", "estimatedCost": 1000},
        {"name": "Magnolia Point", "time": "Evening", "estimatedCost": 1500},
    ]},
]


@pytest.fixture
def client(monkeypatch):
    def fake_get(url, timeout):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(rates_mod.requests, "get", fake_get)
    monkeypatch.setattr(main, "rates", RateCache())
    return TestClient(main.app)


def test_generate_itinerary_endpoint(client, monkeypatch):
    monkeypatch.setattr(gemini, "generate_text", lambda prompt: "Plan:\n" + json.dumps(PLAN))
    r = client.post("/api/itinerary", json={"duration": 1, "budget": 2000, "currency": "usd"})

    assert r.status_code == 200
    data = r.json()
    assert data["tripTotal"] == 3000
    assert data["remaining"] == -1000
    assert data["percentUsed"] == 100
    assert data["display"]["tripTotal"] == "$36.00"
    assert data["display"]["remaining"] == "-$12.00"
    assert data["days"][0]["dayTotal"] == 3000


def test_generation_failure_maps_to_502(client, monkeypatch):
    monkeypatch.setattr(gemini, "generate_text", lambda prompt: "no plan today")
    r = client.post("/api/itinerary", json={"duration": 2, "budget": 5000})
    assert r.status_code == 502
    assert r.json()["detail"] == "Itinerary generation failed, please try again."


@pytest.mark.parametrize(
    "body",
    [{"duration": 0, "budget": 10}, {"duration": 1, "budget": -5}, {"duration": 1, "budget": 5, "currency": "XYZ"}],
)
def test_invalid_requests_are_rejected(client, body):
    assert client.post("/api/itinerary", json=body).status_code == 422


def test_rates_endpoint_reports_fallback(client):
    data = client.get("/api/rates").json()
    assert data["base"] == "INR"
    assert data["source"] == "fallback"
    assert data["rates"]["USD"] > 0


def test_export_endpoint(client):
    r = client.post("/api/export", json=PLAN)
    assert r.status_code == 200
    assert r.headers["content-disposition"] == 'attachment; filename="itinerary.json"'
    assert json.loads(r.text)[0]["activities"][1]["estimatedCost"] == 1500


def test_export_rejects_invalid_plan(client):
    assert client.post("/api/export", json=[{"day": 1}]).status_code == 422
