"""
State/district directory loading and caching.
"""

import pytest
import requests

from console.config import GEO_TIMEOUT
from console.integrations import geo


@pytest.fixture(autouse=True)
def _clear_cache():
    geo.clear_geo_cache()
    yield
    geo.clear_geo_cache()


def test_normalize_both_shapes():
    listed = {"states": [{"state": "Goa", "districts": ["North Goa", "South Goa"]}, {"districts": ["x"]}]}
    flat = {"Goa": ["North Goa", "South Goa"], "meta": "ignored"}

    assert geo.normalize_state_districts(listed) == {"Goa": ["North Goa", "South Goa"]}
    assert geo.normalize_state_districts(flat) == {"Goa": ["North Goa", "South Goa"]}
    assert geo.normalize_state_districts(["nope"]) == {}


def test_load_caches_result(monkeypatch, fake_response):
    calls = []

    def fake_get(url, timeout):
        calls.append((url, timeout))
        return fake_response(200, {"Kerala": ["Kochi"]})

    monkeypatch.setattr(geo.requests, "get", fake_get)

    assert geo.load_state_districts("http://geo.test") == {"Kerala": ["Kochi"]}
    assert geo.load_state_districts("http://geo.test") == {"Kerala": ["Kochi"]}
    assert calls == [("http://geo.test", GEO_TIMEOUT)]


def test_load_failure_returns_empty(monkeypatch):
    def fake_get(url, timeout):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(geo.requests, "get", fake_get)
    assert geo.load_state_districts("http://geo.test") == {}


def test_load_failure_serves_expired_copy(monkeypatch, fake_response):
    monkeypatch.setattr(geo.requests, "get", lambda url, timeout: fake_response(200, {"Goa": ["North Goa"]}))
    geo.load_state_districts("http://geo.test")

    fetched_at, data = geo._geo_cache["http://geo.test"]
    geo._geo_cache["http://geo.test"] = (fetched_at - geo.GEO_CACHE_SECONDS - 1, data)
    monkeypatch.setattr(geo.requests, "get", lambda url, timeout: fake_response(500, None, reason="Server Error"))

    assert geo.load_state_districts("http://geo.test") == {"Goa": ["North Goa"]}


def test_sorted_states_and_districts():
    data = {"Kerala": ["Kochi", "Alappuzha"], "Goa": ["South Goa", "North Goa"]}
    assert geo.sorted_states(data) == ["Goa", "Kerala"]
    assert geo.districts_for(data, "Kerala") == ["Alappuzha", "Kochi"]
    assert geo.districts_for(data, "") == []
    assert geo.districts_for(data, "Bihar") == []
