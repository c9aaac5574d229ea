import os
import sys

import pytest
import requests

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from console.notifications.toast import clear_toasts  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_toasts():
    clear_toasts()
    yield
    clear_toasts()


class FakeResponse:
    def __init__(self, status_code=200, body=None, reason="OK", raw=None):
        self.status_code = status_code
        self.reason = reason
        self._body = body
        if raw is not None:
            self.content = raw
        else:
            self.content = b"" if body is None else b"{}"

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if self._body is None:
            raise ValueError("No JSON")
        return self._body

    def raise_for_status(self):
        if not self.ok:
            raise requests.HTTPError(f"{self.status_code} {self.reason}")


class FakeSession:
    """Records requests and replays queued responses."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def fake_session():
    return FakeSession
