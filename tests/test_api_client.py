"""
REST client: headers, error mapping, body decoding.
"""

import pytest
import requests

from console.integrations.api_client import ApiClient, ApiError, Pagination


def test_get_sends_token_params_and_timeout(fake_session, fake_response):
    session = fake_session(fake_response(200, {"institutions": []}))
    client = ApiClient("http://api.test/api/", token="tok", timeout=3, session=session)

    body = client.get("/super-admin/institutions", params={"page": 1})

    assert body == {"institutions": []}
    call = session.calls[0]
    assert call["method"] == "GET"
    assert call["url"] == "http://api.test/api/super-admin/institutions"
    assert call["params"] == {"page": 1}
    assert call["timeout"] == 3
    assert call["headers"]["Authorization"] == "Bearer tok"


def test_no_token_no_auth_header(fake_session, fake_response):
    session = fake_session(fake_response(200, {}))
    ApiClient("http://api.test", session=session).post("/x", json={"a": 1})
    assert "Authorization" not in session.calls[0]["headers"]
    assert session.calls[0]["json"] == {"a": 1}


def test_http_error_uses_backend_message(fake_session, fake_response):
    session = fake_session(fake_response(400, {"message": "Name is required"}, reason="Bad Request"))
    client = ApiClient("http://api.test", session=session)

    with pytest.raises(ApiError) as info:
        client.post("/super-admin/institutions", json={})

    assert info.value.status == 400
    assert info.value.message == "Name is required"
    assert info.value.payload == {"message": "Name is required"}


def test_http_error_without_body_uses_reason(fake_session, fake_response):
    session = fake_session(fake_response(401, None, reason="Unauthorized"))
    with pytest.raises(ApiError) as info:
        ApiClient("http://api.test", session=session).get("/me")
    assert info.value.message == "Unauthorized"
    assert info.value.is_unauthorized


def test_http_error_without_reason(fake_session, fake_response):
    session = fake_session(fake_response(503, None, reason=""))
    with pytest.raises(ApiError) as info:
        ApiClient("http://api.test", session=session).get("/me")
    assert info.value.message == "HTTP 503"


def test_transport_failure_becomes_api_error(fake_session):
    session = fake_session(requests.ConnectionError("connection refused"))
    with pytest.raises(ApiError) as info:
        ApiClient("http://api.test", session=session).get("/events")
    assert info.value.status is None
    assert "connection refused" in info.value.message


def test_non_json_and_non_dict_bodies(fake_session, fake_response):
    session = fake_session(
        fake_response(200, None, raw=b"<html>oops</html>"),
        fake_response(200, ["a", "b"]),
        fake_response(204, None),
    )
    client = ApiClient("http://api.test", session=session)

    assert client.get("/html") == {}
    assert client.get("/list") == {"data": ["a", "b"]}
    assert client.delete("/thing/1") == {}


def test_pagination_from_payload():
    assert Pagination.from_payload({"pagination": {"page": 2, "limit": 10, "total": 35, "pages": 4}}) == Pagination(2, 10, 35, 4)
    assert Pagination.from_payload({}, limit=12) == Pagination(1, 12, 0, 0)
    assert Pagination.from_payload(None) == Pagination()
