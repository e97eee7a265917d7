# tests/test_property_api_client.py
"""
Tests du client HTTP add-property
Exécuter: pytest tests/test_property_api_client.py -v
"""
import pytest
import requests

from app.clients import PropertyApiError, add_property_via_api, add_property_via_webhook


class StubResponse:
    def __init__(self, status_code, body):
        self.status_code = status_code
        self.ok = status_code < 400
        self._body = body

    def json(self):
        if self._body is None:
            raise ValueError("no json")
        return self._body


class StubSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def post(self, url, headers=None, json=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "json": json, "timeout": timeout})
        if self.error:
            raise self.error
        return self.response


def test_add_property_via_api_success():
    session = StubSession(StubResponse(201, {"success": True, "data": {"id": "p1"}}))
    result = add_property_via_api(
        {"title": "Flat"}, "user-jwt",
        base_url="https://demo.supabase.co/", anon_key="anon", session=session
    )

    assert result["data"]["id"] == "p1"
    call = session.calls[0]
    assert call["url"] == "https://demo.supabase.co/functions/v1/add-property"
    assert call["headers"]["Authorization"] == "Bearer user-jwt"
    assert call["headers"]["apikey"] == "anon"
    assert call["json"] == {"title": "Flat"}


def test_error_body_is_raised():
    session = StubSession(StubResponse(400, {"error": "Le titre est obligatoire"}))
    with pytest.raises(PropertyApiError) as exc_info:
        add_property_via_api({}, "key", base_url="https://demo.supabase.co", session=session)
    assert str(exc_info.value) == "Le titre est obligatoire"
    assert exc_info.value.status_code == 400


def test_non_json_error():
    session = StubSession(StubResponse(502, None))
    with pytest.raises(PropertyApiError) as exc_info:
        add_property_via_api({"title": "x"}, "key", base_url="https://demo.supabase.co", session=session)
    assert exc_info.value.status_code == 502


def test_network_error():
    session = StubSession(error=requests.ConnectionError("refused"))
    with pytest.raises(PropertyApiError):
        add_property_via_api({"title": "x"}, "key", base_url="https://demo.supabase.co", session=session)


def test_authentication_required():
    with pytest.raises(PropertyApiError):
        add_property_via_api({"title": "x"}, None)


def test_webhook_requires_api_key():
    with pytest.raises(PropertyApiError):
        add_property_via_webhook({"title": "x"}, "")


def test_webhook_uses_api_key():
    session = StubSession(StubResponse(201, {"success": True, "data": {"id": "p2"}}))
    add_property_via_webhook({"title": "x", "agent_id": "a1"}, "shared-key",
                             base_url="https://demo.supabase.co", session=session)
    assert session.calls[0]["headers"]["Authorization"] == "Bearer shared-key"
