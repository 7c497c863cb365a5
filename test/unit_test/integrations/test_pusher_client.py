"""Unit tests for the Pusher REST client."""

import hashlib
import hmac
import json

import httpx
import pytest

from mentorconnect.integrations.errors import RealtimeError
from mentorconnect.integrations.pusher import PusherClient, sign_request

pytestmark = pytest.mark.asyncio


def _client(handler) -> PusherClient:
    return PusherClient(
        "4242",
        "app-key",
        "app-secret",
        "ap1",
        client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        clock=lambda: 1700000000.9,
    )


def test_sign_request_sorts_parameters():
    params = {"body_md5": "abc", "auth_key": "k", "auth_version": "1.0", "auth_timestamp": "1"}
    expected = hmac.new(
        b"secret",
        b"POST\n/apps/1/events\nauth_key=k&auth_timestamp=1&auth_version=1.0&body_md5=abc",
        hashlib.sha256,
    ).hexdigest()
    assert sign_request("secret", "POST", "/apps/1/events", params) == expected


async def test_trigger_sends_signed_request():
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json={})

    client = _client(handler)
    await client.trigger("user-u1", "notification", {"title": "Hi"})

    request = captured[0]
    assert request.method == "POST"
    assert request.url.host == "api-ap1.pusher.com"
    assert request.url.path == "/apps/4242/events"

    body = json.loads(request.content)
    assert body == {"name": "notification", "channels": ["user-u1"], "data": json.dumps({"title": "Hi"})}

    query = dict(request.url.params)
    assert query["auth_key"] == "app-key"
    assert query["auth_timestamp"] == "1700000000"
    assert query["auth_version"] == "1.0"
    assert query["body_md5"] == hashlib.md5(request.content).hexdigest()
    signed = {k: v for k, v in query.items() if k != "auth_signature"}
    assert query["auth_signature"] == sign_request("app-secret", "POST", "/apps/4242/events", signed)
    await client.aclose()


async def test_trigger_http_error():
    client = _client(lambda request: httpx.Response(401, text="Invalid signature"))
    with pytest.raises(RealtimeError) as exc_info:
        await client.trigger("user-u1", "notification", {})
    assert exc_info.value.status_code == 401
    assert exc_info.value.details == "Invalid signature"


async def test_trigger_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    with pytest.raises(RealtimeError) as exc_info:
        await _client(handler).trigger("user-u1", "notification", {})
    assert exc_info.value.status_code is None
