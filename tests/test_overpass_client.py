"""Tests for the httpx upstream client."""

import httpx
import pytest

from osm_gateway.errors import UpstreamError
from osm_gateway.protocols import UpstreamFetcher
from osm_gateway.repositories import FORM_HEADERS, OverpassHttpClient

INTERPRETER = "https://overpass.test/api/interpreter"


def client_for(handler) -> OverpassHttpClient:
    return OverpassHttpClient(timeout=5.0, transport=httpx.MockTransport(handler))


def test_satisfies_protocol():
    assert isinstance(OverpassHttpClient(timeout=1.0), UpstreamFetcher)


@pytest.mark.asyncio
async def test_post_sends_form_body_and_decodes_json():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["body"] = request.content.decode()
        seen["content_type"] = request.headers["content-type"]
        seen["user_agent"] = request.headers["user-agent"]
        return httpx.Response(200, json={"elements": []})

    client = client_for(handler)
    try:
        doc = await client.post(INTERPRETER, "data=node%281%29", FORM_HEADERS)
    finally:
        await client.close()

    assert doc == {"elements": []}
    assert seen["method"] == "POST"
    assert seen["body"] == "data=node%281%29"
    assert seen["content_type"] == "application/x-www-form-urlencoded"
    assert seen["user_agent"].startswith("osm-gateway")


@pytest.mark.asyncio
async def test_get_decodes_json():
    client = client_for(lambda request: httpx.Response(200, json={"elements": [{"id": 1}]}))
    try:
        assert await client.get("https://api.test/node/1.json") == {"elements": [{"id": 1}]}
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_http_error_status_becomes_upstream_error():
    client = client_for(lambda request: httpx.Response(429, text="rate limited"))
    try:
        with pytest.raises(UpstreamError) as exc_info:
            await client.post(INTERPRETER, "data=x")
    finally:
        await client.close()

    assert exc_info.value.status_code == 429
    assert exc_info.value.endpoint == INTERPRETER
    assert INTERPRETER in str(exc_info.value)


@pytest.mark.asyncio
async def test_transport_failure_becomes_upstream_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = client_for(handler)
    try:
        with pytest.raises(UpstreamError) as exc_info:
            await client.post(INTERPRETER, "data=x")
    finally:
        await client.close()
    assert exc_info.value.status_code is None


@pytest.mark.asyncio
async def test_timeout_becomes_upstream_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("read timed out", request=request)

    client = client_for(handler)
    try:
        with pytest.raises(UpstreamError, match="timed out"):
            await client.post(INTERPRETER, "data=x")
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_invalid_json_becomes_upstream_error():
    client = client_for(lambda request: httpx.Response(200, text="<osm></osm>"))
    try:
        with pytest.raises(UpstreamError, match="not valid JSON"):
            await client.post(INTERPRETER, "data=x")
    finally:
        await client.close()
