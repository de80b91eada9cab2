"""Tests for the CDS read operations."""

from __future__ import annotations

import httpx
import pytest

from txnative.exceptions import NetworkError, RemoteError, ShapeError
from txnative.models import Language
from txnative.services.cds import CDSClient


GREEK = {"name": "Greek", "code": "el", "localized_name": "Ελληνικά", "rtl": False}


@pytest.mark.asyncio
async def test_fetch_languages_sends_token(cds, http_client, make_settings):
    cds.reply("/languages", 200, {"data": [GREEK]})
    client = CDSClient(make_settings(), http_client=http_client)

    languages = await client.fetch_languages()

    assert languages == [Language(**GREEK)]
    request = cds.requests[0]
    assert str(request.url) == "https://cds.test/languages"
    assert request.headers["Authorization"] == "Bearer abcd"
    assert request.headers["Accept-version"] == "v2"


@pytest.mark.asyncio
async def test_fetch_languages_without_token_skips_network(cds, http_client, make_settings):
    client = CDSClient(make_settings(token=""), http_client=http_client)
    assert await client.fetch_languages() == []
    assert cds.requests == []


@pytest.mark.asyncio
async def test_fetch_languages_rejects_non_list_data(cds, http_client, make_settings):
    cds.reply("/languages", 200, {"data": {"el": GREEK}})
    client = CDSClient(make_settings(), http_client=http_client)
    with pytest.raises(ShapeError):
        await client.fetch_languages()


@pytest.mark.asyncio
async def test_fetch_content_without_token_is_anonymous(cds, http_client, make_settings):
    cds.reply("/content/el", 200, {"data": {"k": {"string": "v"}}})
    client = CDSClient(make_settings(token=""), http_client=http_client)

    data = await client.fetch_content("el")

    assert data == {"k": {"string": "v"}}
    assert "Authorization" not in cds.requests[0].headers


@pytest.mark.asyncio
async def test_fetch_content_appends_tag_filter(cds, http_client, make_settings):
    cds.reply("/content/lang", 200, {"data": {}})
    client = CDSClient(make_settings(), http_client=http_client)

    await client.fetch_content("lang", "tag1,tag2")

    request = cds.requests[0]
    assert request.url.params["filter[tags]"] == "tag1,tag2"


@pytest.mark.asyncio
async def test_fetch_content_rejects_list_data(cds, http_client, make_settings):
    cds.reply("/content/el", 200, {"data": []})
    client = CDSClient(make_settings(), http_client=http_client)
    with pytest.raises(ShapeError):
        await client.fetch_content("el")


@pytest.mark.asyncio
async def test_fetch_content_non_json_body_is_shape_error(make_settings):
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>")

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as raw_client:
        client = CDSClient(make_settings(), http_client=raw_client)
        with pytest.raises(ShapeError):
            await client.fetch_content("el")


@pytest.mark.asyncio
async def test_fetch_content_remote_error(cds, http_client, make_settings):
    cds.reply("/content/el", 503)
    client = CDSClient(make_settings(), http_client=http_client)
    with pytest.raises(RemoteError) as excinfo:
        await client.fetch_content("el")
    assert excinfo.value.status_code == 503


@pytest.mark.asyncio
async def test_transport_failure_becomes_network_error(make_settings):
    async def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as raw_client:
        client = CDSClient(make_settings(), http_client=raw_client)
        with pytest.raises(NetworkError) as excinfo:
            await client.fetch_languages()
    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_fetch_languages_rejects_malformed_entries(cds, http_client, make_settings):
    cds.reply("/languages", 200, {"data": [{"name": "No code"}]})
    client = CDSClient(make_settings(), http_client=http_client)
    with pytest.raises(ShapeError):
        await client.fetch_languages()


@pytest.mark.asyncio
async def test_owned_client_is_closed_on_exit(make_settings):
    async with CDSClient(make_settings()) as client:
        owned = client._get_client()
        assert client._get_client() is owned
    assert owned.is_closed

    reopened = client._get_client()
    assert reopened is not owned
    await client.aclose()
    assert reopened.is_closed


@pytest.mark.asyncio
async def test_injected_client_is_left_open(http_client, make_settings):
    async with CDSClient(make_settings(), http_client=http_client) as client:
        assert client._get_client() is http_client
    assert not http_client.is_closed
