import asyncio
import sys
from pathlib import Path

import aiohttp
import pytest
from aiohttp import web
from aiohttp import test_utils

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from raxcloud.api_client import ApiClient
from raxcloud.auth import StaticTokenAuthenticator
from raxcloud.exceptions import DecodeError, TransportError, UnexpectedStatus
from raxcloud.pagination import values_page
from raxcloud.transport import AiohttpTransport


async def _echo(request):
    body = await request.json() if request.can_read_body else None
    return web.json_response(
        {
            "method": request.method,
            "query": dict(request.query),
            "token": request.headers.get("X-Auth-Token"),
            "content_type": request.headers.get("Content-Type"),
            "body": body,
        },
        headers={"Retry-After": "3"},
    )


async def _slow(request):
    await asyncio.sleep(0.5)
    return web.json_response({})


async def _bad_utf8(request):
    return web.Response(
        body=b'{"values": ["\xff\xfe"], "metadata": {}}',
        content_type="application/json",
        charset="utf-8",
    )


async def _unavailable(request):
    return web.Response(status=503, text="try later")


def _app():
    app = web.Application()
    app.router.add_route("*", "/entities", _echo)
    app.router.add_get("/slow", _slow)
    app.router.add_get("/garbled", _bad_utf8)
    app.router.add_get("/down", _unavailable)
    return app


def _serve(scenario, **transport_options):
    """Run scenario(transport, base_url) against a local aiohttp server."""

    async def _run():
        async with test_utils.TestServer(_app()) as server:
            async with AiohttpTransport(**transport_options) as transport:
                return await scenario(transport, str(server.make_url("/")).rstrip("/"))

    return asyncio.run(_run())


def test_params_become_the_query_string():
    async def scenario(transport, base):
        return await transport.request("GET", f"{base}/entities", params={"marker": "enB"})

    response = _serve(scenario)

    assert response.status == 200
    assert response.json()["query"] == {"marker": "enB"}
    assert response.url.endswith("/entities?marker=enB")


def test_json_body_and_headers_are_sent():
    async def scenario(transport, base):
        return await transport.request(
            "POST",
            f"{base}/entities",
            headers={"X-Auth-Token": "tok", "Content-Type": "application/json"},
            body={"label": "web01", "ip_addresses": {"default": "10.0.0.1"}},
        )

    payload = _serve(scenario).json()

    assert payload["method"] == "POST"
    assert payload["token"] == "tok"
    assert payload["content_type"] == "application/json"
    assert payload["body"] == {"label": "web01", "ip_addresses": {"default": "10.0.0.1"}}


def test_response_headers_are_case_insensitive():
    async def scenario(transport, base):
        return await transport.request("GET", f"{base}/entities")

    response = _serve(scenario)

    assert response.header("retry-after") == "3"
    assert response.header("RETRY-AFTER") == "3"
    assert response.header("X-Missing", "none") == "none"


def test_refused_connection_is_a_transport_error():
    async def _run():
        async with AiohttpTransport(connection_timeout=1) as transport:
            await transport.request("GET", "http://127.0.0.1:1/entities")

    with pytest.raises(TransportError) as excinfo:
        asyncio.run(_run())

    assert excinfo.value.method == "GET"
    assert excinfo.value.url == "http://127.0.0.1:1/entities"


def test_slow_response_is_a_timeout():
    async def scenario(transport, base):
        return await transport.request("GET", f"{base}/slow")

    with pytest.raises(TransportError) as excinfo:
        _serve(scenario, read_timeout=0.05)

    assert excinfo.value.reason == "timeout"


def test_invalid_utf8_body_is_a_decode_error():
    async def scenario(transport, base):
        client = ApiClient(base, transport, authenticator=StaticTokenAuthenticator("tok"))
        return await client.fetch_paginated("/garbled", values_page(str))

    with pytest.raises(DecodeError) as excinfo:
        _serve(scenario)

    assert excinfo.value.url.endswith("/garbled")


def test_error_status_passes_through_to_the_client():
    async def scenario(transport, base):
        client = ApiClient(base, transport)
        return await client.get_json("/down", dict)

    with pytest.raises(UnexpectedStatus) as excinfo:
        _serve(scenario)

    assert excinfo.value.status == 503
    assert excinfo.value.body == "try later"


def test_injected_session_is_left_open():
    async def _run():
        async with test_utils.TestServer(_app()) as server:
            session = aiohttp.ClientSession()
            try:
                async with AiohttpTransport(session=session) as transport:
                    response = await transport.request("GET", str(server.make_url("/entities")))
                still_open = not session.closed
            finally:
                await session.close()
        return response, still_open, transport.session is session

    response, still_open, kept = asyncio.run(_run())

    assert response.status == 200
    assert still_open
    assert kept


def test_owned_session_is_closed_on_exit():
    async def _run():
        async with AiohttpTransport() as transport:
            session = transport.session
        return session.closed, transport.session

    closed, session = asyncio.run(_run())

    assert closed
    assert session is None


def test_request_outside_context_manager_is_refused():
    with pytest.raises(RuntimeError):
        asyncio.run(AiohttpTransport().request("GET", "http://127.0.0.1:1/"))
