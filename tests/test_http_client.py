"""Tests for the httpx transport adapter."""

import asyncio

import httpx
import pytest

from gocd_client.adapters.http_client import HttpxTransport, build_async_client
from gocd_client.core.config import ClientSettings
from gocd_client.core.errors import TransportError


class TestBuildAsyncClient:
    def test_base_url_and_user_agent(self, settings):
        client = build_async_client(settings)

        assert str(client.base_url) == "http://gocd.test/go/api/"
        assert client.headers["User-Agent"] == "gocd-client/0.1"
        assert client.auth is None

    def test_basic_auth_when_configured(self):
        settings = ClientSettings(
            server_url="https://ci.example.com",
            username="admin",
            password="badger",
            _env_file=None,
        )

        client = build_async_client(settings)

        assert isinstance(client.auth, httpx.BasicAuth)


class TestHttpxTransport:
    def test_send_returns_raw_response(self, settings):
        seen = []

        def _handler(request):
            seen.append(request)
            return httpx.Response(200, json=[{"name": "default"}], headers={"X-Runtime": "3"})

        transport = HttpxTransport.from_settings(settings, transport=httpx.MockTransport(_handler))

        async def _run():
            try:
                return await transport.send("GET", "admin/pipeline_groups", {"Accept": "application/vnd.go.cd.v1+json"})
            finally:
                await transport.aclose()

        raw = asyncio.run(_run())

        assert raw.status_code == 200
        assert raw.headers["x-runtime"] == "3"
        assert raw.url == "http://gocd.test/go/api/admin/pipeline_groups"
        assert seen[0].headers["Accept"] == "application/vnd.go.cd.v1+json"

    def test_auth_header_is_applied(self):
        settings = ClientSettings(server_url="http://gocd.test", username="admin", password="badger", _env_file=None)
        seen = []

        def _handler(request):
            seen.append(request)
            return httpx.Response(200, json=[])

        transport = HttpxTransport.from_settings(settings, transport=httpx.MockTransport(_handler))
        asyncio.run(transport.send("GET", "version", {}))

        assert seen[0].headers["Authorization"].startswith("Basic ")

    @pytest.mark.parametrize(
        "exc_class",
        [httpx.ConnectError, httpx.ReadTimeout, httpx.RemoteProtocolError],
    )
    def test_network_errors_become_transport_errors(self, settings, exc_class):
        def _handler(request):
            raise exc_class("boom", request=request)

        transport = HttpxTransport.from_settings(settings, transport=httpx.MockTransport(_handler))

        with pytest.raises(TransportError) as excinfo:
            asyncio.run(transport.send("GET", "version", {}))
        assert isinstance(excinfo.value.__cause__, exc_class)
