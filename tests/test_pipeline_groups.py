"""Tests for the pipeline groups resource client."""

import asyncio
import time

import pytest

from gocd_client.adapters.codec import PydanticCodec
from gocd_client.adapters.dispatcher import ActionDispatcher
from gocd_client.adapters.resources.pipeline_groups import PipelineGroupsService
from gocd_client.adapters.version_resolver import StaticVersionResolver
from gocd_client.core.context import RequestContext
from gocd_client.core.errors import (
    DecodeError,
    HTTPStatusError,
    RequestCancelledError,
    TransportError,
    UnsupportedResourceError,
)

from conftest import GROUPS_FIXTURE, FakeGoCD, SlowTransport


def _list(client, name=""):
    async def _run():
        async with client:
            return await client.pipeline_groups.list(RequestContext(timeout=5), name)

    return asyncio.run(_run())


class TestListPipelineGroups:
    def test_lists_all_groups_in_server_order(self, fake_gocd, make_client):
        groups, response = _list(make_client(fake_gocd))

        assert groups.names() == ["default", "build"]
        assert [p.name for p in groups[0].pipelines] == ["up42", "deploy"]
        assert [p.name for p in groups[1].pipelines] == ["compile", "package"]
        assert response.status_code == 200
        assert fake_gocd.paths() == ["version", "admin/pipeline_groups"]

    def test_sends_negotiated_version_header(self, fake_gocd, make_client):
        _list(make_client(fake_gocd))

        request = fake_gocd.requests_to("admin/pipeline_groups")[0]
        assert request.method == "GET"
        assert request.headers["Accept"] == "application/vnd.go.cd.v1+json"

    def test_name_is_appended_without_separator(self, make_client):
        server = FakeGoCD(routes={"admin/pipeline_groupsdefault": (200, GROUPS_FIXTURE[:1])})

        groups, _ = _list(make_client(server), "default")

        assert server.paths() == ["version", "admin/pipeline_groupsdefault"]
        assert groups.names() == ["default"]

    def test_order_and_duplicates_preserved(self, make_client):
        payload = [{"name": n, "pipelines": []} for n in ["z", "a", "m", "a"]]
        server = FakeGoCD(routes={"admin/pipeline_groups": (200, payload)})

        groups, _ = _list(make_client(server))

        assert groups.names() == ["z", "a", "m", "a"]

    def test_idempotent_against_unchanged_server(self, fake_gocd, make_client):
        first, _ = _list(make_client(fake_gocd))
        second, _ = _list(make_client(fake_gocd))

        assert first == second

    def test_404_raises_http_status_error(self, make_client):
        server = FakeGoCD(routes={"admin/pipeline_groups": (404, {"message": "Either the resource you requested was not found, or you are not authorized to perform this action."})})

        with pytest.raises(HTTPStatusError) as excinfo:
            _list(make_client(server))

        assert excinfo.value.status_code == 404
        assert b"not found" in excinfo.value.body

    def test_malformed_body_raises_decode_error_with_real_status(self, make_client):
        server = FakeGoCD(routes={"admin/pipeline_groups": (200, b'[{"name": "default", ')})

        with pytest.raises(DecodeError) as excinfo:
            _list(make_client(server))

        assert excinfo.value.response.status_code == 200

    def test_resolution_failure_skips_dispatch(self, make_client):
        server = FakeGoCD(routes={"version": (404, {"message": "Not found"})})

        with pytest.raises(UnsupportedResourceError):
            _list(make_client(server))

        assert server.paths() == ["version"]

    def test_static_resolver_skips_version_lookup(self, fake_gocd, make_client):
        client = make_client(fake_gocd, resolver=StaticVersionResolver({"admin/pipeline_groups": 1}))

        groups, _ = _list(client)

        assert len(groups) == 2
        assert fake_gocd.paths() == ["admin/pipeline_groups"]


class TestPipelineGroupsCancellation:
    def test_cancelled_context_returns_transport_error_promptly(self):
        transport = SlowTransport()
        service = PipelineGroupsService(
            StaticVersionResolver({"admin/pipeline_groups": 1}),
            ActionDispatcher(transport, PydanticCodec()),
        )

        async def _run():
            ctx = RequestContext()
            asyncio.get_running_loop().call_later(0.05, ctx.cancel)
            await service.list(ctx, "")

        started = time.monotonic()
        with pytest.raises(RequestCancelledError) as excinfo:
            asyncio.run(_run())

        assert isinstance(excinfo.value, TransportError)
        assert time.monotonic() - started < 2
        assert transport.calls[0][1] == "admin/pipeline_groups"
