"""Pytest configuration and fixtures for gocd-client tests."""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field
from typing import Any

import httpx
import pytest

from gocd_client.core.config import ClientSettings
from gocd_client.core.interfaces.transport import RawResponse
from gocd_client.core.services.client import GoCDClient

SERVER_URL = "http://gocd.test"
API_PREFIX = "/go/api/"

GROUPS_FIXTURE: list[dict[str, Any]] = [
    {
        "name": "default",
        "pipelines": [
            {"name": "up42", "label": "${COUNT}", "materials": [], "stages": [{"name": "build"}]},
            {"name": "deploy", "label": "${COUNT}"},
        ],
    },
    {
        "name": "build",
        "pipelines": [{"name": "compile"}, {"name": "package"}],
    },
]


@dataclass
class FakeGoCD:
    """GoCD falso para `httpx.MockTransport`.

    `routes` mapea el path relativo a la API (`admin/pipeline_groups`) a
    `(status, body)`; `body` puede ser bytes o algo serializable a JSON.
    """

    server_version: str = "19.1.0"
    routes: dict[str, tuple[int, Any]] = field(default_factory=dict)
    requests: list[httpx.Request] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.routes.setdefault("version", (200, {"version": self.server_version, "build_number": "8041"}))
        self.routes.setdefault("admin/pipeline_groups", (200, GROUPS_FIXTURE))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        relative = path[len(API_PREFIX):] if path.startswith(API_PREFIX) else path
        status, body = self.routes.get(relative, (404, {"message": "Not found"}))
        content = body if isinstance(body, bytes) else json.dumps(body).encode("utf-8")
        return httpx.Response(status, content=content, headers={"Content-Type": "application/json"})

    def paths(self) -> list[str]:
        return [r.url.path[len(API_PREFIX):] for r in self.requests]

    def requests_to(self, relative: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == API_PREFIX + relative]


class SlowTransport:
    """`HTTPTransport` que nunca responde a tiempo (para cancelación)."""

    def __init__(self, delay: float = 30.0) -> None:
        self.delay = delay
        self.calls: list[tuple[str, str, dict[str, str]]] = []
        self.cancelled = False

    async def send(self, method: str, url: str, headers: dict[str, str]) -> RawResponse:
        self.calls.append((method, url, headers))
        try:
            await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        return RawResponse(status_code=200, body=b"[]", url=url)

    async def aclose(self) -> None:
        return None


class StaticTransport:
    """`HTTPTransport` en memoria con una respuesta fija."""

    def __init__(self, status_code: int = 200, body: bytes = b"[]") -> None:
        self.status_code = status_code
        self.body = body
        self.calls: list[tuple[str, str, dict[str, str]]] = []

    async def send(self, method: str, url: str, headers: dict[str, str]) -> RawResponse:
        self.calls.append((method, url, headers))
        return RawResponse(status_code=self.status_code, body=self.body, url=url)

    async def aclose(self) -> None:
        return None


@pytest.fixture
def settings() -> ClientSettings:
    return ClientSettings(server_url=SERVER_URL, _env_file=None)


@pytest.fixture
def fake_gocd() -> FakeGoCD:
    return FakeGoCD()


@pytest.fixture
def make_client(settings: ClientSettings):
    """Construye un `GoCDClient` real sobre `httpx.MockTransport`."""

    def _make(server: FakeGoCD, **kwargs: Any) -> GoCDClient:
        return GoCDClient.from_settings(
            settings,
            http_transport=httpx.MockTransport(server.handler),
            **kwargs,
        )

    return _make
