"""Fachada: cableado explícito de transporte, codec, dispatcher y resolvedor.

Por qué una fachada y no un cliente global:
- Cada servicio recibe sus colaboradores por constructor (inyección explícita).
- `GoCDClient` solo construye el grafo y cierra el transporte al salir.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import httpx

from gocd_client.adapters.codec import PydanticCodec
from gocd_client.adapters.dispatcher import ActionDispatcher
from gocd_client.adapters.http_client import HttpxTransport
from gocd_client.adapters.resources import PipelineGroupsService, ServerVersionService
from gocd_client.adapters.version_resolver import ServerVersionResolver
from gocd_client.core.config import ClientSettings
from gocd_client.core.context import RequestContext
from gocd_client.core.interfaces.codec import Codec
from gocd_client.core.interfaces.resolver import VersionResolver
from gocd_client.core.interfaces.transport import HTTPTransport


@dataclass
class GoCDClient:
    transport: HTTPTransport
    dispatcher: ActionDispatcher
    resolver: VersionResolver
    settings: ClientSettings = field(default_factory=ClientSettings)
    pipeline_groups: PipelineGroupsService = field(init=False)
    server_version: ServerVersionService = field(init=False)

    def __post_init__(self) -> None:
        self.pipeline_groups = PipelineGroupsService(self.resolver, self.dispatcher)
        self.server_version = ServerVersionService(self.dispatcher)

    @classmethod
    def build(
        cls,
        transport: HTTPTransport,
        *,
        codec: Codec | None = None,
        resolver: VersionResolver | None = None,
        settings: ClientSettings | None = None,
    ) -> "GoCDClient":
        dispatcher = ActionDispatcher(transport, codec or PydanticCodec())
        return cls(
            transport=transport,
            dispatcher=dispatcher,
            resolver=resolver or ServerVersionResolver(dispatcher),
            settings=settings or ClientSettings(),
        )

    @classmethod
    def from_settings(
        cls,
        settings: ClientSettings | None = None,
        *,
        http_transport: httpx.AsyncBaseTransport | None = None,
        resolver: VersionResolver | None = None,
    ) -> "GoCDClient":
        """Cliente httpx real; `http_transport` permite inyectar un `httpx.MockTransport`."""

        settings = settings or ClientSettings()
        transport = HttpxTransport.from_settings(settings, transport=http_transport)
        return cls.build(transport, resolver=resolver, settings=settings)

    def new_context(self) -> RequestContext:
        """Contexto con el deadline configurado (si lo hay)."""

        deadline = self.settings.request_deadline_seconds
        if deadline is None:
            return RequestContext.background()
        return RequestContext(timeout=deadline)

    async def aclose(self) -> None:
        await self.transport.aclose()

    async def __aenter__(self) -> "GoCDClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
