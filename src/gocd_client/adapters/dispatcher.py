"""Dispatcher genérico de acciones contra la API de GoCD.

Un único mecanismo para todos los recursos:
- Cada recurso aporta solo path + forma de destino (`response_shape`).
- Un intercambio HTTP por llamada, sin reintentos.
- Resultado: `(decoded, APIResponse)` o una excepción de `core.errors`.

Los errores son mutuamente excluyentes: `TransportError` (no hubo respuesta),
`HTTPStatusError` (hubo respuesta no-2xx) o `DecodeError` (2xx con body que no
encaja). Los dos últimos llevan el `APIResponse` en `.response`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from gocd_client.core.context import RequestContext
from gocd_client.core.domain.models import APIResponse
from gocd_client.core.domain.paths import APIVersion, ResourcePath
from gocd_client.core.errors import DecodeError, HTTPStatusError
from gocd_client.core.interfaces.codec import Codec
from gocd_client.core.interfaces.transport import HTTPTransport

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class APIClientRequest(Generic[T]):
    """Petición a despachar.

    `api_version` debe haberse resuelto para el mismo path; el dispatcher no lo
    revalida.
    """

    path: ResourcePath
    api_version: APIVersion
    response_shape: type[T] | Any
    method: str = "GET"


class ActionDispatcher:
    def __init__(self, transport: HTTPTransport, codec: Codec) -> None:
        self._transport = transport
        self._codec = codec

    async def perform(self, ctx: RequestContext, request: APIClientRequest[T]) -> tuple[T, APIResponse]:
        method = request.method.upper()
        url = str(request.path)
        headers = request.api_version.header()

        logger.debug("%s %s (Accept: %s)", method, url, request.api_version)
        raw = await ctx.run(self._transport.send(method, url, headers), url=url)

        response = APIResponse(
            method=method,
            url=raw.url or url,
            status_code=raw.status_code,
            headers=dict(raw.headers),
            body=raw.body,
        )
        logger.debug("%s %s -> HTTP %s", method, url, response.status_code)

        if not response.is_success:
            logger.warning("GoCD answered HTTP %s for %s %s", response.status_code, method, url)
            raise HTTPStatusError(response)

        try:
            decoded = self._codec.decode(response.body, request.response_shape)
        except ValueError as exc:
            logger.warning("Could not decode response of %s %s: %s", method, url, exc)
            raise DecodeError(f"Could not decode response body: {exc}", response) from exc

        return decoded, response

    async def get(
        self,
        ctx: RequestContext,
        path: ResourcePath,
        api_version: APIVersion,
        response_shape: type[T] | Any,
    ) -> tuple[T, APIResponse]:
        """Atajo para lecturas (GET)."""

        return await self.perform(
            ctx,
            APIClientRequest(path=path, api_version=api_version, response_shape=response_shape),
        )
