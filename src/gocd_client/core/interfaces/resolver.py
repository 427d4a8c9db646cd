"""Contrato del resolvedor de versiones de API."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from gocd_client.core.context import RequestContext
from gocd_client.core.domain.paths import APIVersion, ResourcePath


@runtime_checkable
class VersionResolver(Protocol):
    """Determina el media type que el servidor exige para un path.

    - Lanza `TransportError` si la consulta no llega al servidor.
    - Lanza `UnsupportedResourceError` si el path no está soportado.
    - No cachea; quien quiera caché la pone por fuera.
    """

    async def resolve(self, ctx: RequestContext, path: ResourcePath | str) -> APIVersion:
        ...
