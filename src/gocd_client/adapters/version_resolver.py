"""Resolución de la versión de API por recurso.

GoCD versiona cada recurso por separado (`application/vnd.go.cd.vN+json`), y
la versión aceptada depende de la versión del servidor. Dos estrategias:

- `StaticVersionResolver`: tabla fija path -> versión. Útil cuando se conoce
  el servidor (y en tests).
- `ServerVersionResolver`: consulta `api/version` y elige, para el path pedido,
  la versión más alta cuyo mínimo de servidor se cumple.

Ninguna cachea: cada `resolve` es independiente.
"""

from __future__ import annotations

import logging
from typing import Mapping, Sequence

from gocd_client.adapters.dispatcher import ActionDispatcher
from gocd_client.adapters.resources.server_version import ServerVersionService
from gocd_client.core.context import RequestContext
from gocd_client.core.domain.models import parse_version
from gocd_client.core.domain.paths import APIVersion, ResourcePath, media_type
from gocd_client.core.errors import (
    DecodeError,
    HTTPStatusError,
    TransportError,
    UnsupportedResourceError,
)

logger = logging.getLogger(__name__)

# path -> [(versión mínima del servidor, versión de API)], en cualquier orden.
API_VERSION_TABLE: dict[str, list[tuple[str, int]]] = {
    "version": [("16.6.0", 1)],
    "admin/pipeline_groups": [("14.3.0", 1)],
}


def _normalize_path(path: ResourcePath | str) -> ResourcePath:
    if isinstance(path, ResourcePath):
        return path
    return ResourcePath(path)


def _table_key(path: ResourcePath) -> str:
    return path.value.strip("/")


def _padded(version: tuple[int, ...]) -> tuple[int, ...]:
    return version + (0,) * max(0, 3 - len(version))


def select_api_version(
    path: ResourcePath,
    server_version: str,
    table: Mapping[str, Sequence[tuple[str, int]]],
) -> APIVersion:
    """Versión más alta de `table[path]` soportada por `server_version`."""

    entries = table.get(_table_key(path))
    if not entries:
        raise UnsupportedResourceError(path.value, "no API version known for this resource")

    running = _padded(parse_version(server_version))
    candidates = [
        api_version
        for minimum, api_version in entries
        if _padded(parse_version(minimum)) <= running
    ]
    if not candidates:
        raise UnsupportedResourceError(path.value, f"server {server_version} is too old")

    return APIVersion(media_type(max(candidates)), path)


class StaticVersionResolver:
    """Lookup estático: `{"admin/pipeline_groups": "application/vnd.go.cd.v1+json"}`.

    Los valores pueden ser media types completos o enteros (`1` => v1).
    """

    def __init__(self, versions: Mapping[str, str | int]) -> None:
        self._versions = {key.strip("/"): value for key, value in versions.items()}

    async def resolve(self, ctx: RequestContext, path: ResourcePath | str) -> APIVersion:
        resource = _normalize_path(path)
        ctx.check(resource.value)

        value = self._versions.get(_table_key(resource))
        if value is None:
            raise UnsupportedResourceError(resource.value)
        token = media_type(value) if isinstance(value, int) else value
        return APIVersion(token, resource)


class ServerVersionResolver:
    """Sondea `api/version` y elige la versión desde `table`."""

    def __init__(
        self,
        dispatcher: ActionDispatcher,
        table: Mapping[str, Sequence[tuple[str, int]]] | None = None,
    ) -> None:
        self._server_version = ServerVersionService(dispatcher)
        self._table = table if table is not None else API_VERSION_TABLE

    async def resolve(self, ctx: RequestContext, path: ResourcePath | str) -> APIVersion:
        resource = _normalize_path(path)
        if _table_key(resource) not in self._table:
            raise UnsupportedResourceError(resource.value)

        try:
            server, _ = await self._server_version.get(ctx)
        except HTTPStatusError as exc:
            if exc.status_code == 404:
                raise UnsupportedResourceError(
                    resource.value, "server does not expose api/version"
                ) from exc
            raise TransportError(
                f"Version lookup failed with HTTP {exc.status_code}",
                {"path": resource.value, "status_code": exc.status_code},
            ) from exc
        except DecodeError as exc:
            raise TransportError(
                "Version lookup returned an unreadable body",
                {"path": resource.value},
            ) from exc

        try:
            api_version = select_api_version(resource, server.version, self._table)
        except ValueError as exc:
            raise TransportError(
                f"Server reported an invalid version: {server.version!r}",
                {"path": resource.value},
            ) from exc

        logger.debug("GoCD %s: %s -> %s", server.version, resource, api_version)
        return api_version
