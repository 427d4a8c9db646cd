"""Recurso: versión del servidor (`GET api/version`).

Es el único recurso con versión fija: lo usa el propio resolvedor como sonda,
así que no puede depender de él.
"""

from __future__ import annotations

from gocd_client.adapters.dispatcher import ActionDispatcher
from gocd_client.core.context import RequestContext
from gocd_client.core.domain.models import APIResponse, ServerVersion
from gocd_client.core.domain.paths import APIVersion, ResourcePath, media_type

SERVER_VERSION_PATH = ResourcePath("version")
SERVER_VERSION_API = APIVersion(media_type(1), SERVER_VERSION_PATH)


class ServerVersionService:
    def __init__(self, dispatcher: ActionDispatcher) -> None:
        self._dispatcher = dispatcher

    async def get(self, ctx: RequestContext) -> tuple[ServerVersion, APIResponse]:
        return await self._dispatcher.get(ctx, SERVER_VERSION_PATH, SERVER_VERSION_API, ServerVersion)
