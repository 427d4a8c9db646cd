"""Recurso: grupos de pipelines (`admin/pipeline_groups`).

Notas:
- El filtro `name` se concatena tal cual al path, sin `/` ni escaping
  (`admin/pipeline_groupsdefault`). Es el contrato observado en el servidor;
  no lo "arreglamos" sin confirmarlo.
- Todos los errores del resolvedor y del dispatcher se propagan sin tocar.
"""

from __future__ import annotations

from gocd_client.adapters.dispatcher import ActionDispatcher
from gocd_client.core.context import RequestContext
from gocd_client.core.domain.models import APIResponse, PipelineGroups
from gocd_client.core.domain.paths import ResourcePath
from gocd_client.core.interfaces.resolver import VersionResolver

PIPELINE_GROUPS_PATH = ResourcePath("admin/pipeline_groups")


class PipelineGroupsService:
    """Operaciones de lectura sobre grupos de pipelines."""

    def __init__(self, resolver: VersionResolver, dispatcher: ActionDispatcher) -> None:
        self._resolver = resolver
        self._dispatcher = dispatcher

    async def list(self, ctx: RequestContext, name: str = "") -> tuple[PipelineGroups, APIResponse]:
        """Lista los grupos (todos si `name` está vacío).

        Devuelve la colección en el orden del servidor junto al `APIResponse`.
        """

        api_version = await self._resolver.resolve(ctx, PIPELINE_GROUPS_PATH)
        return await self._dispatcher.get(
            ctx,
            PIPELINE_GROUPS_PATH.with_suffix(name),
            api_version,
            PipelineGroups,
        )
