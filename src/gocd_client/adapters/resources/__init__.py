"""Clientes por recurso.

Cada módulo aporta solo path + forma de destino y delega en el dispatcher.
"""

from gocd_client.adapters.resources.pipeline_groups import PIPELINE_GROUPS_PATH, PipelineGroupsService
from gocd_client.adapters.resources.server_version import SERVER_VERSION_PATH, ServerVersionService

__all__ = [
    "PIPELINE_GROUPS_PATH",
    "SERVER_VERSION_PATH",
    "PipelineGroupsService",
    "ServerVersionService",
]
