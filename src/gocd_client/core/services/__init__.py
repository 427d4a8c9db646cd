"""Servicios del Core (composición de adaptadores)."""

from gocd_client.core.services.client import GoCDClient

__all__ = ["GoCDClient"]
