"""Identificadores de recurso y versiones de protocolo.

Reglas:
- Un `ResourcePath` nunca está vacío.
- Un `APIVersion` solo tiene sentido junto al path para el que se resolvió;
  no se comparan versiones entre recursos distintos.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ResourcePath:
    """Segmento de endpoint del servidor (p.ej. `admin/pipeline_groups`)."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value:
            raise ValueError("resource path must be a non-empty string")

    def with_suffix(self, name: str) -> "ResourcePath":
        """Añade `name` tal cual, sin separador ni escaping.

        `admin/pipeline_groups` + `default` => `admin/pipeline_groupsdefault`.
        """

        if not name:
            return self
        return ResourcePath(self.value + name)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class APIVersion:
    """Media type negociado para un path concreto."""

    media_type: str
    path: ResourcePath

    def __post_init__(self) -> None:
        if not self.media_type:
            raise ValueError("api version must be a non-empty media type")

    def header(self) -> dict[str, str]:
        return {"Accept": self.media_type}

    def __str__(self) -> str:
        return self.media_type


def media_type(version: int) -> str:
    """`1` => `application/vnd.go.cd.v1+json`."""

    return f"application/vnd.go.cd.v{int(version)}+json"
