"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- El mismo modelo sirve como forma de destino para el codec: validar el JSON
  del servidor es decodificarlo.
- Los modelos describen *qué* devuelve GoCD, no *cómo* se pide.

Nota:
- Todo se crea por llamada y lo descarta el llamador; no hay estado compartido.
"""

from __future__ import annotations

from typing import Iterator

from pydantic import BaseModel, Field, RootModel, field_validator
from pydantic.config import ConfigDict


class Pipeline(BaseModel):
    """Referencia opaca a un pipeline.

    No se valida nada: name, label, materials, stages... se conservan tal cual
    porque los define el recurso de pipelines.
    """

    model_config = ConfigDict(extra="allow")

    name: str | None = Field(
        default=None,
        description="Nombre del pipeline (si el servidor lo envía).",
    )


class PipelineGroup(BaseModel):
    """Grupo de pipelines tal y como lo reporta el servidor."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(
        ...,
        min_length=1,
        description="Nombre del grupo (único dentro de un listado).",
    )
    pipelines: list[Pipeline] = Field(
        default_factory=list,
        description="Pipelines del grupo, en el orden del servidor.",
    )

    @field_validator("pipelines", mode="before")
    @classmethod
    def _null_pipelines(cls, value: object) -> object:
        # `"pipelines": null` equivale a un grupo vacío.
        return [] if value is None else value


class PipelineGroups(RootModel[list[PipelineGroup]]):
    """Colección ordenada de grupos (orden del servidor, duplicados incluidos)."""

    root: list[PipelineGroup] = Field(default_factory=list)

    def __iter__(self) -> Iterator[PipelineGroup]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def __getitem__(self, index: int) -> PipelineGroup:
        return self.root[index]

    def names(self) -> list[str]:
        return [group.name for group in self.root]

    def find(self, name: str) -> PipelineGroup | None:
        """Primer grupo con ese nombre, o None."""

        for group in self.root:
            if group.name == name:
                return group
        return None


class ServerVersion(BaseModel):
    """Respuesta de `GET api/version`."""

    model_config = ConfigDict(extra="ignore")

    version: str = Field(
        ...,
        min_length=1,
        description="Versión semántica del servidor (p.ej. '16.6.0').",
    )
    build_number: str | None = None
    git_sha: str | None = None
    full_version: str | None = None
    commit_url: str | None = None

    def version_tuple(self) -> tuple[int, ...]:
        return parse_version(self.version)


class APIResponse(BaseModel):
    """Metadatos de transporte de un intercambio completado.

    Se devuelve siempre que hubo respuesta, incluso si el decode falla, para
    diagnosticar con status/headers.
    """

    method: str
    url: str
    status_code: int
    headers: dict[str, str] = Field(default_factory=dict)
    body: bytes = b""

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


def parse_version(raw: str) -> tuple[int, ...]:
    """`'16.6.0'` => `(16, 6, 0)`; ignora sufijos no numéricos (`'17.1.0-rc1'`)."""

    parts: list[int] = []
    for chunk in raw.strip().split("."):
        digits = ""
        for ch in chunk:
            if not ch.isdigit():
                break
            digits += ch
        if not digits:
            break
        parts.append(int(digits))
    if not parts:
        raise ValueError(f"invalid version: {raw!r}")
    return tuple(parts)
