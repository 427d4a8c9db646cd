"""Contrato del transporte HTTP.

Por qué Protocol:
- El core no construye TLS ni auth; solo necesita "enviar y recibir bytes".
- Permite sustituir httpx por un fake en tests sin herencia.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class RawResponse:
    """Respuesta cruda del transporte (sin decodificar)."""

    status_code: int
    body: bytes = b""
    headers: dict[str, str] = field(default_factory=dict)
    url: str = ""


@runtime_checkable
class HTTPTransport(Protocol):
    """Contrato mínimo de transporte.

    Reglas de diseño:
    - `url` es relativa a la base configurada en el transporte.
    - Errores de red se reportan como `core.errors.TransportError`.
    - Debe admitir uso concurrente desde varias tasks.
    """

    async def send(self, method: str, url: str, headers: dict[str, str]) -> RawResponse:
        ...

    async def aclose(self) -> None:
        ...
