"""Excepciones del cliente GoCD.

Por qué una jerarquía propia:
- El llamador decide si reintenta o falla; el core nunca se recupera localmente.
- Cada tipo mapea a una etapa concreta (red, resolución de versión, HTTP, decode).

Todas heredan de `GoCDError`, así la CLI puede capturar una sola clase base.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from gocd_client.core.domain.models import APIResponse


class GoCDError(Exception):
    """Base exception for GoCD client operations."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class TransportError(GoCDError):
    """El intercambio no llegó a completarse (red, conexión, cancelación)."""


class RequestCancelledError(TransportError):
    """El contexto se canceló o venció su deadline con la petición en curso."""

    def __init__(self, reason: str, url: str | None = None) -> None:
        super().__init__(
            f"Request aborted ({reason})",
            {"reason": reason, "url": url} if url else {"reason": reason},
        )
        self.reason = reason
        self.url = url


class UnsupportedResourceError(GoCDError):
    """El servidor no reconoce (o no soporta) el resource path."""

    def __init__(self, path: str, reason: str | None = None) -> None:
        message = f"Resource '{path}' is not supported by the server"
        if reason:
            message += f": {reason}"
        super().__init__(message, {"path": path})
        self.path = path


class HTTPStatusError(GoCDError):
    """Respuesta completa pero con status fuera de 2xx."""

    def __init__(self, response: APIResponse) -> None:
        super().__init__(
            f"Server returned HTTP {response.status_code}",
            {"status_code": response.status_code, "url": response.url},
        )
        self.response = response
        self.status_code = response.status_code
        self.body = response.body


class DecodeError(GoCDError):
    """El body no encaja en la forma de destino (JSON roto o esquema distinto)."""

    def __init__(self, message: str, response: APIResponse) -> None:
        super().__init__(message, {"status_code": response.status_code, "url": response.url})
        self.response = response


class ConfigurationError(GoCDError):
    """Configuration error."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, details)
