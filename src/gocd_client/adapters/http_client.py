"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers, auth y TLS a partir de `ClientSettings`.
- Traduce excepciones de httpx a `TransportError` para que el core no dependa de httpx.
- Facilita testeo: se puede sustituir por un stub o un `httpx.MockTransport`.
"""

from __future__ import annotations

import logging

import httpx

from gocd_client.core.config import ClientSettings
from gocd_client.core.errors import TransportError
from gocd_client.core.interfaces.transport import RawResponse

logger = logging.getLogger(__name__)


def build_async_client(
    settings: ClientSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` apuntando a la API de GoCD.

    Por qué un builder:
    - Centraliza base_url/auth/timeouts para que todos los recursos se comporten igual.
    - `transport` permite inyectar `httpx.MockTransport` en tests.
    """

    settings = settings or ClientSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
    }
    if extra_headers:
        headers.update(extra_headers)

    auth = None
    if settings.has_credentials:
        auth = httpx.BasicAuth(settings.username or "", settings.password or "")

    return httpx.AsyncClient(
        base_url=settings.api_base_url,
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        auth=auth,
        verify=settings.verify_tls,
        transport=transport,
    )


class HttpxTransport:
    """`HTTPTransport` sobre un `httpx.AsyncClient` compartido."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    @classmethod
    def from_settings(
        cls,
        settings: ClientSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "HttpxTransport":
        return cls(build_async_client(settings, transport=transport))

    async def send(self, method: str, url: str, headers: dict[str, str]) -> RawResponse:
        try:
            response = await self._client.request(method, url, headers=headers)
        except httpx.TimeoutException as exc:
            raise TransportError(f"Timed out talking to GoCD: {exc}", {"url": url}) from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"Could not reach GoCD: {exc}", {"url": url}) from exc

        return RawResponse(
            status_code=response.status_code,
            body=response.content,
            headers=dict(response.headers),
            url=str(response.url),
        )

    async def aclose(self) -> None:
        await self._client.aclose()
