"""Contexto por petición: cancelación + deadline.

Por qué no basta con cancelar la task:
- Un mismo contexto se comparte entre la resolución de versión y el dispatch,
  y debe cortar ambos con el mismo deadline absoluto.
- La cancelación se reporta como `RequestCancelledError` (un `TransportError`),
  no como `CancelledError`, para que el llamador la trate como fallo de red.
"""

from __future__ import annotations

import asyncio
import time
from typing import Awaitable, TypeVar

from gocd_client.core.errors import RequestCancelledError

T = TypeVar("T")


class RequestContext:
    """Cancelable context with an optional absolute deadline (monotonic clock)."""

    def __init__(self, *, timeout: float | None = None) -> None:
        if timeout is not None and timeout < 0:
            raise ValueError("timeout must be >= 0")
        self._deadline = time.monotonic() + timeout if timeout is not None else None
        self._cancelled = asyncio.Event()

    @classmethod
    def background(cls) -> "RequestContext":
        """Contexto sin deadline (solo cancelable explícitamente)."""

        return cls()

    @property
    def deadline(self) -> float | None:
        return self._deadline

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self) -> None:
        self._cancelled.set()

    def remaining(self) -> float | None:
        """Segundos hasta el deadline (0 si ya venció, None si no hay)."""

        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def expired(self) -> bool:
        remaining = self.remaining()
        return remaining is not None and remaining <= 0

    def check(self, url: str | None = None) -> None:
        """Falla inmediatamente si el contexto ya no es válido."""

        if self.cancelled:
            raise RequestCancelledError("cancelled", url)
        if self.expired():
            raise RequestCancelledError("deadline", url)

    async def run(self, awaitable: Awaitable[T], *, url: str | None = None) -> T:
        """Espera `awaitable` compitiendo contra cancelación y deadline.

        El punto bloqueante (el intercambio de red) se ejecuta como task; si el
        contexto gana la carrera, la task se cancela y se espera su cierre.
        """

        try:
            self.check(url)
        except RequestCancelledError:
            if asyncio.iscoroutine(awaitable):
                awaitable.close()
            raise

        work = asyncio.ensure_future(awaitable)
        watcher = asyncio.ensure_future(self._cancelled.wait())
        try:
            done, _ = await asyncio.wait(
                {work, watcher},
                timeout=self.remaining(),
                return_when=asyncio.FIRST_COMPLETED,
            )
        except asyncio.CancelledError:
            work.cancel()
            raise
        finally:
            watcher.cancel()

        if work in done:
            return work.result()

        work.cancel()
        await asyncio.gather(work, return_exceptions=True)
        raise RequestCancelledError("cancelled" if self.cancelled else "deadline", url)
