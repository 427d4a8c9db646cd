"""Contrato del codec (bytes JSON -> forma tipada)."""

from __future__ import annotations

from typing import Any, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class Codec(Protocol):
    def decode(self, raw: bytes, shape: type[T] | Any) -> T:
        """Decodifica `raw` en `shape`; lanza `ValueError` si no encaja."""

        ...
