"""Codec JSON basado en `pydantic.TypeAdapter`.

Acepta cualquier forma que pydantic sepa validar: modelos, `RootModel`,
`list[Model]`, `dict[str, Any]`...
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

T = TypeVar("T")


@lru_cache(maxsize=64)
def _adapter(shape: Any) -> TypeAdapter[Any]:
    return TypeAdapter(shape)


class PydanticCodec:
    def decode(self, raw: bytes, shape: type[T] | Any) -> T:
        if not raw.strip():
            raise ValueError("empty response body")
        try:
            return _adapter(shape).validate_json(raw)
        except ValidationError as exc:
            raise ValueError(_summarize(exc)) from exc


def _summarize(exc: ValidationError) -> str:
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = ".".join(str(p) for p in first.get("loc", ())) or "<root>"
    return f"{exc.error_count()} validation error(s); first at {loc}: {first.get('msg', 'invalid')}"
