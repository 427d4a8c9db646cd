"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan adaptadores concretos.
- Permite invertir dependencias: el Core depende de abstracciones.
"""

from gocd_client.core.interfaces.codec import Codec
from gocd_client.core.interfaces.resolver import VersionResolver
from gocd_client.core.interfaces.transport import HTTPTransport, RawResponse

__all__ = [
    "Codec",
    "HTTPTransport",
    "RawResponse",
    "VersionResolver",
]
