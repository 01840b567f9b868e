"""Capacidad "stream de bytes legible".

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida: sirve un
  `open(path, "rb")`, un `io.BytesIO` o cualquier objeto propio con `read`.
- `is_byte_source` es el fallback en runtime para bags heterogéneos; solo
  valida la forma, nunca lee el contenido.
"""

from __future__ import annotations

import io
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ByteSource(Protocol):
    """Objeto del que se pueden leer bytes."""

    def read(self, size: int = -1) -> bytes:
        ...


def is_byte_source(value: Any) -> bool:
    """True si `value` expone una interfaz de lectura de bytes.

    Los streams de texto (`io.TextIOBase`) también tienen `read`, pero
    devuelven `str`, así que se rechazan.
    """

    if isinstance(value, (str, bytes, bytearray)):
        return False
    if isinstance(value, io.TextIOBase):
        return False
    return isinstance(value, ByteSource)
