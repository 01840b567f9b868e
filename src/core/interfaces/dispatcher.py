"""Contrato del dispatcher HTTP.

Por qué Protocol:
- El Core solo produce `RequestDescriptor`; el transporte real (httpx, un
  stub en tests, otro cliente) vive fuera y es intercambiable.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Protocol, runtime_checkable

from core.domain.models import RequestDescriptor

Callback = Callable[[Optional[BaseException], Any], None]


@runtime_checkable
class Dispatcher(Protocol):
    """Ejecuta una request descrita y entrega `(error, result)` al callback.

    Reglas de diseño:
    - Se invoca exactamente una vez por llamada válida.
    - El descriptor no se modifica; su ciclo de vida pasa al dispatcher.
    """

    def dispatch(self, descriptor: RequestDescriptor, callback: Callback) -> Any:
        ...
