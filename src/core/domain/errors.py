"""Errores del dominio.

Por qué una jerarquía propia:
- Separa los fallos por llamada (recuperables: el caller corrige el bag y
  reintenta) del fallo fatal de configuración al construir el servicio.
- Cada error lleva un `kind` estable para que CLI/tests no dependan del texto.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    MISSING_OR_CONFLICTING_INPUT = "missing_or_conflicting_input"
    INVALID_STREAM_TYPE = "invalid_stream_type"
    MISSING_REQUIRED_PARAMETER = "missing_required_parameter"
    INSUFFICIENT_TRAINING_EXAMPLES = "insufficient_training_examples"
    CONFIGURATION_ERROR = "configuration_error"


class VisualRecognitionError(Exception):
    """Base de todos los errores del cliente."""

    kind: ErrorKind

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message


class ValidationError(VisualRecognitionError):
    """Un ParameterBag no cumple el contrato de la operación.

    `key` nombra el parámetro culpable cuando aplica; `found`/`required`
    solo se rellenan para el conteo de ejemplos de entrenamiento.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        key: str | None = None,
        found: int | None = None,
        required: int | None = None,
    ) -> None:
        super().__init__(kind, message)
        self.key = key
        self.found = found
        self.required = required


class ConfigurationError(VisualRecognitionError):
    def __init__(self, message: str) -> None:
        super().__init__(ErrorKind.CONFIGURATION_ERROR, message)
