"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Contratos y descriptores son configuración estática o valores inmutables:
  `frozen=True` evita que se modifiquen tras construirse.
- La igualdad campo a campo hace que el builder sea testeable de forma
  determinista.

Nota:
- Estos modelos describen *qué* se envía, no *cómo* se transporta.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.domain.errors import ValidationError

ParameterBag = Mapping[str, Any]

_PLACEHOLDER_RE = re.compile(r"\{(\w+)\}")


class InputMode(str, Enum):
    FILE_OR_URL = "file_or_url"
    FILE_ONLY = "file_only"
    NONE = "none"


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    DELETE = "DELETE"


class OperationContract(BaseModel):
    """Forma estática de los parámetros de una operación."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    path: str = Field(
        ...,
        min_length=1,
        description="Plantilla de URL con placeholders `{nombre}`.",
    )
    method: Optional[HttpMethod] = Field(
        default=None,
        description="Método fijo; None si lo decide el modo de entrada (GET/POST).",
    )
    input_mode: InputMode = InputMode.NONE
    required_keys: tuple[str, ...] = ()
    optional_keys: tuple[str, ...] = ()
    query_keys: tuple[str, ...] = Field(
        default=(),
        description="Allow-list de claves enviadas como query string en modo GET.",
    )
    json_keys: tuple[str, ...] = Field(
        default=(),
        description="Claves que viajan como un único campo JSON junto al binario (POST).",
    )
    header_keys: tuple[str, ...] = ()
    defaults: dict[str, Any] = Field(default_factory=dict)
    dynamic_key_suffix: Optional[str] = Field(
        default=None,
        description="Sufijo de claves dinámicas: `<clase><sufijo>`, p.ej. `_positive_examples`.",
    )
    fixed_dynamic_keys: tuple[str, ...] = Field(
        default=(),
        description="Claves fijas que cuentan como dinámicas (p.ej. `negative_examples`).",
    )
    min_dynamic_matches: int = Field(default=0, ge=0)

    @property
    def path_keys(self) -> tuple[str, ...]:
        return tuple(_PLACEHOLDER_RE.findall(self.path))

    @property
    def dynamic_key_pattern(self) -> Optional[str]:
        if self.dynamic_key_suffix is None:
            return None
        return rf"^.+{re.escape(self.dynamic_key_suffix)}$"

    @property
    def has_dynamic_keys(self) -> bool:
        return self.dynamic_key_suffix is not None


class MultipartField(BaseModel):
    """Campo multipart con metadatos explícitos (p.ej. el JSON de parámetros)."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    value: Any
    content_type: Optional[str] = None
    filename: Optional[str] = None


class RequestDescriptor(BaseModel):
    """Request resuelta y agnóstica del transporte, lista para el dispatcher."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    operation: str
    method: HttpMethod
    path: str
    path_params: dict[str, Any] = Field(default_factory=dict)
    query_params: dict[str, Any] = Field(default_factory=dict)
    multipart_fields: dict[str, Any] = Field(default_factory=dict)
    headers: dict[str, str] = Field(default_factory=dict)

    @property
    def has_body(self) -> bool:
        return bool(self.multipart_fields)


class TrainingExamples(BaseModel):
    """Resultado cerrado del escaneo de claves de entrenamiento.

    `positive_examples` conserva el orden del bag: nombre de clase -> stream.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    positive_suffix: str
    negative_key: Optional[str] = None
    positive_examples: dict[str, Any] = Field(default_factory=dict)
    negative_examples: Any = None

    @property
    def count(self) -> int:
        return len(self.positive_examples) + (1 if self.negative_examples is not None else 0)

    def fields(self) -> dict[str, Any]:
        """Claves de wire -> stream, una por conjunto de ejemplos."""

        out = {f"{name}{self.positive_suffix}": value for name, value in self.positive_examples.items()}
        if self.negative_key is not None and self.negative_examples is not None:
            out[self.negative_key] = self.negative_examples
        return out


@dataclass
class PipelineResult:
    """Salida de una invocación del pipeline: descriptor o error, nunca ambos."""

    operation: str
    descriptor: RequestDescriptor | None = None
    error: ValidationError | None = None

    def __post_init__(self) -> None:
        if (self.descriptor is None) == (self.error is None):
            raise ValueError("PipelineResult requires exactly one of descriptor or error")

    @property
    def ok(self) -> bool:
        return self.error is None
