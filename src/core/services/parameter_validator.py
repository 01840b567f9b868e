"""Validación del conjunto de claves de un ParameterBag.

Dos casos:
- Operaciones con claves fijas: cada clave requerida presente y no vacía.
- Entrenamiento: las claves son dinámicas (`<clase>_positive_examples`) y el
  nombre de la clave lleva el significado. Se escanean y se convierten en un
  `TrainingExamples` cerrado.

Las claves extra nunca se rechazan; el builder las descarta.
"""

from __future__ import annotations

import re
from typing import Any

from core.domain.errors import ErrorKind, ValidationError
from core.domain.models import OperationContract, ParameterBag, TrainingExamples
from core.interfaces.byte_source import is_byte_source


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or value == [] or value == {}


def validate_required(params: ParameterBag, contract: OperationContract) -> None:
    for key in contract.required_keys:
        if _is_empty(params.get(key)):
            raise ValidationError(
                ErrorKind.MISSING_REQUIRED_PARAMETER,
                f"Missing required parameter: {key}",
                key=key,
            )


def match_example_keys(params: ParameterBag, contract: OperationContract) -> list[str]:
    """Claves del bag que son conjuntos de ejemplos, en orden del bag.

    Una clave con valor vacío (`None`, "") no cuenta para el mínimo.
    """

    if contract.dynamic_key_pattern is None:
        return []
    pattern = re.compile(contract.dynamic_key_pattern)
    return [
        key
        for key, value in params.items()
        if not _is_empty(value) and (key in contract.fixed_dynamic_keys or pattern.match(key))
    ]


def collect_training_examples(params: ParameterBag, contract: OperationContract) -> TrainingExamples:
    keys = match_example_keys(params, contract)
    if len(keys) < contract.min_dynamic_matches:
        raise ValidationError(
            ErrorKind.INSUFFICIENT_TRAINING_EXAMPLES,
            (
                "Missing required parameters: either two *_positive_examples or one "
                "*_positive_examples and one negative_examples must be provided "
                f"(found {len(keys)}, need {contract.min_dynamic_matches})"
            ),
            found=len(keys),
            required=contract.min_dynamic_matches,
        )

    suffix = contract.dynamic_key_suffix or ""
    positive: dict[str, Any] = {}
    negative: Any = None
    negative_key: str | None = None
    for key in keys:
        value = params[key]
        if not is_byte_source(value):
            raise ValidationError(
                ErrorKind.INVALID_STREAM_TYPE,
                f"{key} must be a readable binary stream (got {type(value).__name__})",
                key=key,
            )
        if key in contract.fixed_dynamic_keys:
            negative_key, negative = key, value
        else:
            positive[key[: -len(suffix)]] = value

    return TrainingExamples(
        positive_suffix=suffix,
        negative_key=negative_key,
        positive_examples=positive,
        negative_examples=negative,
    )


def validate_parameters(params: ParameterBag, contract: OperationContract) -> TrainingExamples | None:
    """Valida el bag; devuelve los ejemplos si la operación es de entrenamiento."""

    validate_required(params, contract)
    if contract.has_dynamic_keys:
        return collect_training_examples(params, contract)
    return None
