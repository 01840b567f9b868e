"""Construcción del `RequestDescriptor`.

Función pura de (bag validado, contrato) -> descriptor: no hace I/O, no lee
streams y no modifica el bag. Reglas de modo:
- DELETE: solo path params.
- Entrenamiento: POST multipart, un campo por conjunto de ejemplos.
- Con stream: POST multipart con el stream tal cual y el resto de parámetros
  (listas, umbral) en un único campo JSON, porque no caben como campos planos.
- Sin stream: GET con query string.
"""

from __future__ import annotations

import copy
import json
from typing import Any, Iterable

from core.domain.models import (
    HttpMethod,
    MultipartField,
    OperationContract,
    ParameterBag,
    RequestDescriptor,
    TrainingExamples,
)
from core.services.input_resolver import IMAGES_FILE
from core.services.parameter_validator import collect_training_examples

JSON_PARAMETERS_FIELD = "parameters"
JSON_CONTENT_TYPE = "application/json"


def pick(params: ParameterBag, keys: Iterable[str]) -> dict[str, Any]:
    return {key: params[key] for key in keys if key in params}


def merge_defaults(params: ParameterBag, defaults: ParameterBag) -> dict[str, Any]:
    """Merge superficial: gana el caller, salvo valores `None`."""

    merged = copy.deepcopy(dict(defaults))
    merged.update({key: value for key, value in params.items() if value is not None})
    return merged


def build_request(
    params: ParameterBag,
    contract: OperationContract,
    *,
    examples: TrainingExamples | None = None,
) -> RequestDescriptor:
    merged = merge_defaults(params, contract.defaults)
    common: dict[str, Any] = {
        "operation": contract.name,
        "path": contract.path,
        "path_params": pick(merged, contract.path_keys),
        "headers": {key: str(value) for key, value in pick(merged, contract.header_keys).items()},
    }

    if contract.method is HttpMethod.DELETE:
        return RequestDescriptor(method=HttpMethod.DELETE, **common)

    if contract.has_dynamic_keys:
        if examples is None:
            examples = collect_training_examples(merged, contract)
        fields: dict[str, Any] = examples.fields()
        fields.update(pick(merged, contract.optional_keys))
        return RequestDescriptor(method=HttpMethod.POST, multipart_fields=fields, **common)

    if merged.get(IMAGES_FILE):
        fields = {IMAGES_FILE: merged[IMAGES_FILE]}
        side_channel = pick(merged, contract.json_keys)
        if contract.json_keys:
            fields[JSON_PARAMETERS_FIELD] = MultipartField(
                value=json.dumps(side_channel),
                content_type=JSON_CONTENT_TYPE,
            )
        return RequestDescriptor(method=HttpMethod.POST, multipart_fields=fields, **common)

    return RequestDescriptor(
        method=contract.method or HttpMethod.GET,
        query_params=pick(merged, contract.query_keys),
        **common,
    )
