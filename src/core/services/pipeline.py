"""Pipeline de preparación de requests.

Encadena resolver -> validador -> builder de forma síncrona. Un
`ValidationError` corta el pipeline y se devuelve dentro del mismo
`PipelineResult` que un éxito, así el caller tiene un único canal.
"""

from __future__ import annotations

import logging

from core.domain.errors import ValidationError
from core.domain.models import ParameterBag, PipelineResult
from core.services.input_resolver import resolve_input
from core.services.operations import get_contract
from core.services.parameter_validator import validate_parameters
from core.services.request_builder import build_request

logger = logging.getLogger(__name__)


def prepare_request(operation: str, params: ParameterBag | None) -> PipelineResult:
    contract = get_contract(operation)
    try:
        resolved = resolve_input(params, contract.input_mode)
        examples = validate_parameters(resolved, contract)
        descriptor = build_request(resolved, contract, examples=examples)
    except ValidationError as exc:
        logger.info("%s rejected (%s): %s", operation, exc.kind.value, exc.message)
        return PipelineResult(operation=operation, error=exc)

    logger.debug("%s -> %s %s", operation, descriptor.method.value, descriptor.path)
    return PipelineResult(operation=operation, descriptor=descriptor)
