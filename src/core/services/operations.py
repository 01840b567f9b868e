"""Registro de contratos por operación.

Un contrato por operación, resuelto por nombre en cada llamada y nunca
modificado.
"""

from __future__ import annotations

from core.domain.models import HttpMethod, InputMode, OperationContract

CLASSIFY = "classify"
DETECT_FACES = "detect_faces"
RECOGNIZE_TEXT = "recognize_text"
CREATE_CLASSIFIER = "create_classifier"
LIST_CLASSIFIERS = "list_classifiers"
GET_CLASSIFIER = "get_classifier"
DELETE_CLASSIFIER = "delete_classifier"

NEGATIVE_EXAMPLES = "negative_examples"
POSITIVE_EXAMPLES_SUFFIX = "_positive_examples"
MIN_TRAINING_EXAMPLE_SETS = 2

CLASSIFY_DEFAULTS = {
    "classifier_ids": ["default"],
    "owners": ["me", "IBM"],
}

_CONTRACTS: dict[str, OperationContract] = {
    c.name: c
    for c in (
        OperationContract(
            name=CLASSIFY,
            path="/v3/classify",
            input_mode=InputMode.FILE_OR_URL,
            optional_keys=("classifier_ids", "owners", "threshold"),
            query_keys=("url", "classifier_ids", "owners", "threshold"),
            json_keys=("classifier_ids", "owners", "threshold"),
            header_keys=("Accept-Language",),
            defaults=CLASSIFY_DEFAULTS,
        ),
        OperationContract(
            name=DETECT_FACES,
            path="/v3/detect_faces",
            input_mode=InputMode.FILE_OR_URL,
            query_keys=("url",),
        ),
        OperationContract(
            name=RECOGNIZE_TEXT,
            path="/v3/recognize_text",
            input_mode=InputMode.FILE_OR_URL,
            query_keys=("url",),
        ),
        OperationContract(
            name=CREATE_CLASSIFIER,
            path="/v3/classifiers",
            method=HttpMethod.POST,
            optional_keys=("name",),
            dynamic_key_suffix=POSITIVE_EXAMPLES_SUFFIX,
            fixed_dynamic_keys=(NEGATIVE_EXAMPLES,),
            min_dynamic_matches=MIN_TRAINING_EXAMPLE_SETS,
        ),
        OperationContract(
            name=LIST_CLASSIFIERS,
            path="/v3/classifiers",
            method=HttpMethod.GET,
            optional_keys=("verbose",),
            query_keys=("verbose",),
        ),
        OperationContract(
            name=GET_CLASSIFIER,
            path="/v3/classifiers/{classifier_id}",
            method=HttpMethod.GET,
            required_keys=("classifier_id",),
        ),
        OperationContract(
            name=DELETE_CLASSIFIER,
            path="/v3/classifiers/{classifier_id}",
            method=HttpMethod.DELETE,
            required_keys=("classifier_id",),
        ),
    )
}


def get_contract(operation: str) -> OperationContract:
    try:
        return _CONTRACTS[operation]
    except KeyError:
        raise KeyError(f"Unknown operation: {operation}") from None


def list_operations() -> list[str]:
    return list(_CONTRACTS)
