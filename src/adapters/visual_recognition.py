"""Servicio Visual Recognition v3.

Fachada pública: cada operación recibe un ParameterBag y un callback
`(error, result)`. Los errores de validación vuelven por el mismo callback y
en ese caso el dispatcher no se invoca; si el bag es válido se hace
exactamente un dispatch y su resultado se reenvía sin tocar.
"""

from __future__ import annotations

import logging
from typing import Any

from adapters.http_client import HttpxDispatcher
from core.config import RECOMMENDED_VERSION_DATE, AppSettings
from core.domain.errors import ConfigurationError
from core.domain.models import ParameterBag, PipelineResult
from core.interfaces.dispatcher import Callback, Dispatcher
from core.services import operations
from core.services.pipeline import prepare_request

logger = logging.getLogger(__name__)


class VisualRecognitionV3:
    def __init__(self, settings: AppSettings | None = None, *, dispatcher: Dispatcher | None = None) -> None:
        self._settings = settings or AppSettings()
        if not self._settings.version_date:
            raise ConfigurationError(
                f"Argument error: version_date was not specified, use {RECOMMENDED_VERSION_DATE}"
            )
        self._owns_dispatcher = dispatcher is None
        self._dispatcher = dispatcher or HttpxDispatcher(self._settings)

    def close(self) -> None:
        """Cierra el cliente HTTP propio; un dispatcher inyectado no se toca."""

        if self._owns_dispatcher:
            self._dispatcher.close()

    def __enter__(self) -> VisualRecognitionV3:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @property
    def settings(self) -> AppSettings:
        return self._settings

    def prepare(self, operation: str, params: ParameterBag | None = None) -> PipelineResult:
        """Valida y construye el descriptor sin enviar nada."""

        return prepare_request(operation, params)

    def _run(self, operation: str, params: ParameterBag | None, callback: Callback) -> Any:
        result = prepare_request(operation, params)
        if result.error is not None:
            callback(result.error, None)
            return None
        return self._dispatcher.dispatch(result.descriptor, callback)

    def classify(self, params: ParameterBag | None, callback: Callback) -> Any:
        """Clasifica una imagen (stream `images_file` o `url`).

        Opcionales: `classifier_ids` (default `["default"]`), `owners`
        (default `["me", "IBM"]`), `threshold`, cabecera `Accept-Language`.
        """

        return self._run(operations.CLASSIFY, params, callback)

    def detect_faces(self, params: ParameterBag | None, callback: Callback) -> Any:
        return self._run(operations.DETECT_FACES, params, callback)

    def recognize_text(self, params: ParameterBag | None, callback: Callback) -> Any:
        return self._run(operations.RECOGNIZE_TEXT, params, callback)

    def create_classifier(self, params: ParameterBag | None, callback: Callback) -> Any:
        """Entrena un clasificador nuevo.

        El bag necesita al menos dos conjuntos de ejemplos: dos
        `<clase>_positive_examples`, o uno más `negative_examples`. La
        llamada vuelve antes de que termine el entrenamiento; usar
        `get_classifier` para consultar el estado.
        """

        return self._run(operations.CREATE_CLASSIFIER, params, callback)

    def list_classifiers(self, params: ParameterBag | None, callback: Callback) -> Any:
        return self._run(operations.LIST_CLASSIFIERS, params, callback)

    def get_classifier(self, params: ParameterBag | None, callback: Callback) -> Any:
        return self._run(operations.GET_CLASSIFIER, params, callback)

    def delete_classifier(self, params: ParameterBag | None, callback: Callback) -> Any:
        return self._run(operations.DELETE_CLASSIFIER, params, callback)
