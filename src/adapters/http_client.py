"""Wrapper de httpx y dispatcher por defecto.

Por qué un wrapper:
- Estandariza timeouts, headers y la inyección de credenciales (`api_key`,
  `version`) en un único sitio.
- Facilita testeo: se puede sustituir el cliente por uno con `MockTransport`.

Sin reintentos: la política de retry es responsabilidad de quien llama.
"""

from __future__ import annotations

import logging
from pathlib import PurePath
from typing import Any
from urllib.parse import quote

import httpx

from core.config import AppSettings
from core.domain.models import MultipartField, RequestDescriptor
from core.interfaces.dispatcher import Callback, Dispatcher

logger = logging.getLogger(__name__)


def build_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` con defaults del servicio."""

    settings = settings or AppSettings()
    return httpx.Client(
        base_url=settings.url.rstrip("/"),
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers={"User-Agent": settings.user_agent, "Accept": "application/json"},
        transport=transport,
    )


def expand_path(template: str, path_params: dict[str, Any]) -> str:
    return template.format(**{k: quote(str(v), safe="") for k, v in path_params.items()})


def encode_query(settings: AppSettings, query_params: dict[str, Any]) -> dict[str, Any]:
    """Query final: credenciales del servicio + params de la operación.

    Las listas viajan separadas por comas (`classifier_ids=a,b`).
    """

    out: dict[str, Any] = {}
    if settings.api_key:
        out["api_key"] = settings.api_key
    if settings.version_date:
        out["version"] = settings.version_date
    for key, value in query_params.items():
        if isinstance(value, (list, tuple)):
            out[key] = ",".join(str(v) for v in value)
        elif isinstance(value, bool):
            out[key] = "true" if value else "false"
        else:
            out[key] = value
    return out


def _filename(value: Any, fallback: str) -> str:
    name = getattr(value, "name", None)
    if isinstance(name, str) and name:
        return PurePath(name).name
    return fallback


def encode_multipart(fields: dict[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
    """Separa campos multipart en (`data`, `files`) para httpx."""

    data: dict[str, Any] = {}
    files: dict[str, Any] = {}
    for key, value in fields.items():
        if isinstance(value, MultipartField):
            files[key] = (value.filename, value.value, value.content_type)
        elif isinstance(value, (str, int, float)):
            data[key] = str(value)
        else:
            files[key] = (_filename(value, key), value)
    return data, files


class HttpxDispatcher(Dispatcher):
    """Ejecuta `RequestDescriptor` con httpx y reporta por callback."""

    def __init__(self, settings: AppSettings | None = None, *, client: httpx.Client | None = None) -> None:
        self._settings = settings or AppSettings()
        self._client = client or build_client(self._settings)

    def close(self) -> None:
        self._client.close()

    def build_httpx_request(self, descriptor: RequestDescriptor) -> httpx.Request:
        kwargs: dict[str, Any] = {
            "params": encode_query(self._settings, descriptor.query_params),
            "headers": descriptor.headers,
        }
        if descriptor.has_body:
            data, files = encode_multipart(descriptor.multipart_fields)
            kwargs["data"] = data or None
            kwargs["files"] = files or None
        return self._client.build_request(
            descriptor.method.value,
            expand_path(descriptor.path, descriptor.path_params),
            **kwargs,
        )

    def dispatch(self, descriptor: RequestDescriptor, callback: Callback) -> Any:
        request = self.build_httpx_request(descriptor)
        logger.debug("Dispatching %s %s", request.method, request.url.copy_remove_param("api_key"))

        error: BaseException | None = None
        result: Any = None
        try:
            response = self._client.send(request)
            response.raise_for_status()
            if not response.content:
                result = {}
            elif "json" in response.headers.get("content-type", ""):
                result = response.json()
            else:
                result = response.text
        except (httpx.HTTPError, ValueError) as exc:
            # ValueError: cuerpo marcado como JSON que no decodifica.
            logger.warning("%s %s failed: %s", descriptor.method.value, descriptor.path, exc)
            error = exc
            result = None

        callback(error, result)
        return result
