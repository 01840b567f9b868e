"""Resolución del input binario/URL.

Normaliza alias, aplica la exclusión mutua stream XOR url y valida la forma
del stream. Devuelve siempre un dict nuevo: el bag del caller no se toca.
"""

from __future__ import annotations

from typing import Any

from core.domain.errors import ErrorKind, ValidationError
from core.domain.models import InputMode, ParameterBag
from core.interfaces.byte_source import is_byte_source

IMAGES_FILE = "images_file"
IMAGE_FILE_ALIAS = "image_file"
URL = "url"


def _xor(a: Any, b: Any) -> bool:
    return bool(a) != bool(b)


def fold_aliases(params: ParameterBag | None) -> dict[str, Any]:
    """Copia `image_file` en `images_file` si este último está vacío.

    El alias no se elimina; la clave canónica pasa a ser la autoritativa.
    """

    out = dict(params or {})
    if out.get(IMAGE_FILE_ALIAS) and not out.get(IMAGES_FILE):
        out[IMAGES_FILE] = out[IMAGE_FILE_ALIAS]
    return out


def resolve_input(params: ParameterBag | None, input_mode: InputMode) -> dict[str, Any]:
    if input_mode is InputMode.NONE:
        return dict(params or {})

    out = fold_aliases(params)
    images_file = out.get(IMAGES_FILE)

    if input_mode is InputMode.FILE_OR_URL:
        if not _xor(images_file, out.get(URL)):
            raise ValidationError(
                ErrorKind.MISSING_OR_CONFLICTING_INPUT,
                f"Exactly one of {IMAGES_FILE} or {URL} is required",
            )
    elif not images_file:
        raise ValidationError(
            ErrorKind.MISSING_OR_CONFLICTING_INPUT,
            f"{IMAGES_FILE} is required",
            key=IMAGES_FILE,
        )

    if images_file and not is_byte_source(images_file):
        raise ValidationError(
            ErrorKind.INVALID_STREAM_TYPE,
            f"{IMAGES_FILE} must be a readable binary stream (got {type(images_file).__name__})",
            key=IMAGES_FILE,
        )
    return out
