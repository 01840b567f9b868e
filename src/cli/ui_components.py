"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

import json
from pathlib import PurePath
from typing import Any

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.errors import VisualRecognitionError
from core.domain.models import MultipartField, RequestDescriptor


def _describe_value(value: Any) -> str:
    if isinstance(value, MultipartField):
        return f"{value.value} ({value.content_type})"
    if isinstance(value, (str, int, float, bool, list, dict)) or value is None:
        return json.dumps(value, ensure_ascii=False)
    name = getattr(value, "name", None)
    if isinstance(name, str):
        return f"<stream {PurePath(name).name}>"
    return f"<{type(value).__name__}>"


def build_descriptor_table(descriptor: RequestDescriptor) -> Table:
    """Tabla con cada slot del descriptor (path, query, multipart, headers)."""

    table = Table(title=Text(f"{descriptor.method.value} {descriptor.path}"))
    table.add_column("Slot", style="cyan", no_wrap=True)
    table.add_column("Key", style="white", no_wrap=True)
    table.add_column("Value", style="magenta", overflow="fold")

    slots = (
        ("path", descriptor.path_params),
        ("query", descriptor.query_params),
        ("multipart", descriptor.multipart_fields),
        ("header", descriptor.headers),
    )
    for slot, values in slots:
        for key, value in values.items():
            table.add_row(slot, Text(key), Text(_describe_value(value)))
    return table


def build_error_panel(error: BaseException) -> Panel:
    title = Text("Error", style="bold red")
    body = Text()
    if isinstance(error, VisualRecognitionError):
        body.append(f"[{error.kind.value}] ", style="bold")
        body.append(error.message)
    else:
        body.append(f"{type(error).__name__}: {error}")
    return Panel(body, title=title, border_style="red")
