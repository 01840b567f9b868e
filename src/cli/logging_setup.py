"""Configuración de logging para la CLI.

El Core solo usa `logging.getLogger(__name__)`; aquí se decide cómo se ve.
Se llama una única vez al arrancar la CLI.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

NOISY_LOGGERS = ("httpx", "httpcore")

_VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def configure_logging(level: str = "WARNING", *, console: Console | None = None) -> None:
    level = (level or "WARNING").upper()
    if level not in _VALID_LEVELS:
        level = "WARNING"

    handler = RichHandler(
        console=console or Console(stderr=True),
        rich_tracebacks=False,
        show_path=False,
        show_time=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s | %(message)s"))

    logging.basicConfig(level=getattr(logging, level), handlers=[handler], force=True)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
