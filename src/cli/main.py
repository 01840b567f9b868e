"""CLI `vr` (Typer).

Cada comando arma un ParameterBag a partir de flags y delega en el servicio.
Con `--dry-run` solo se ejecuta el pipeline local y se muestra el
`RequestDescriptor` resultante, sin red ni credenciales.
"""

from __future__ import annotations

from contextlib import ExitStack
from pathlib import Path
from typing import Any, List, Optional

import typer
from rich.console import Console

from adapters.visual_recognition import VisualRecognitionV3
from cli import doctor
from cli.logging_setup import configure_logging
from cli.ui_components import build_descriptor_table, build_error_panel
from core.config import AppSettings
from core.domain.errors import ConfigurationError, ValidationError
from core.services import operations
from core.services.pipeline import prepare_request

app = typer.Typer(no_args_is_help=True, help="Visual Recognition v3 client.")
app.add_typer(doctor.app, name="doctor")

_console = Console()

EXIT_VALIDATION = 2
EXIT_FAILURE = 1


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING, ERROR."),
) -> None:
    configure_logging(log_level or AppSettings().log_level)


def _fail(error: BaseException) -> None:
    _console.print(build_error_panel(error))
    code = EXIT_VALIDATION if isinstance(error, ValidationError) else EXIT_FAILURE
    raise typer.Exit(code=code)


def _execute(operation: str, params: dict[str, Any], dry_run: bool) -> None:
    if dry_run:
        prepared = prepare_request(operation, params)
        if prepared.error is not None:
            _fail(prepared.error)
        _console.print(build_descriptor_table(prepared.descriptor))
        return

    try:
        service = VisualRecognitionV3(AppSettings())
    except ConfigurationError as exc:
        _fail(exc)

    outcome: dict[str, Any] = {}

    def callback(error: BaseException | None, result: Any) -> None:
        outcome["error"] = error
        outcome["result"] = result

    with service:
        getattr(service, operation)(params, callback)
    if outcome.get("error") is not None:
        _fail(outcome["error"])
    result = outcome.get("result")
    if isinstance(result, (dict, list)):
        _console.print_json(data=result)
    else:
        _console.print(result)


def _image_command(operation: str, url: Optional[str], images_file: Optional[Path], dry_run: bool, **extra: Any) -> None:
    with ExitStack() as stack:
        params: dict[str, Any] = {k: v for k, v in extra.items() if v is not None}
        if url:
            params["url"] = url
        if images_file is not None:
            params["images_file"] = stack.enter_context(images_file.open("rb"))
        _execute(operation, params, dry_run)


_URL_OPTION = typer.Option(None, "--url", help="URL of an image (.jpg, .png, .gif).")
_FILE_OPTION = typer.Option(
    None,
    "--images-file",
    exists=True,
    dir_okay=False,
    help="Image file or .zip of images.",
)
_DRY_RUN_OPTION = typer.Option(False, "--dry-run", help="Show the request instead of sending it.")


@app.command()
def classify(
    url: Optional[str] = _URL_OPTION,
    images_file: Optional[Path] = _FILE_OPTION,
    classifier_id: Optional[List[str]] = typer.Option(None, "--classifier-id", help="Repeatable."),
    owner: Optional[List[str]] = typer.Option(None, "--owner", help="Repeatable: me, IBM."),
    threshold: Optional[float] = typer.Option(None, "--threshold", min=0.0, max=1.0),
    accept_language: Optional[str] = typer.Option(None, "--accept-language"),
    dry_run: bool = _DRY_RUN_OPTION,
) -> None:
    """Score every available classifier against an image."""

    _image_command(
        operations.CLASSIFY,
        url,
        images_file,
        dry_run,
        classifier_ids=classifier_id or None,
        owners=owner or None,
        threshold=threshold,
        **{"Accept-Language": accept_language},
    )


@app.command(name="detect-faces")
def detect_faces(
    url: Optional[str] = _URL_OPTION,
    images_file: Optional[Path] = _FILE_OPTION,
    dry_run: bool = _DRY_RUN_OPTION,
) -> None:
    """Detect faces (location, age, gender, identity)."""

    _image_command(operations.DETECT_FACES, url, images_file, dry_run)


@app.command(name="recognize-text")
def recognize_text(
    url: Optional[str] = _URL_OPTION,
    images_file: Optional[Path] = _FILE_OPTION,
    dry_run: bool = _DRY_RUN_OPTION,
) -> None:
    """Recognize text found in an image."""

    _image_command(operations.RECOGNIZE_TEXT, url, images_file, dry_run)


def parse_positive_option(value: str) -> tuple[str, Path]:
    """`clase=ruta.zip` -> (`clase`, Path)."""

    class_name, sep, raw_path = value.partition("=")
    if not sep or not class_name.strip() or not raw_path.strip():
        raise typer.BadParameter(f"expected CLASS=PATH, got {value!r}")
    path = Path(raw_path.strip())
    if not path.is_file():
        raise typer.BadParameter(f"file not found: {path}")
    return class_name.strip(), path


@app.command(name="create-classifier")
def create_classifier(
    name: str = typer.Argument(..., help="Short name of the new classifier."),
    positive: Optional[List[str]] = typer.Option(None, "--positive", "-p", help="CLASS=PATH.zip (repeatable)."),
    negative: Optional[Path] = typer.Option(None, "--negative", "-n", exists=True, dir_okay=False),
    dry_run: bool = _DRY_RUN_OPTION,
) -> None:
    """Train a new classifier from zipped example images."""

    pairs = [parse_positive_option(v) for v in positive or []]
    with ExitStack() as stack:
        params: dict[str, Any] = {"name": name}
        for class_name, path in pairs:
            params[f"{class_name}_positive_examples"] = stack.enter_context(path.open("rb"))
        if negative is not None:
            params[operations.NEGATIVE_EXAMPLES] = stack.enter_context(negative.open("rb"))
        _execute(operations.CREATE_CLASSIFIER, params, dry_run)


@app.command(name="list-classifiers")
def list_classifiers(
    verbose: bool = typer.Option(False, "--verbose"),
    dry_run: bool = _DRY_RUN_OPTION,
) -> None:
    """List built-in and custom classifiers."""

    _execute(operations.LIST_CLASSIFIERS, {"verbose": True} if verbose else {}, dry_run)


@app.command(name="get-classifier")
def get_classifier(
    classifier_id: str = typer.Argument(...),
    dry_run: bool = _DRY_RUN_OPTION,
) -> None:
    """Show details of one classifier."""

    _execute(operations.GET_CLASSIFIER, {"classifier_id": classifier_id}, dry_run)


@app.command(name="delete-classifier")
def delete_classifier(
    classifier_id: str = typer.Argument(...),
    dry_run: bool = _DRY_RUN_OPTION,
) -> None:
    """Delete a custom classifier."""

    _execute(operations.DELETE_CLASSIFIER, {"classifier_id": classifier_id}, dry_run)


def run() -> None:
    app()
