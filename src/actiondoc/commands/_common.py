"""Loading helpers shared by the commands."""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn, Optional

import typer

from actiondoc.config import load_project_config
from actiondoc.exceptions import ActionDocError
from actiondoc.meta.loader import load_document_meta
from actiondoc.models import DocumentMeta, ProjectConfig
from actiondoc.output import error


def load_inputs(
    meta: str, config_path: Optional[Path] = None
) -> tuple[DocumentMeta, ProjectConfig]:
    """Load the metadata document and the project config.

    Raises:
        typer.Exit: With the error's exit code when either cannot be loaded.
    """
    try:
        config = load_project_config(config_path)
        document = load_document_meta(meta)
    except ActionDocError as exc:
        fail(exc)
    return document, config


def fail(exc: ActionDocError) -> NoReturn:
    """Report *exc* on stderr and exit with its code."""
    error(str(exc))
    raise typer.Exit(code=exc.exit_code)
