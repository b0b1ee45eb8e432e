"""Diff commands -- compare swagger documents.

* ``actiondoc diff LEFT RIGHT`` prints the Markdown difference of two
  documents (file paths or URLs).
* ``actiondoc sync YOURS`` verifies that your hand-maintained swagger matches
  the generated one and fails with exit code 9 when it does not.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from actiondoc.commands._common import fail
from actiondoc.config import SWAGGER_FILENAME, get_output_dir
from actiondoc.exceptions import ActionDocError, SwaggerDiffError
from actiondoc.output import get_output, info, success
from actiondoc.swagger.diff import SwaggerDiffer, SwaggerDiffOption, render_markdown


def diff_command(
    left: str = typer.Argument(..., help="Base swagger document (path or URL)."),
    right: str = typer.Argument(..., help="Compared swagger document (path or URL)."),
    keep_trailing_slash: bool = typer.Option(
        False, "--keep-trailing-slash", help="Treat '/a/' and '/a' as different paths."
    ),
) -> None:
    """Show the differences between two swagger documents as Markdown.

    Example::

        actiondoc diff old/swagger.json build/actiondoc/swagger.json
    """
    differ = SwaggerDiffer(SwaggerDiffOption(delete_path_trailing_slash=not keep_trailing_slash))
    try:
        result = differ.diff_from_locations(left, right)
    except ActionDocError as exc:
        fail(exc)

    if not result.has_differences:
        info("No differences.")
        return
    get_output().print_markdown(render_markdown(result))


def sync_command(
    yours: Path = typer.Argument(..., help="Your swagger document."),
    generated: Optional[Path] = typer.Option(
        None, "--generated", "-g", help="Generated swagger (default: output directory)."
    ),
) -> None:
    """Verify that your swagger document is in sync with the generated one.

    Example::

        actiondoc sync docs/swagger.json
    """
    generated_path = generated or get_output_dir() / SWAGGER_FILENAME
    differ = SwaggerDiffer()
    try:
        result = differ.diff_from_locations(str(generated_path), str(yours))
    except ActionDocError as exc:
        fail(exc)

    if result.has_differences:
        get_output().print_markdown(render_markdown(result))
        fail(SwaggerDiffError(f"Your swagger differs from the generated one: {yours}"))
    success(f"{yours} is in sync with {generated_path}")
