"""Generate command -- build the Swagger document of a metadata file.

``actiondoc generate META`` loads the reflector's metadata, applies the
project config (``./actiondoc.json`` or ``./actiondoc.yaml``), and writes
two files into the output directory:

* ``swagger.json`` -- the Swagger 2.0 document.
* ``analyzed-actiondoc.json`` -- the metadata with derived names and
  annotation descriptors filled in.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from actiondoc.commands._common import fail, load_inputs
from actiondoc.config import get_output_dir, save_analyzed_meta, save_swagger_json
from actiondoc.exceptions import ActionDocError, InvalidUsageError, IOError_
from actiondoc.meta.analyzer import analyze_document, serialize_document_meta
from actiondoc.output import debug, get_output, success
from actiondoc.swagger.creator import SwaggerSpecCreator, serialize_swagger


def generate_command(
    meta: str = typer.Argument(
        ..., help="Metadata file (JSON/YAML), URL, or '-' for stdin."
    ),
    out: Optional[Path] = typer.Option(
        None, "--out", "-d", help="Output directory (default: target/ or build/)."
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Project config file."
    ),
    print_only: bool = typer.Option(
        False, "--print", help="Print the swagger document instead of writing files."
    ),
) -> None:
    """Generate swagger.json from action metadata.

    Example::

        actiondoc generate build/actiondoc-meta.json
        actiondoc generate meta.yaml --out docs/api
        actiondoc --json generate meta.json --print
    """
    if print_only and out is not None:
        fail(InvalidUsageError("--print writes nothing, so it cannot be combined with --out"))
    document, config = load_inputs(meta, config_path)

    creator = SwaggerSpecCreator(options=config.swagger, registry=config.registry)
    try:
        swagger = creator.create(document)
    except ActionDocError as exc:
        fail(exc)

    if print_only:
        get_output().print_json(swagger)
        return

    output_dir = out or get_output_dir(config)
    debug(f"Writing documents to {output_dir}")
    try:
        swagger_path = save_swagger_json(serialize_swagger(swagger), output_dir)
        analyzed = analyze_document(document, creator.adjuster)
        meta_path = save_analyzed_meta(serialize_document_meta(analyzed), output_dir)
    except OSError as exc:
        fail(IOError_(f"Failed to write documents to {output_dir}: {exc}"))

    success(
        f"Generated {swagger_path} ({len(swagger['paths'])} paths, "
        f"{len(swagger['definitions'])} definitions)"
    )
    debug(f"Analyzed metadata: {meta_path}")
