"""Inspect commands -- examine action metadata.

Provides the ``actiondoc inspect`` sub-command group with read-only
commands for viewing a metadata file: the actions with their HTTP verbs,
the jobs, and the definitions the generated swagger would contain.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from actiondoc.commands._common import fail, load_inputs
from actiondoc.exceptions import ActionDocError
from actiondoc.meta.analyzer import analyze_document
from actiondoc.output import get_output, info
from actiondoc.swagger.creator import SwaggerSpecCreator
from actiondoc.swagger.paths import PathsBuilder


inspect_app = typer.Typer(no_args_is_help=True)

_META_ARGUMENT = typer.Argument(..., help="Metadata file (JSON/YAML), URL, or '-'.")
_CONFIG_OPTION = typer.Option(None, "--config", "-c", help="Project config file.")


def _first_line(text: Optional[str]) -> str:
    if not text or not text.strip():
        return "-"
    return text.strip().splitlines()[0][:60]


@inspect_app.command("actions")
def inspect_actions(
    meta: str = _META_ARGUMENT,
    config_path: Optional[Path] = _CONFIG_OPTION,
) -> None:
    """List all actions with their HTTP method, URL and return type.

    Example::

        actiondoc inspect actions meta.json
    """
    document, config = load_inputs(meta, config_path)
    analyzed = analyze_document(document)
    if not analyzed.actions:
        info("No actions in this metadata.")
        return

    builder = PathsBuilder(config.registry, config.swagger)
    headers = ["Method", "URL", "Action", "Returns", "Description"]
    rows: list[list[str]] = []
    for action in analyzed.actions:
        returns = action.return_type_doc_meta
        rows.append([
            builder.http_method_of(action).upper(),
            action.url,
            f"{action.simple_type_name}#{action.method_name}",
            (returns.simple_type_name or returns.type_name) if returns else "-",
            _first_line(action.description),
        ])

    get_output().print_table(headers, rows, title=f"{analyzed.title} -- Actions ({len(rows)})")


@inspect_app.command("jobs")
def inspect_jobs(
    meta: str = _META_ARGUMENT,
) -> None:
    """List all jobs with their key, title and cron expression.

    Example::

        actiondoc inspect jobs meta.json
    """
    document, _ = load_inputs(meta)
    analyzed = analyze_document(document)
    if not analyzed.jobs:
        info("No jobs in this metadata.")
        return

    headers = ["Key", "Title", "Cron", "Job", "Triggers"]
    rows = [
        [
            job.job_key or "-",
            job.job_title or "-",
            job.cron_exp or "-",
            job.simple_type_name or job.type_name,
            ", ".join(job.triggered_job_keys) or "-",
        ]
        for job in analyzed.jobs
    ]
    get_output().print_table(headers, rows, title=f"Jobs ({len(rows)})")


@inspect_app.command("definitions")
def inspect_definitions(
    meta: str = _META_ARGUMENT,
    config_path: Optional[Path] = _CONFIG_OPTION,
) -> None:
    """List the definitions the generated swagger would contain.

    Shows each definition with up to five property names and its required
    properties.

    Example::

        actiondoc inspect definitions meta.json
    """
    document, config = load_inputs(meta, config_path)
    creator = SwaggerSpecCreator(options=config.swagger, registry=config.registry)
    try:
        swagger = creator.create(document)
    except ActionDocError as exc:
        fail(exc)

    definitions = swagger["definitions"]
    if not definitions:
        info("No definitions would be generated.")
        return

    headers = ["Definition", "Properties", "Required"]
    rows: list[list[str]] = []
    for name, definition in sorted(definitions.items()):
        prop_names = list(definition.get("properties", {}))
        props = ", ".join(prop_names[:5])
        if len(prop_names) > 5:
            props += "..."
        rows.append([name, props or "-", ", ".join(definition.get("required", [])) or "-"])

    get_output().print_table(headers, rows, title=f"Definitions ({len(rows)})")
