"""Typer application and CLI entry point for actiondoc.

This module wires together the top-level Typer application and registers the
built-in commands (``generate``, ``inspect``, ``diff``, ``sync``).

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs signal handlers and
invokes the Typer app. :class:`~actiondoc.exceptions.ActionDocError` is
reported on stderr and mapped to its exit code; any other exception is
written to a crash log under the data directory.

See Also:
    :mod:`actiondoc.config`: Project configuration and the data directory.
    :mod:`actiondoc.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import logging
import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from actiondoc import __version__
from actiondoc.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="actiondoc",
    help="Generate Swagger 2.0 documents from web action metadata.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

# --- Commands ---

from actiondoc.commands.diff import diff_command, sync_command  # noqa: E402
from actiondoc.commands.generate import generate_command  # noqa: E402
from actiondoc.commands.inspect import inspect_app  # noqa: E402

app.command("generate")(generate_command)
app.add_typer(inspect_app, name="inspect", help="Inspect action metadata.")
app.command("diff")(diff_command)
app.command("sync")(sync_command)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"actiondoc {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    """Route library logging to stderr through Rich when ``--verbose`` is set."""
    package_logger = logging.getLogger("actiondoc")
    for handler in list(package_logger.handlers):
        if isinstance(handler, RichHandler):
            package_logger.removeHandler(handler)
    if not verbose:
        package_logger.setLevel(logging.WARNING)
        return
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
    output_file: Optional[str] = typer.Option(
        None, "-o", "--output", help="Output file path."
    ),
) -> None:
    """Root callback executed before every command.

    Initialises the global :class:`~actiondoc.output.OutputManager` from CLI
    flags, configures library logging, and stores ``verbose`` in ``ctx.obj``.

    Args:
        ctx: Typer invocation context.
        version: If ``True``, print the version string and exit.
        json_output: Force JSON output format.
        plain_output: Force plain-text output format.
        no_color: Disable all colour and Rich markup.
        quiet: Suppress non-essential diagnostic output.
        verbose: Enable debug-level diagnostic output.
        output_file: Redirect primary data output to a file path.
    """
    from actiondoc.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(
        OutputManager(
            format=fmt,
            no_color=no_color,
            quiet=quiet,
            verbose=verbose,
            output_file=output_file,
        )
    )
    _configure_logging(verbose)

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from actiondoc.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(
        "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    )
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``actiondoc`` console script.

    Unhandled :class:`~actiondoc.exceptions.ActionDocError` instances cause a
    clean exit with the error's ``exit_code``. All other exceptions produce a
    crash log and a generic failure exit.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from actiondoc.exceptions import ActionDocError
        from actiondoc.output import error

        if isinstance(exc, ActionDocError):
            error(str(exc))
            sys.exit(exc.exit_code)
        else:
            log_path = _write_crash_log(exc)
            error(f"Unexpected error. Debug log: {log_path}")
            sys.exit(EXIT_GENERIC_FAILURE)
