"""Built-in CLI commands for actiondoc.

* :mod:`~actiondoc.commands.generate` -- build ``swagger.json`` and the
  analyzed metadata from a reflector metadata file.
* :mod:`~actiondoc.commands.inspect` -- tables of actions, jobs and the
  definitions a document would contain.
* :mod:`~actiondoc.commands.diff` -- compare two swagger documents, or verify
  your own document against the generated one.

Each module exports either a :class:`typer.Typer` sub-application (the
``inspect`` group) or plain callback functions registered directly on the
root app.
"""
