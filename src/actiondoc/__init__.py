"""actiondoc -- Synthesize Swagger 2.0 documents from action handler metadata.

This package takes the metadata an external reflector collected from a web
application (actions, scheduled jobs, and the types they use), normalizes
it, and assembles an OpenAPI 2.0 ("Swagger") specification from it. It can
also read a previously emitted document back and compare two documents.

Typical workflow::

    actiondoc generate build/actiondoc/meta.json    # write swagger.json
    actiondoc sync ./swagger.json                   # verify your swagger

Modules:
    app: Typer application factory and CLI entry point.
    models: Pydantic models for type descriptors and doc metadata.
    config: Project configuration, registry tables and output paths.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
    meta: Type-name, generic and annotation normalization.
    swagger: Swagger part handlers, assembler, reader and diff.
"""

__version__ = "0.3.0"
