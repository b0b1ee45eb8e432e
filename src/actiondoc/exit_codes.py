"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~actiondoc.exceptions.ActionDocError` subclass.
Build scripts can inspect the exit code to tell a broken registration
from a swagger mismatch without parsing stderr.

Example::

    $ actiondoc sync ./swagger.json
    $ echo $?
    9   # EXIT_SWAGGER_DIFF -- your swagger.json differs from the source
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_CONFIGURATION_ERROR = 3
"""A lookup table had no entry for a value (e.g. an unregistered response wrapper)."""

EXIT_INVALID_DEPTH = 4
"""A generic type was unwrapped deeper than its actual nesting."""

EXIT_ENCODING_ERROR = 5
"""A ``$ref`` segment could not be percent-encoded."""

EXIT_IO_ERROR = 6
"""A previously emitted swagger document exists but cannot be read."""

EXIT_META_PARSE_ERROR = 7
"""The metadata file could not be loaded or validated."""

EXIT_DEFAULT_VALUE_ERROR = 8
"""An ``e.g.`` example in a comment could not be converted to the property type."""

EXIT_SWAGGER_DIFF = 9
"""Your swagger document is not synchronized with the generated one."""
