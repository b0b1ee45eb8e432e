"""Exception hierarchy for actiondoc.

All exceptions inherit from :class:`ActionDocError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`actiondoc.exit_codes`.
The top-level error handler in :func:`actiondoc.app.main` catches
``ActionDocError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

None of these errors is retried anywhere: the pipeline is deterministic, so
running it again over the same metadata cannot change the outcome.

Subclass hierarchy::

    ActionDocError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- ConfigurationError  (exit 3)
    +-- InvalidDepthError   (exit 4)
    +-- EncodingError       (exit 5)
    +-- IOError_            (exit 6)
    +-- MetaParseError      (exit 7)
    +-- DefaultValueError   (exit 8)
    +-- SwaggerDiffError    (exit 9)
"""

from actiondoc.exit_codes import (
    EXIT_CONFIGURATION_ERROR,
    EXIT_DEFAULT_VALUE_ERROR,
    EXIT_ENCODING_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_DEPTH,
    EXIT_INVALID_USAGE,
    EXIT_IO_ERROR,
    EXIT_META_PARSE_ERROR,
    EXIT_SWAGGER_DIFF,
)


class ActionDocError(Exception):
    """Base exception for all actiondoc errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`actiondoc.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(ActionDocError):
    """Raised for invalid CLI arguments or missing required parameters."""

    exit_code = EXIT_INVALID_USAGE


class ConfigurationError(ActionDocError):
    """Raised when a value falls outside every case of a closed lookup table.

    Typical causes are a response wrapper kind missing from the produces
    table, or an invalid project configuration file. Fatal for the action
    being documented because only a new registration can fix it.
    """

    exit_code = EXIT_CONFIGURATION_ERROR


class InvalidDepthError(ActionDocError):
    """Raised when a generic type is unwrapped deeper than its nesting."""

    exit_code = EXIT_INVALID_DEPTH


class EncodingError(ActionDocError):
    """Raised when a ``$ref`` segment cannot be encoded as UTF-8."""

    exit_code = EXIT_ENCODING_ERROR


class IOError_(ActionDocError):
    """Raised when a previously emitted swagger document is unreadable or corrupt.

    Named with a trailing underscore to avoid shadowing the built-in
    ``IOError``. The message always contains the offending path.
    """

    exit_code = EXIT_IO_ERROR


class MetaParseError(ActionDocError):
    """Raised when the metadata file cannot be loaded or fails validation."""

    exit_code = EXIT_META_PARSE_ERROR


class DefaultValueError(ActionDocError):
    """Raised when an example value from a comment does not fit the property type."""

    exit_code = EXIT_DEFAULT_VALUE_ERROR


class SwaggerDiffError(ActionDocError):
    """Raised when your swagger document differs from the generated one."""

    exit_code = EXIT_SWAGGER_DIFF
