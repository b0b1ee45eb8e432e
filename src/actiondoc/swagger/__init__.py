"""Swagger 2.0 generation, read-back and comparison.

The entry point is :class:`~actiondoc.swagger.creator.SwaggerSpecCreator`;
the smaller derivations it is built from live in
:mod:`actiondoc.swagger.parts`.
"""

from actiondoc.swagger.creator import SwaggerSpecCreator, serialize_swagger
from actiondoc.swagger.diff import SwaggerDiffer, render_markdown, verify_swagger_sync
from actiondoc.swagger.hooks import SwaggerHooks
from actiondoc.swagger.reader import read_swagger_json

__all__ = [
    "SwaggerDiffer",
    "SwaggerHooks",
    "SwaggerSpecCreator",
    "read_swagger_json",
    "render_markdown",
    "serialize_swagger",
    "verify_swagger_sync",
]
