"""Create a complete Swagger 2.0 document from loaded metadata.

:class:`SwaggerSpecCreator` runs the whole pipeline: analyze the metadata
(display names, simple names, annotation lists), select the target actions,
assemble ``paths``/``definitions``/``tags`` with
:class:`~actiondoc.swagger.paths.PathsBuilder`, and wrap them into the
top-level document::

    swagger, info, schemes, basePath, tags,
    [securityDefinitions, security], paths, definitions

The result is a plain ``dict`` whose insertion order follows discovery
order, so :func:`serialize_swagger` yields byte-identical output for the
same input.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from actiondoc import __version__
from actiondoc.meta.analyzer import analyze_document
from actiondoc.meta.typename import TypeNameAdjuster
from actiondoc.models import (
    ActionDocMeta,
    DocumentMeta,
    HeaderParameter,
    MetaRegistry,
    SecurityDefinition,
    SwaggerOptions,
)
from actiondoc.swagger.hooks import SwaggerHooks
from actiondoc.swagger.paths import PathsBuilder

logger = logging.getLogger(__name__)

SWAGGER_VERSION = "2.0"
INFO_VERSION = "1.0.0"


class SwaggerSpecCreator:
    """Builds Swagger documents with fixed options, registry and hooks.

    Args:
        options: Swagger options, usually from the project config.
        registry: Read-only lookup tables; the defaults when omitted.
        hooks: Code-level customization; none when omitted.
        adjuster: Type-name adjuster used while analyzing the metadata.
    """

    def __init__(
        self,
        options: Optional[SwaggerOptions] = None,
        registry: Optional[MetaRegistry] = None,
        hooks: Optional[SwaggerHooks] = None,
        adjuster: Optional[TypeNameAdjuster] = None,
    ) -> None:
        self.options = options or SwaggerOptions()
        self.registry = registry or MetaRegistry()
        self.hooks = hooks or SwaggerHooks()
        self.adjuster = adjuster or TypeNameAdjuster()

    def create(self, document: DocumentMeta) -> dict[str, Any]:
        """Return the Swagger document of *document*.

        Raises:
            ConfigurationError: If an action returns an unregistered wrapper.
            InvalidDepthError: If a declared type is shallower than expected.
            DefaultValueError: If a comment example does not fit its type.
            EncodingError: If a definition name cannot be encoded.
        """
        analyzed = analyze_document(document, self.adjuster)
        swagger: dict[str, Any] = {
            "swagger": SWAGGER_VERSION,
            "info": self.create_info(analyzed),
            "schemes": self.options.schemes or [analyzed.scheme],
            "basePath": self.derive_base_path(analyzed),
        }
        builder = PathsBuilder(self.registry, self.options, self.hooks)
        swagger["tags"] = builder.tags
        if self.options.security_definitions:
            self.adapt_security_definitions(swagger, self.options.security_definitions)
        swagger["paths"] = builder.paths
        swagger["definitions"] = builder.definitions
        targets = self.select_target_actions(analyzed.actions)
        builder.add_actions(targets)

        if self.options.header_parameters:
            self.adapt_header_parameters(swagger, self.options.header_parameters)
        logger.info(
            "Created swagger of %d actions: paths=%d, definitions=%d",
            len(targets),
            len(builder.paths),
            len(builder.definitions),
        )
        return swagger

    def create_info(self, document: DocumentMeta) -> dict[str, str]:
        title = self.options.title or document.title
        return {
            "title": title,
            "description": f"{title}. generated by actiondoc-{__version__}.",
            "version": INFO_VERSION,
        }

    def derive_base_path(self, document: DocumentMeta) -> str:
        """Return ``<context path>/`` plus ``<version>/`` when the document has one."""
        if self.options.base_path is not None:
            base_path = self.options.base_path
        else:
            base_path = document.context_path + "/"
            if document.version:
                base_path += document.version + "/"
        if self.hooks.base_path is not None:
            return self.hooks.base_path(base_path)
        return base_path

    def select_target_actions(self, actions: list[ActionDocMeta]) -> list[ActionDocMeta]:
        prefixes = self.options.target_url_prefixes
        selected = []
        for action in actions:
            if prefixes and not any(action.url.startswith(prefix) for prefix in prefixes):
                continue
            if self.hooks.target_action is not None and not self.hooks.target_action(action):
                logger.debug("Skipped %s by the target hook", action.url)
                continue
            selected.append(action)
        return selected

    def adapt_security_definitions(
        self, swagger: dict[str, Any], definitions: list[SecurityDefinition]
    ) -> None:
        security_definitions: dict[str, Any] = {}
        security: dict[str, list[str]] = {}
        swagger["securityDefinitions"] = security_definitions
        swagger["security"] = security
        for definition in definitions:
            entry: dict[str, Any] = {
                "in": definition.location,
                "type": definition.type,
                "name": definition.name,
            }
            if definition.description:
                entry["description"] = definition.description
            security_definitions[definition.name] = entry
            security[definition.name] = []

    def adapt_header_parameters(
        self, swagger: dict[str, Any], headers: list[HeaderParameter]
    ) -> None:
        """Append every header parameter to the ``parameters`` of each path item."""
        for path_item in swagger["paths"].values():
            parameters = path_item.setdefault("parameters", [])
            for header in headers:
                param: dict[str, Any] = {
                    "in": "header",
                    "type": "string",
                    "required": True,
                    "name": header.name,
                    "default": header.default,
                }
                if header.description:
                    param["description"] = header.description
                parameters.append(param)


def serialize_swagger(swagger: dict[str, Any]) -> str:
    """Serialize *swagger* as pretty-printed UTF-8 JSON, keeping key order and nulls."""
    return json.dumps(swagger, indent=2, ensure_ascii=False) + "\n"
