"""Assemble the ``paths``, ``definitions`` and ``tags`` of a Swagger document.

Each action becomes one operation under ``paths[url][verb]``:

.. code-block:: text

    summary, description, [consumes], parameters, tags, responses, [produces]

Path parameters come first, then the form fields or the JSON body. An
``Optional`` path parameter also makes the operation available under the
URL without it (``/products/{id}/{page}`` -> ``/products/{id}`` ->
``/products``); the full URL is then moved behind those variants.
"""

from __future__ import annotations

import copy
import logging
import re
from typing import Any, Optional

from actiondoc.models import ActionDocMeta, ClassTrait, MetaRegistry, SwaggerOptions
from actiondoc.swagger.hooks import SwaggerHooks
from actiondoc.swagger.parameter import Definitions, ParameterMapper
from actiondoc.swagger.parts import (
    definition_ref,
    derive_definition_name,
    derive_required_property_names,
    infer_http_method,
)
from actiondoc.swagger.responses import ResponsesBuilder

logger = logging.getLogger(__name__)

QUERY_HTTP_METHODS = ("get", "delete")


class PathsBuilder:
    """Accumulates paths, definitions and tags over a sequence of actions.

    Args:
        registry: Read-only lookup tables.
        options: Swagger options from the project config.
        hooks: Code-level customization.

    Example::

        builder = PathsBuilder(MetaRegistry(), SwaggerOptions(), SwaggerHooks())
        builder.add_actions(document.actions)
        builder.paths["/products/list"]["post"]["tags"]  # ["products"]
    """

    def __init__(
        self,
        registry: MetaRegistry,
        options: SwaggerOptions,
        hooks: Optional[SwaggerHooks] = None,
    ) -> None:
        self.registry = registry
        self.options = options
        self.hooks = hooks or SwaggerHooks()
        self.paths: dict[str, dict[str, Any]] = {}
        self.definitions: Definitions = {}
        self.tags: list[dict[str, str]] = []
        self.mapper = ParameterMapper(registry)
        self.responses = ResponsesBuilder(self.mapper, registry, options, self.hooks)

    def add_actions(self, actions: list[ActionDocMeta]) -> None:
        for action in actions:
            self.add_action(action)

    def add_action(self, action: ActionDocMeta) -> None:
        """Add the operation of *action* (and its optional-path variants)."""
        url = action.url
        http_method = self.http_method_of(action)
        operation: dict[str, Any] = {}
        self.paths.setdefault(url, {})[http_method] = operation
        operation["summary"] = action.description
        operation["description"] = action.description

        parameters: list[dict[str, Any]] = []
        optional_names: list[str] = []
        for meta in action.parameter_type_doc_metas:
            param = self.mapper.to_parameter_map(meta, self.definitions)
            param["in"] = "path"
            _example_to_default(param)
            param["required"] = True
            if meta.type.has_trait(ClassTrait.OPTIONAL):
                optional_names.append(meta.public_name or meta.name)
            parameters.append(param)

        form = action.form_type_doc_meta
        if form is not None:
            if form.type_name.endswith("Form"):
                self.prepare_form(action, http_method, operation, parameters)
            else:
                self.prepare_json_body(action, operation, parameters)

        operation["parameters"] = parameters
        tag = tag_of(url)
        operation["tags"] = [tag]
        if not any(tag in entry.values() for entry in self.tags):
            self.tags.append({"name": tag})
        self.responses.prepare(operation, action, self.definitions)
        logger.debug("Added %s %s", http_method, url)

        if optional_names:
            self.add_optional_paths(url, http_method, optional_names)

    def http_method_of(self, action: ActionDocMeta) -> str:
        policy = self.hooks.default_form_http_method
        if policy is None:
            default = self.options.default_form_http_method
            policy = lambda _action: default  # noqa: E731
        return infer_http_method(action, policy)

    # --- Form ---

    def prepare_form(
        self,
        action: ActionDocMeta,
        http_method: str,
        operation: dict[str, Any],
        parameters: list[dict[str, Any]],
    ) -> None:
        """Add one ``query`` or ``formData`` parameter per form field."""
        location = "query" if http_method in QUERY_HTTP_METHODS else "formData"
        for meta in action.form_type_doc_meta.nested_properties:
            param = self.mapper.to_parameter_map(meta, self.definitions)
            if "$ref" in param:
                del param["$ref"]
                param["type"] = "string"
            items = param.get("items")
            if isinstance(items, dict):
                if "$ref" in items:
                    del items["$ref"]
                    items["type"] = "string"
                if items.get("type") == "object":
                    items["type"] = "string"
            if param.get("type") == "object":
                param["type"] = "string"
            param["name"] = meta.public_name or meta.name
            param["in"] = location
            _example_to_default(param)
            param["required"] = any(
                self.registry.is_required_marker(anno) for anno in meta.annotations
            )
            parameters.append(param)

        if any(param.get("in") == "formData" for param in parameters):
            if any(param.get("type") == "file" for param in parameters):
                operation["consumes"] = ["multipart/form-data"]
            else:
                operation["consumes"] = ["application/x-www-form-urlencoded"]

    # --- JSON body ---

    def prepare_json_body(
        self,
        action: ActionDocMeta,
        operation: dict[str, Any],
        parameters: list[dict[str, Any]],
    ) -> None:
        """Add the ``body`` parameter and (re)register the body definition."""
        body = action.form_type_doc_meta
        operation["consumes"] = ["application/json"]
        param: dict[str, Any] = {
            "name": body.simple_type_name or body.type_name,
            "in": "body",
            "required": True,
        }
        schema: dict[str, Any] = {"type": "object"}
        required = derive_required_property_names(body, self.registry)
        if required:
            schema["required"] = required
        properties: dict[str, Any] = {}
        for meta in body.nested_properties:
            prop = self.mapper.to_parameter_map(meta, self.definitions)
            properties[prop.pop("name")] = prop
        schema["properties"] = properties

        name = derive_definition_name(body)
        self.definitions[name] = schema
        ref = {"$ref": definition_ref(name)}
        if body.type.has_trait(ClassTrait.ITERABLE):
            param["schema"] = {"type": "array", "items": ref}
        else:
            param["schema"] = ref
        parameters.append(param)

    # --- Optional path parameters ---

    def add_optional_paths(self, url: str, http_method: str, optional_names: list[str]) -> None:
        """Register *url* without each trailing run of optional path parameters."""
        template = self.paths[url][http_method]
        for index in range(len(optional_names)):
            removed = optional_names[index:]
            variant_url = url
            for name in removed:
                variant_url = re.sub(r"/\{" + re.escape(name) + r"\}", "", variant_url)
            operation = copy.deepcopy(template)
            operation["parameters"] = [
                param for param in operation["parameters"] if param.get("name") not in removed
            ]
            self.paths.setdefault(variant_url, {})[http_method] = operation
            logger.debug("Added optional path variant %s", variant_url)
        self.paths[url] = self.paths.pop(url)


def tag_of(url: str) -> str:
    """Return the first segment of *url*, e.g. ``products`` for ``/products/list``."""
    path = url[1:] if url.startswith("/") else url
    return path.split("/", 1)[0]


def _example_to_default(param: dict[str, Any]) -> None:
    if "example" in param:
        param["default"] = param.pop("example")
