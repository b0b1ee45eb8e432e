"""Build the ``responses`` and ``produces`` of one operation.

The success entry carries the return type's schema unless the action
answers with an HTML page, a stream, or nothing. API actions additionally
get failure entries: the configured status -> cause map (or ``400: client
error``) merged with the ``@throws ... (status)`` lines of the method
comment.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from actiondoc.meta.generic import resolve_generic_type
from actiondoc.models import ActionDocMeta, ClassTrait, MetaRegistry, SwaggerOptions
from actiondoc.swagger.datatype import is_void
from actiondoc.swagger.hooks import SwaggerHooks
from actiondoc.swagger.parameter import Definitions, ParameterMapper
from actiondoc.swagger.parts import derive_produces, extract_status_throws

logger = logging.getLogger(__name__)

MERGED_DESCRIPTION_DELIMITER = "\n :: "


class ResponsesBuilder:
    """Fills ``responses`` (and ``produces``) into an operation dict."""

    def __init__(
        self,
        mapper: ParameterMapper,
        registry: MetaRegistry,
        options: SwaggerOptions,
        hooks: SwaggerHooks,
    ) -> None:
        self.mapper = mapper
        self.registry = registry
        self.options = options
        self.hooks = hooks

    def prepare(
        self, operation: dict[str, Any], action: ActionDocMeta, definitions: Definitions
    ) -> None:
        responses: dict[str, Any] = {}
        operation["responses"] = responses
        produces = derive_produces(action, self.registry)
        if produces is not None:
            operation["produces"] = produces
        self.prepare_success(responses, action, definitions)
        self.prepare_failure(responses, action)

    # --- Success ---

    def prepare_success(
        self, responses: dict[str, Any], action: ActionDocMeta, definitions: Definitions
    ) -> None:
        content: dict[str, Any] = {"description": self.find_description(action)}
        ret = action.return_type_doc_meta
        if ret is not None and self._has_schema(action):
            param = self.mapper.to_parameter_map(ret, definitions)
            param.pop("name", None)
            param.pop("required", None)
            if "schema" in param:
                content.update(param)
            else:
                content["schema"] = param
        responses[str(self.find_http_status(action))] = content

    def find_http_status(self, action: ActionDocMeta) -> int:
        if self.hooks.success_http_status is not None:
            status = self.hooks.success_http_status(action)
            if status is not None:
                return status
        if self.options.success_http_status is not None:
            return self.options.success_http_status
        if action.success_http_status is not None:
            return action.success_http_status.status
        return 200

    def find_description(self, action: ActionDocMeta) -> str:
        specified = action.success_http_status
        if specified is not None and specified.description and specified.description.strip():
            return specified.description
        return "success"

    def _has_schema(self, action: ActionDocMeta) -> bool:
        ret = action.return_type_doc_meta
        media_type = self.registry.produces.get(ret.type.simple_name)
        if media_type in self.registry.schemaless_media_types:
            return False
        return not is_void(resolve_generic_type(ret))

    # --- Failure ---

    def prepare_failure(self, responses: dict[str, Any], action: ActionDocMeta) -> None:
        ret = action.return_type_doc_meta
        if ret is None or not ret.type.has_trait(ClassTrait.API_RESPONSE):
            return
        causes = self.find_failure_causes(action)
        if not causes:
            responses["400"] = {"description": "client error"}
        else:
            for status, cause_names in causes.items():
                description = ", ".join(_simple_name(name) for name in cause_names)
                responses[str(status)] = {"description": description}
        self.reflect_throws(responses, action)

    def find_failure_causes(self, action: ActionDocMeta) -> Optional[dict[int, list[str]]]:
        if self.hooks.failure_http_status is not None:
            return self.hooks.failure_http_status(action)
        return self.options.failure_http_status_causes

    def reflect_throws(self, responses: dict[str, Any], action: ActionDocMeta) -> None:
        """Merge the ``@throws`` lines of the method comment into *responses*."""
        comment = action.method_comment
        if comment is None or not comment.strip():
            return
        for status, throws_list in extract_status_throws(comment).items():
            for throws in throws_list:
                description = f"{throws['description']} ({throws['exception']})"
                existing = responses.get(status)
                if existing is None:
                    responses[status] = {"description": description}
                else:
                    existing["description"] = (
                        existing["description"] + MERGED_DESCRIPTION_DELIMITER + description
                    )
                logger.debug("Merged @throws %s into status %s of %s", throws["exception"], status, action.url)


def _simple_name(name: str) -> str:
    return name.replace("$", ".").rsplit(".", 1)[-1]
