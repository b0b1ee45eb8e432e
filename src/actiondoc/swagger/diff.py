"""Compare two swagger documents and render the differences as Markdown.

Before comparing, both documents are normalized:

* percent-encoded ``$``, ``<``, ``>``, ``@``, ``,`` and spaces in the raw
  text are decoded, so ``#/definitions/Row%3CX%3E`` equals
  ``#/definitions/Row<X>``;
* documentation-only nodes (``summary``, ``description``, ``examples``)
  and every response other than ``200`` are dropped;
* trailing slashes are trimmed from the paths.

What remains is compared per endpoint (path + verb) and per definition.

Example::

    differ = SwaggerDiffer()
    result = differ.diff_from_locations("build/actiondoc/swagger.json", "swagger.json")
    if result.has_differences:
        print(render_markdown(result))
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from actiondoc.exceptions import IOError_, SwaggerDiffError
from actiondoc.swagger.reader import read_swagger_text

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
"""Path to the Jinja2 template directory (``swagger/templates/``)."""

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch")

_DECODED = (
    ("%24", "$"),
    ("%3C", "<"),
    ("%3E", ">"),
    ("%40", "@"),
    ("%2C", ","),
    ("%20", " "),
)

_NON_TARGET_NAMES = ("summary", "description", "examples")
_RESPONSE_STATUS_PATH = re.compile(r".+\.responses\.[^.]+$")


def default_target_node(path: str, name: str) -> bool:
    """Whether the node *name* at dotted *path* takes part in the comparison."""
    if name in _NON_TARGET_NAMES:
        return False
    if _RESPONSE_STATUS_PATH.match(path):
        return name == "200"
    return True


@dataclass
class SwaggerDiffOption:
    """Adjusts what :class:`SwaggerDiffer` compares.

    Attributes:
        target_node: ``(dotted_path, name) -> bool``; ``False`` drops the node.
        delete_path_trailing_slash: Trim trailing ``/`` from every path.
        excepted_path_prefixes: Paths starting with one of these are ignored.
        excepted_content_types: Operations producing one of these are ignored.
        left_content_filter: Applied to the decoded left text before parsing.
        right_content_filter: Applied to the decoded right text before parsing.
    """

    target_node: Callable[[str, str], bool] = default_target_node
    delete_path_trailing_slash: bool = True
    excepted_path_prefixes: list[str] = field(default_factory=list)
    excepted_content_types: list[str] = field(default_factory=list)
    left_content_filter: Optional[Callable[[str], str]] = None
    right_content_filter: Optional[Callable[[str], str]] = None


# --- Result ---


@dataclass
class Endpoint:
    path: str
    method: str


@dataclass
class ChangedEndpoint:
    """An endpoint present on both sides whose contract differs."""

    path: str
    method: str
    added_parameters: list[str] = field(default_factory=list)
    missing_parameters: list[str] = field(default_factory=list)
    changed_parameters: list[str] = field(default_factory=list)
    consumes: Optional[tuple[Any, Any]] = None
    produces: Optional[tuple[Any, Any]] = None
    changed_responses: list[str] = field(default_factory=list)

    @property
    def has_parameter_changes(self) -> bool:
        return bool(self.added_parameters or self.missing_parameters or self.changed_parameters)

    @property
    def is_changed(self) -> bool:
        return (
            self.has_parameter_changes
            or self.consumes is not None
            or self.produces is not None
            or bool(self.changed_responses)
        )


@dataclass
class ChangedDefinition:
    name: str
    added_properties: list[str] = field(default_factory=list)
    missing_properties: list[str] = field(default_factory=list)
    changed_properties: list[str] = field(default_factory=list)
    required: Optional[tuple[list[str], list[str]]] = None

    @property
    def is_changed(self) -> bool:
        return bool(
            self.added_properties
            or self.missing_properties
            or self.changed_properties
            or self.required is not None
        )


@dataclass
class SwaggerDiffResult:
    """Differences of the right document relative to the left one."""

    new_endpoints: list[Endpoint] = field(default_factory=list)
    missing_endpoints: list[Endpoint] = field(default_factory=list)
    changed_endpoints: list[ChangedEndpoint] = field(default_factory=list)
    new_definitions: list[str] = field(default_factory=list)
    missing_definitions: list[str] = field(default_factory=list)
    changed_definitions: list[ChangedDefinition] = field(default_factory=list)

    @property
    def has_differences(self) -> bool:
        return bool(
            self.new_endpoints
            or self.missing_endpoints
            or self.changed_endpoints
            or self.new_definitions
            or self.missing_definitions
            or self.changed_definitions
        )


# --- Differ ---


SwaggerSource = Union[str, dict[str, Any]]


class SwaggerDiffer:
    """Compares swagger documents given as dicts, JSON text, or locations."""

    def __init__(self, option: Optional[SwaggerDiffOption] = None) -> None:
        self.option = option or SwaggerDiffOption()

    def diff_from_locations(self, left_location: str, right_location: str) -> SwaggerDiffResult:
        """Compare the documents at two file paths or URLs.

        Raises:
            IOError_: If a document cannot be read or parsed.
        """
        left = read_swagger_text(left_location)
        right = read_swagger_text(right_location)
        return self.diff(left, right)

    def diff(self, left: SwaggerSource, right: SwaggerSource) -> SwaggerDiffResult:
        """Compare *left* (the base) with *right*."""
        left_doc = self.prepare(left, self.option.left_content_filter)
        right_doc = self.prepare(right, self.option.right_content_filter)
        result = SwaggerDiffResult()
        self._diff_endpoints(left_doc, right_doc, result)
        self._diff_definitions(left_doc, right_doc, result)
        logger.debug(
            "Swagger diff: new=%d, missing=%d, changed=%d endpoints",
            len(result.new_endpoints),
            len(result.missing_endpoints),
            len(result.changed_endpoints),
        )
        return result

    # --- Normalization ---

    def prepare(
        self, source: SwaggerSource, content_filter: Optional[Callable[[str], str]] = None
    ) -> dict[str, Any]:
        """Decode, parse, and normalize one document."""
        text = source if isinstance(source, str) else json.dumps(source, ensure_ascii=False)
        text = decode_content(text)
        if content_filter is not None:
            text = content_filter(text)
        try:
            document = json.loads(text)
        except json.JSONDecodeError as exc:
            raise IOError_(f"Failed to parse the swagger: {exc}") from exc
        if not isinstance(document, dict):
            raise IOError_("The swagger must be a JSON object")
        self._adjust_node("", document)
        self._filter_paths(document)
        return document

    def _adjust_node(self, path: str, node: Any) -> None:  # noqa: ANN401
        if isinstance(node, list):
            for element in node:
                self._adjust_node(path, element)
        elif isinstance(node, dict):
            for name in list(node):
                child_path = f"{path}.{name}" if path else name
                if self.option.target_node(child_path, name):
                    self._adjust_node(child_path, node[name])
                else:
                    del node[name]

    def _filter_paths(self, document: dict[str, Any]) -> None:
        paths = document.get("paths")
        if not isinstance(paths, dict):
            logger.warning("No 'paths' object in the swagger document")
            return
        filtered: dict[str, Any] = {}
        for path, item in paths.items():
            if self.option.delete_path_trailing_slash and path.endswith("/"):
                path = path.rstrip("/")
            if any(path.startswith(prefix) for prefix in self.option.excepted_path_prefixes):
                continue
            if isinstance(item, dict) and self._produces_excepted(item):
                continue
            filtered[path] = item
        document["paths"] = filtered

    def _produces_excepted(self, path_item: dict[str, Any]) -> bool:
        excepted = self.option.excepted_content_types
        if not excepted:
            return False
        for operation in path_item.values():
            if isinstance(operation, dict):
                produces = operation.get("produces") or []
                if any(content_type in excepted for content_type in produces):
                    return True
        return False

    # --- Endpoints ---

    def _diff_endpoints(
        self, left: dict[str, Any], right: dict[str, Any], result: SwaggerDiffResult
    ) -> None:
        left_ops = _operations(left)
        right_ops = _operations(right)
        for key, operation in right_ops.items():
            if key not in left_ops:
                result.new_endpoints.append(Endpoint(*key))
        for key, operation in left_ops.items():
            if key not in right_ops:
                result.missing_endpoints.append(Endpoint(*key))
                continue
            changed = _diff_operation(key, operation, right_ops[key])
            if changed.is_changed:
                result.changed_endpoints.append(changed)

    # --- Definitions ---

    def _diff_definitions(
        self, left: dict[str, Any], right: dict[str, Any], result: SwaggerDiffResult
    ) -> None:
        left_defs = left.get("definitions") or {}
        right_defs = right.get("definitions") or {}
        result.new_definitions.extend(name for name in right_defs if name not in left_defs)
        for name, schema in left_defs.items():
            if name not in right_defs:
                result.missing_definitions.append(name)
                continue
            changed = _diff_definition(name, schema, right_defs[name])
            if changed.is_changed:
                result.changed_definitions.append(changed)


def decode_content(text: str) -> str:
    """Decode the percent-escapes that ``$ref`` encoding introduces."""
    for encoded, decoded in _DECODED:
        text = text.replace(encoded, decoded)
    return text


def _operations(document: dict[str, Any]) -> dict[tuple[str, str], dict[str, Any]]:
    operations = {}
    for path, item in (document.get("paths") or {}).items():
        if not isinstance(item, dict):
            continue
        for method, operation in item.items():
            if method in HTTP_METHODS and isinstance(operation, dict):
                operations[(path, method)] = operation
    return operations


def _parameter_key(param: dict[str, Any]) -> str:
    return f"{param.get('name')} ({param.get('in')})"


def _diff_operation(
    key: tuple[str, str], left: dict[str, Any], right: dict[str, Any]
) -> ChangedEndpoint:
    changed = ChangedEndpoint(path=key[0], method=key[1])
    left_params = {_parameter_key(p): p for p in left.get("parameters") or []}
    right_params = {_parameter_key(p): p for p in right.get("parameters") or []}
    changed.added_parameters = [name for name in right_params if name not in left_params]
    changed.missing_parameters = [name for name in left_params if name not in right_params]
    changed.changed_parameters = [
        name
        for name, param in left_params.items()
        if name in right_params and right_params[name] != param
    ]
    if left.get("consumes") != right.get("consumes"):
        changed.consumes = (left.get("consumes"), right.get("consumes"))
    if left.get("produces") != right.get("produces"):
        changed.produces = (left.get("produces"), right.get("produces"))
    left_responses = left.get("responses") or {}
    right_responses = right.get("responses") or {}
    for status in list(left_responses) + [s for s in right_responses if s not in left_responses]:
        if left_responses.get(status) != right_responses.get(status):
            changed.changed_responses.append(status)
    return changed


def _diff_definition(name: str, left: dict[str, Any], right: dict[str, Any]) -> ChangedDefinition:
    changed = ChangedDefinition(name=name)
    left_props = left.get("properties") or {}
    right_props = right.get("properties") or {}
    changed.added_properties = [prop for prop in right_props if prop not in left_props]
    changed.missing_properties = [prop for prop in left_props if prop not in right_props]
    changed.changed_properties = [
        prop
        for prop, schema in left_props.items()
        if prop in right_props and right_props[prop] != schema
    ]
    left_required = left.get("required") or []
    right_required = right.get("required") or []
    if left_required != right_required:
        changed.required = (left_required, right_required)
    return changed


# --- Rendering ---


def _create_jinja_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=select_autoescape(disabled_extensions=("md.j2",)),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def render_markdown(result: SwaggerDiffResult) -> str:
    """Render *result* as Markdown; an empty string when nothing differs."""
    if not result.has_differences:
        return ""
    template = _create_jinja_env().get_template("diff.md.j2")
    return template.render(result=result)


def verify_swagger_sync(generated_path: Path, your_path: Path) -> None:
    """Check that your swagger document matches the generated one.

    Raises:
        IOError_: If either document cannot be read.
        SwaggerDiffError: With the rendered differences when they differ.
    """
    result = SwaggerDiffer().diff_from_locations(str(generated_path), str(your_path))
    if result.has_differences:
        raise SwaggerDiffError(
            f"Your swagger differs from the generated one: {your_path}\n"
            + render_markdown(result)
        )
    logger.info("Swagger is in sync: %s", your_path)
