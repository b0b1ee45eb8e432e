"""Small, pure derivations that the Swagger assembler is built from.

Each function takes already-loaded metadata plus the read-only
:class:`~actiondoc.models.MetaRegistry` and returns a fresh value; none of
them touch shared state, so they can be called for independent actions in
any order.

Functions:
    infer_http_method: HTTP verb of an action.
    derive_produces: Media types an action responds with.
    derive_required_property_names: Public names of required properties.
    build_enum_entries: ``{name, code, alias}`` list of an enum type.
    derive_definition_name: Generics-erased definition identifier.
    encode_reference_segment / definition_ref: ``$ref`` building.
    extract_status_throws: ``@throws ... (404)`` lines of a method comment.
"""

from __future__ import annotations

import re
import urllib.parse
from typing import Callable, Optional

from actiondoc.exceptions import ConfigurationError, EncodingError
from actiondoc.meta.generic import resolve_generic_type
from actiondoc.models import (
    ActionDocMeta,
    ClassifiedEnumConstant,
    ClassType,
    MetaRegistry,
    TypeDocMeta,
)
from actiondoc.swagger.datatype import is_void, lookup_data_type

TEXT_PLAIN = "text/plain;charset=UTF-8"

HttpMethodPolicy = Callable[[ActionDocMeta], str]

_HTTP_METHOD_PATTERN = re.compile(r"(.+)\$.+")
_ONE_LEVEL_GENERIC = re.compile(r"^[^<]+<(.+)>$")
_ANGLE_BRACKETS = re.compile(r"[<>]")
_THROWS_HEAD = re.compile(r"^@throws[ \t\u3000]")
_THROWS_TRIM = " \t\r\n\u3000"


# --- HTTP method ---


def _get_policy(action: ActionDocMeta) -> str:
    return "get"


def infer_http_method(
    action: ActionDocMeta, default_policy: Optional[HttpMethodPolicy] = None
) -> str:
    """Return the HTTP verb of *action*.

    The verb is the prefix before ``$`` in the method name (``post$update``
    is ``post``). A method without one is ``post`` when it takes a body that
    is not a ``...Form``; otherwise *default_policy* decides.

    Example::

        infer_http_method(action)                      # "get" for get$index
        infer_http_method(action, lambda a: "post")    # "post" for index + ProductsForm
    """
    match = _HTTP_METHOD_PATTERN.search(action.method_name)
    if match:
        return match.group(1)
    form = action.form_type_doc_meta
    if form is not None and not form.type_name.endswith("Form"):
        return "post"
    return (default_policy or _get_policy)(action)


# --- Produces ---


def derive_produces(action: ActionDocMeta, registry: MetaRegistry) -> Optional[list[str]]:
    """Return the media types *action* produces, or ``None`` for no content.

    Raises:
        ConfigurationError: If the response wrapper is not registered.
    """
    ret = action.return_type_doc_meta
    if ret is None:
        return None
    generic = resolve_generic_type(ret)
    if is_void(generic) or is_void(ret.type):
        return None
    if lookup_data_type(generic) is not None or lookup_data_type(ret.type) is not None:
        return [TEXT_PLAIN]
    produce = registry.produces.get(ret.type.simple_name)
    if produce is None:
        produce = registry.produces.get(ret.type.name)
    if produce is None:
        raise ConfigurationError(
            f"Not found the produce: type={ret.type.name}, "
            f"keys={sorted(registry.produces)}"
        )
    return [produce]


# --- Required properties ---


def derive_required_property_names(meta: TypeDocMeta, registry: MetaRegistry) -> list[str]:
    """Return the public names of the nested properties carrying a required marker.

    Declaration order and duplicates are kept.
    """
    return [
        prop.public_name or prop.name
        for prop in meta.nested_properties
        if any(registry.is_required_marker(anno) for anno in prop.annotations)
    ]


# --- Enums ---


def build_enum_entries(enum_type: ClassType) -> list[dict[str, str]]:
    """Return ``{name, code, alias}`` for each constant in declaration order.

    Plain constants use their name as the code and an empty alias.
    """
    entries = []
    for constant in enum_type.enum_constants:
        if isinstance(constant, ClassifiedEnumConstant):
            entries.append({"name": constant.name, "code": constant.code, "alias": constant.alias})
        else:
            entries.append({"name": constant.name, "code": constant.name, "alias": ""})
    return entries


# --- Definitions ---


def derive_definition_name(meta: TypeDocMeta) -> str:
    """Return the definition identifier of *meta*, with generics erased.

    ``JsonResponse<Piari>`` becomes ``Piari`` and ``Sea Land`` becomes
    ``SeaLand``. Deeper nesting is flattened: after the outermost wrapper is
    removed the remaining angle brackets are dropped, so
    ``JsonResponse<SearchPagingResult<Row>>`` becomes ``SearchPagingResultRow``.
    """
    name = meta.type_name
    match = _ONE_LEVEL_GENERIC.match(name)
    if match:
        name = match.group(1)
        if "<" in name:
            name = _ANGLE_BRACKETS.sub("", name)
    return name.replace(" ", "")


def encode_reference_segment(value: str) -> str:
    """Percent-encode *value* as a UTF-8 URI component.

    Raises:
        EncodingError: If *value* cannot be encoded as UTF-8.
    """
    try:
        return urllib.parse.quote(value, safe="", encoding="utf-8", errors="strict")
    except UnicodeEncodeError as exc:
        raise EncodingError(f"Failed to encode the reference segment: {value!r}") from exc


def definition_ref(name: str) -> str:
    return "#/definitions/" + encode_reference_segment(name)


# --- @throws ---


def extract_status_throws(method_comment: Optional[str]) -> dict[str, list[dict[str, str]]]:
    """Collect ``@throws Exception description (status)`` lines by status.

    Example::

        comment = "@throws EntityNotFound when not found (404)"
        extract_status_throws(comment)
        # {"404": [{"exception": "EntityNotFound", "description": "when not found"}]}

    Lines that do not follow the form exactly are ignored.

    Raises:
        ValueError: If *method_comment* is blank.
    """
    if method_comment is None or not method_comment.strip():
        raise ValueError(f"The method comment is blank: {method_comment!r}")
    found: dict[str, list[dict[str, str]]] = {}
    for raw_line in method_comment.splitlines():
        line = raw_line.strip(_THROWS_TRIM)
        if not _THROWS_HEAD.match(line):
            continue
        if "(" not in line or not line.endswith(")"):
            continue
        paren = line.rindex("(")
        status = line[paren + 1 : -1]
        if not status or not all("0" <= ch <= "9" for ch in status):
            continue
        body = line[len("@throws") : paren].strip(_THROWS_TRIM)
        parts = re.split(r"[ \t\u3000]+", body, maxsplit=1)
        if len(parts) < 2 or not parts[1].strip(_THROWS_TRIM):
            continue
        found.setdefault(status, []).append(
            {"exception": parts[0], "description": parts[1].strip(_THROWS_TRIM)}
        )
    return found
