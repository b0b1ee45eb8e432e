"""Map a :class:`~actiondoc.models.TypeDocMeta` to a Swagger parameter/schema dict.

The same mapping serves path parameters, form fields, definition
properties and response schemas. The dispatch order is:

1. a native data type -> ``type``/``format`` from the data-type table;
2. a ``JsonParameter`` field -> ``string``;
3. an iterable -> ``array`` (see :meth:`ParameterMapper.setup_array`);
4. ``Object`` or a map -> ``object``;
5. an enum -> ``string`` with the codes, the entries and a description;
6. any other non-native class -> ``$ref`` to a registered definition;
7. anything left -> ``object``.

Validation constraints and the ``example`` value are added afterwards.

Example::

    mapper = ParameterMapper(MetaRegistry())
    definitions: dict[str, dict] = {}
    mapper.to_parameter_map(product_meta, definitions)
    # {"name": "product", "$ref": "#/definitions/ProductBean"}
    # definitions == {"ProductBean": {"type": "object", "properties": {...}}}
"""

from __future__ import annotations

import logging
import re
from typing import Any

from actiondoc.meta.generic import resolve_generic_type, resolve_item_type
from actiondoc.models import (
    OBJECT_TYPE,
    AnnotationMeta,
    ClassTrait,
    ClassType,
    MetaRegistry,
    TypeDocMeta,
)
from actiondoc.swagger.datatype import is_native, lookup_data_type
from actiondoc.swagger.defaultvalue import derive_default_value
from actiondoc.swagger.parts import (
    build_enum_entries,
    definition_ref,
    derive_definition_name,
    derive_required_property_names,
)

logger = logging.getLogger(__name__)

Definitions = dict[str, dict[str, Any]]

_NESTED_LIST = re.compile(r".*List<.*List<.*")

_INT_MAX = 2**31 - 1


def effective_type(meta: TypeDocMeta) -> ClassType:
    """Return the class documented for *meta*.

    ``ActionResponse`` and ``Optional`` wrappers with a known type argument
    are documented as that argument.
    """
    wrapped = meta.type.has_trait(ClassTrait.ACTION_RESPONSE) or meta.type.has_trait(
        ClassTrait.OPTIONAL
    )
    if wrapped:
        generic = resolve_generic_type(meta)
        if generic is not None:
            return generic
    return meta.type


class ParameterMapper:
    """Builds parameter maps and registers the definitions they refer to.

    Args:
        registry: Read-only lookup tables (required markers).
    """

    def __init__(self, registry: MetaRegistry) -> None:
        self.registry = registry

    def to_parameter_map(self, meta: TypeDocMeta, definitions: Definitions) -> dict[str, Any]:
        """Return the parameter map of *meta*, adding definitions to *definitions*."""
        target = effective_type(meta)
        param: dict[str, Any] = {"name": meta.public_name or meta.name}
        if meta.description:
            param["description"] = meta.description

        data_type = lookup_data_type(target)
        if data_type is not None:
            param["type"] = data_type.type
            if data_type.format:
                param["format"] = data_type.format
        elif meta.has_annotation("JsonParameter"):
            param["type"] = "string"
        elif target.has_trait(ClassTrait.ITERABLE):
            self.setup_array(param, meta, definitions)
        elif target.name == OBJECT_TYPE.name or target.has_trait(ClassTrait.MAP):
            param["type"] = "object"
        elif target.is_enum:
            self.setup_enum(param, target, meta)
        elif not is_native(target):
            ref = self.put_definition(meta, definitions)
            param = {"name": meta.public_name or meta.name, "$ref": ref}
        else:
            param["type"] = "object"

        self.setup_validation(meta, param)
        example = derive_default_value(meta, target, resolve_item_type(meta))
        if example is not None:
            param["example"] = example
        return param

    # --- Arrays ---

    def setup_array(self, schema: dict[str, Any], meta: TypeDocMeta, definitions: Definitions) -> None:
        """Fill an ``array`` schema; ``List<List<...>>`` nests the items once more."""
        schema["type"] = "array"
        if meta.nested_properties:
            schema["items"] = {"$ref": self.put_definition(meta, definitions)}
        else:
            items: dict[str, Any] = {}
            item_type = resolve_item_type(meta)
            if item_type is not None:
                data_type = lookup_data_type(item_type)
                if data_type is not None:
                    items["type"] = data_type.type
                    if data_type.format:
                        items["format"] = data_type.format
                elif item_type.is_enum:
                    self.setup_enum(items, item_type, meta)
            if "type" not in items:
                items["type"] = "object"
            schema["items"] = items
        if _NESTED_LIST.match(meta.simple_type_name or meta.type_name):
            schema["items"] = {"type": "array", "items": schema["items"]}

    # --- Enums ---

    def setup_enum(self, attrs: dict[str, Any], enum_type: ClassType, meta: TypeDocMeta) -> None:
        entries = build_enum_entries(enum_type)
        attrs["type"] = "string"
        attrs["enum"] = [entry["code"] for entry in entries]
        attrs["x-enum"] = entries
        attrs["description"] = self.build_enum_description(enum_type, entries, meta)

    def build_enum_description(
        self, enum_type: ClassType, entries: list[dict[str, str]], meta: TypeDocMeta
    ) -> str:
        """Render the enum description shown in Swagger UI.

        Example::

            "status: * `FML` - Formalized, Formal. :: fromCls(AppCDef.MemberStatus)"
        """
        text = ""
        if meta.description and meta.description.strip():
            text += meta.description + ":"
        for entry in entries:
            name, alias = entry["name"], entry["alias"]
            if name == alias or not alias:
                text += f" * `{entry['code']}` - {name}."
            else:
                text += f" * `{entry['code']}` - {name}, {alias}."
        return text + f" :: fromCls({enum_type.title})"

    # --- Validation ---

    def setup_validation(self, meta: TypeDocMeta, param: dict[str, Any]) -> None:
        """Translate constraint annotations into Swagger validation keywords.

        Annotations are applied in qualified-name order, each followed by
        the annotations on its own type (one level); later ones overwrite.
        """
        for anno in _ordered(meta.annotations):
            self._apply_validation(anno, param)
            for nested in _ordered(anno.meta_annotations):
                self._apply_validation(nested, param)

    def _apply_validation(self, anno: AnnotationMeta, param: dict[str, Any]) -> None:
        if not _is_constraint(anno):
            return
        name = anno.simple_name
        if name in ("Length", "Size"):
            param["minLength"] = anno.get("min", 0)
            param["maxLength"] = anno.get("max", _INT_MAX)
        elif name == "Pattern":
            param["pattern"] = anno.get("regexp")
        elif name == "Email":
            param["pattern"] = anno.get("regexp", ".*")
        elif name == "Min":
            param["minimum"] = anno.get("value")
        elif name == "Max":
            param["maximum"] = anno.get("value")

    # --- Definitions ---

    def put_definition(self, meta: TypeDocMeta, definitions: Definitions) -> str:
        """Register the definition of *meta* unless present and return its ``$ref``."""
        name = derive_definition_name(meta)
        if name not in definitions:
            definitions[name] = self.build_definition(meta, definitions)
            logger.debug("Registered definition %s", name)
        return definition_ref(name)

    def build_definition(self, meta: TypeDocMeta, definitions: Definitions) -> dict[str, Any]:
        schema: dict[str, Any] = {"type": "object"}
        required = derive_required_property_names(meta, self.registry)
        if required:
            schema["required"] = required
        properties: dict[str, Any] = {}
        for nested in meta.nested_properties:
            prop = self.to_parameter_map(nested, definitions)
            key = prop.pop("name")
            properties[key] = prop
        schema["properties"] = properties
        return schema


def _ordered(annotations: list[AnnotationMeta]) -> list[AnnotationMeta]:
    return sorted(annotations, key=lambda anno: anno.type_name)


def _is_constraint(anno: AnnotationMeta) -> bool:
    return any(meta.simple_name == "Constraint" for meta in anno.meta_annotations)

