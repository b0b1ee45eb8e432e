"""Example values of properties, taken from ``e.g.`` comments and enum codes."""

from __future__ import annotations

from typing import Any, Optional

from actiondoc.models import ClassTrait, ClassType, TypeDocMeta
from actiondoc.swagger.datatype import example_from_comment, lookup_data_type
from actiondoc.swagger.parts import build_enum_entries

_STRING_TYPE = ClassType(name="java.lang.String")


def derive_default_value(
    meta: TypeDocMeta,
    target: ClassType,
    item_type: Optional[ClassType] = None,
) -> Any:  # noqa: ANN401
    """Return the example value of a property, or ``None`` when it has none.

    Args:
        meta: The property.
        target: The class documented for the property (a response or
            optional wrapper already replaced by its argument).
        item_type: Element class when *target* is iterable.

    Raises:
        DefaultValueError: If the comment example does not fit the type.
    """
    data_type = lookup_data_type(target)
    if data_type is not None:
        return data_type.convert(meta, example_from_comment(meta.comment))

    if target.has_trait(ClassTrait.ITERABLE) and not meta.nested_properties:
        values = example_from_comment(meta.comment)
        if not isinstance(values, list):
            return None
        element = lookup_data_type(item_type or _STRING_TYPE)
        if element is None:
            return None
        return [element.convert(meta, value) for value in values]

    if target.is_enum:
        value = example_from_comment(meta.comment)
        if value is not None:
            return value
        entries = build_enum_entries(target)
        return entries[0]["code"] if entries else None
    return None
