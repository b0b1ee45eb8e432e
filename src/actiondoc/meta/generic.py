"""Resolve the element class of nested generic types.

A return type such as ``JsonResponse<List<ProductRow>>`` is unwrapped one
container per depth level: depth 0 yields ``List``, depth 1 yields
``ProductRow``.
"""

from __future__ import annotations

import logging
from typing import Optional

from actiondoc.exceptions import InvalidDepthError
from actiondoc.meta.typename import describe
from actiondoc.models import (
    OBJECT_TYPE,
    ClassTrait,
    ClassType,
    ParameterizedType,
    TypeDescriptor,
    TypeDocMeta,
    TypeVariable,
)

logger = logging.getLogger(__name__)


def extract_element_type(descriptor: TypeDescriptor, depth: int) -> ClassType:
    """Return the element class found *depth* containers inside *descriptor*.

    For a parameterized type the first type argument is taken. At depth 0 a
    parameterized argument yields its raw class, a class yields itself, a
    type variable yields its first bound, and any other argument kind
    (wildcard, generic array) yields :data:`~actiondoc.models.OBJECT_TYPE`.
    At a greater depth the first argument must itself be parameterized and
    is unwrapped again with ``depth - 1``.

    Args:
        descriptor: The generic type descriptor to unwrap.
        depth: How many containers to look through below the first one.

    Returns:
        The resolved element class.

    Raises:
        InvalidDepthError: If *depth* exceeds the nesting actually present.

    Example::

        # JsonResponse<List<ProductRow>>
        extract_element_type(desc, 0).simple_name  # "List"
        extract_element_type(desc, 1).simple_name  # "ProductRow"
    """
    if depth < 0:
        raise _depth_error(descriptor, depth)
    current = descriptor
    for _ in range(depth):
        if not (
            isinstance(current, ParameterizedType)
            and current.arguments
            and isinstance(current.arguments[0], ParameterizedType)
        ):
            raise _depth_error(descriptor, depth)
        current = current.arguments[0]

    if isinstance(current, ParameterizedType):
        if current.arguments:
            return _argument_class(current.arguments[0])
        return current.raw
    if isinstance(current, ClassType):
        return current
    return OBJECT_TYPE


def _depth_error(descriptor: TypeDescriptor, depth: int) -> InvalidDepthError:
    return InvalidDepthError(
        f"The depth is deeper than the nesting of the type: "
        f"type={describe(descriptor)}, depth={depth}"
    )


def _argument_class(argument: TypeDescriptor) -> ClassType:
    if isinstance(argument, ParameterizedType):
        return argument.raw
    if isinstance(argument, ClassType):
        return argument
    if isinstance(argument, TypeVariable):
        if not argument.bounds:
            return OBJECT_TYPE
        bound = argument.bounds[0]
        if isinstance(bound, ParameterizedType):
            return bound.raw
        if isinstance(bound, ClassType):
            return bound
        return OBJECT_TYPE
    return OBJECT_TYPE


def resolve_generic_type(meta: TypeDocMeta) -> Optional[ClassType]:
    """Return the first type argument's class of *meta*, if it has one.

    The reflector's ``generic_type`` wins; otherwise it is extracted from
    ``declared_type``.
    """
    if meta.generic_type is not None:
        return meta.generic_type
    if isinstance(meta.declared_type, ParameterizedType):
        return extract_element_type(meta.declared_type, 0)
    return None


def resolve_item_type(meta: TypeDocMeta) -> Optional[ClassType]:
    """Return the element class of an iterable, looking through one wrapper.

    ``List<String>`` yields ``String``; ``JsonResponse<List<String>>`` also
    yields ``String`` when the full declared type is known.
    """
    generic = resolve_generic_type(meta)
    wrapped = meta.type.has_trait(ClassTrait.ACTION_RESPONSE) or meta.type.has_trait(
        ClassTrait.OPTIONAL
    )
    if (
        wrapped
        and generic is not None
        and generic.has_trait(ClassTrait.ITERABLE)
        and isinstance(meta.declared_type, ParameterizedType)
    ):
        try:
            return extract_element_type(meta.declared_type, 1)
        except InvalidDepthError:
            logger.debug("No element type below %s", meta.type_name)
            return None
    return generic
