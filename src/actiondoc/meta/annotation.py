"""Render attached annotations as deterministic constraint descriptors."""

from __future__ import annotations

from typing import Any, Iterable

from actiondoc.models import AnnotationMeta, ClassType


def normalize_annotations(annotations: Iterable[AnnotationMeta]) -> list[str]:
    """Render each annotation as ``Name`` or ``Name{key=value,...}``.

    Only attributes that differ from their declared default are shown,
    in lexical key order. The input order is kept as given; use
    :func:`sort_annotations` first for a stable order.

    Example::

        normalize_annotations([required, length])
        # ["Required", "Length{max=32,min=2}"]
    """
    return [render_annotation(anno) for anno in annotations]


def render_annotation(annotation: AnnotationMeta) -> str:
    attributes = annotation.explicit_attributes()
    if not attributes:
        return annotation.simple_name
    rendered = ",".join(
        f"{key}={_render_value(attributes[key])}" for key in sorted(attributes)
    )
    return f"{annotation.simple_name}{{{rendered}}}"


def sort_annotations(annotations: Iterable[AnnotationMeta]) -> list[AnnotationMeta]:
    """Return *annotations* ordered by simple name."""
    return sorted(annotations, key=lambda anno: anno.simple_name)


def _render_value(value: Any) -> str:  # noqa: ANN401
    if isinstance(value, (list, tuple)):
        if not value:
            return ""
        return "[" + ", ".join(_render_value(item) for item in value) + "]"
    if isinstance(value, ClassType):
        return value.simple_name
    if isinstance(value, dict) and value.get("kind") == "class":
        return ClassType.model_validate(value).simple_name
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
