"""Metadata normalization -- type names, generic elements, annotations.

Sub-modules:

* :mod:`~actiondoc.meta.typename` -- display and simple names, including the
  dotted alias of classification enums.
* :mod:`~actiondoc.meta.generic` -- element-type resolution of nested generics.
* :mod:`~actiondoc.meta.annotation` -- deterministic annotation descriptors.
* :mod:`~actiondoc.meta.loader` -- loading the reflector's metadata file.
* :mod:`~actiondoc.meta.analyzer` -- filling derived names into loaded metadata.
"""

from actiondoc.meta.analyzer import analyze_document
from actiondoc.meta.annotation import normalize_annotations
from actiondoc.meta.generic import extract_element_type
from actiondoc.meta.loader import load_document_meta
from actiondoc.meta.typename import (
    TypeNameAdjuster,
    normalize_display_name,
    normalize_simple_name,
)

__all__ = [
    "TypeNameAdjuster",
    "analyze_document",
    "extract_element_type",
    "load_document_meta",
    "normalize_annotations",
    "normalize_display_name",
    "normalize_simple_name",
]
