"""Fill the derived names and annotation descriptors of loaded metadata.

The reflector may leave ``simple_type_name`` and ``annotation_list`` empty;
:func:`analyze_document` computes them with a
:class:`~actiondoc.meta.typename.TypeNameAdjuster` and the annotation
normalizer. The input is never modified; a new document is returned.
"""

from __future__ import annotations

import json
import logging
from typing import Optional

from actiondoc.meta.annotation import normalize_annotations, sort_annotations
from actiondoc.meta.typename import TypeNameAdjuster
from actiondoc.models import ActionDocMeta, DocumentMeta, JobDocMeta, TypeDocMeta

logger = logging.getLogger(__name__)


def analyze_document(
    document: DocumentMeta, adjuster: Optional[TypeNameAdjuster] = None
) -> DocumentMeta:
    """Return a copy of *document* with display names, simple names and annotation lists filled."""
    adjuster = adjuster or TypeNameAdjuster()
    actions = [analyze_action(action, adjuster) for action in document.actions]
    jobs = [analyze_job(job, adjuster) for job in document.jobs]
    logger.debug("Analyzed %d actions and %d jobs", len(actions), len(jobs))
    return document.model_copy(update={"actions": actions, "jobs": jobs})


def analyze_action(action: ActionDocMeta, adjuster: TypeNameAdjuster) -> ActionDocMeta:
    update = {
        "type_name": adjuster.adjust_type_name(action.type_name),
        "simple_type_name": action.simple_type_name
        or adjuster.adjust_simple_type_name(action.type_name),
        "annotation_list": action.annotation_list
        or normalize_annotations(sort_annotations(action.annotations)),
        "field_type_doc_metas": [
            analyze_type(meta, adjuster) for meta in action.field_type_doc_metas
        ],
        "parameter_type_doc_metas": [
            analyze_type(meta, adjuster) for meta in action.parameter_type_doc_metas
        ],
        "form_type_doc_meta": _analyze_optional(action.form_type_doc_meta, adjuster),
        "return_type_doc_meta": _analyze_optional(action.return_type_doc_meta, adjuster),
    }
    return action.model_copy(update=update)


def analyze_job(job: JobDocMeta, adjuster: TypeNameAdjuster) -> JobDocMeta:
    update = {
        "type_name": adjuster.adjust_type_name(job.type_name),
        "simple_type_name": job.simple_type_name
        or adjuster.adjust_simple_type_name(job.type_name),
        "field_type_doc_metas": [
            analyze_type(meta, adjuster) for meta in job.field_type_doc_metas
        ],
    }
    return job.model_copy(update=update)


def analyze_type(meta: TypeDocMeta, adjuster: TypeNameAdjuster) -> TypeDocMeta:
    """Analyze one type occurrence and, recursively, its nested properties."""
    if meta.simple_type_name:
        simple = meta.simple_type_name
    elif meta.declared_type is not None or "<" in meta.type_name:
        simple = adjuster.adjust_simple_type_name(meta.type_name)
    else:
        simple = adjuster.adjust_simple_type_name(meta.type)
    update = {
        "type_name": adjuster.adjust_type_name(meta.type_name),
        "simple_type_name": simple,
        "annotation_list": meta.annotation_list
        or normalize_annotations(sort_annotations(meta.annotations)),
        "nested_properties": [
            analyze_type(nested, adjuster) for nested in meta.nested_properties
        ],
    }
    return meta.model_copy(update=update)


def _analyze_optional(
    meta: Optional[TypeDocMeta], adjuster: TypeNameAdjuster
) -> Optional[TypeDocMeta]:
    if meta is None:
        return None
    return analyze_type(meta, adjuster)


def serialize_document_meta(document: DocumentMeta) -> str:
    """Serialize analyzed metadata as pretty-printed JSON with explicit nulls."""
    data = document.model_dump(mode="json")
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"
