"""Load the metadata file produced by the external reflector.

The reflector writes every discovered action and job, with its types and
annotations, as JSON (``actiondoc-meta.json``) or YAML. A location ending
in ``.yaml``/``.yml`` is read as YAML; anything else is read as JSON and,
unless it ends in ``.json``, retried as YAML when that fails.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import yaml
from pydantic import ValidationError

from actiondoc.exceptions import MetaParseError
from actiondoc.models import DocumentMeta
from actiondoc.sources import read_source, suffix_of

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = (".yaml", ".yml")


def load_document_meta(source: str) -> DocumentMeta:
    """Load and validate the metadata document at *source*.

    Args:
        source: A file path, an ``http(s)`` URL, or ``-`` for stdin.

    Raises:
        MetaParseError: If the source cannot be read, parsed or validated.
    """
    data = parse_meta_text(read_source(source, "metadata", MetaParseError), source)
    try:
        document = DocumentMeta.model_validate(data)
    except ValidationError as exc:
        raise MetaParseError(f"Invalid metadata in {source}: {exc}") from exc
    logger.debug(
        "Loaded metadata from %s: %d actions, %d jobs",
        source,
        len(document.actions),
        len(document.jobs),
    )
    return document


def parse_meta_text(text: str, source: str = "-") -> dict[str, Any]:
    """Parse metadata *text* read from *source* into a plain dict.

    Raises:
        MetaParseError: If the text is not a JSON/YAML object.
    """
    suffix = suffix_of(source)
    if suffix in _YAML_SUFFIXES:
        data = _parse_yaml(text, source)
    else:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            if suffix == ".json":
                raise MetaParseError(f"Invalid JSON in {source}: {exc}") from exc
            data = _parse_yaml(text, source)
    if not isinstance(data, dict):
        raise MetaParseError(
            f"The metadata in {source} must be an object, not {type(data).__name__}"
        )
    return data


def _parse_yaml(text: str, source: str) -> Any:  # noqa: ANN401
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise MetaParseError(f"Invalid JSON or YAML in {source}: {exc}") from exc
