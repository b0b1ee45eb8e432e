"""Read back swagger documents written earlier, for comparison.

The conventional location is ``./swagger.json`` in the working directory.
An absent file is not an error: :func:`read_swagger_json` returns ``None``
("no prior document"). A present but corrupt file is fatal and reported
with its path.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

from actiondoc.exceptions import IOError_
from actiondoc.sources import read_source

DEFAULT_SWAGGER_PATH = Path("./swagger.json")


def read_swagger_json(path: Path = DEFAULT_SWAGGER_PATH) -> Optional[dict[str, Any]]:
    """Return the swagger document stored at *path*, or ``None`` when absent.

    Raises:
        IOError_: If the file cannot be read or is not a JSON object.
    """
    if not path.exists():
        return None
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise IOError_(f"Failed to read the swagger file: {path}: {exc}") from exc
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise IOError_(f"Failed to parse the swagger file: {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise IOError_(
            f"The swagger file must contain a JSON object: {path} "
            f"(got {type(data).__name__})"
        )
    return data


def read_swagger_text(location: str) -> str:
    """Return the raw text of a swagger document at a file path or http(s) URL.

    Raises:
        IOError_: If the location cannot be read or is empty.
    """
    return read_source(location, "swagger", IOError_)
