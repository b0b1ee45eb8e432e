"""Read input documents from a file path, an http(s) URL, or stdin.

The metadata loader and the swagger reader share :func:`read_source`; each
passes the exception type its callers expect, so a missing metadata file
is a :class:`~actiondoc.exceptions.MetaParseError` while a missing swagger
file is an :class:`~actiondoc.exceptions.IOError_`.
"""

from __future__ import annotations

import sys
from pathlib import Path, PurePosixPath
from typing import Type
from urllib.parse import urlsplit

import httpx

from actiondoc.exceptions import ActionDocError

FETCH_TIMEOUT = 30.0
STDIN = "-"


def is_url(location: str) -> bool:
    return location.startswith(("http://", "https://"))


def suffix_of(location: str) -> str:
    """Lower-cased file extension of a path or of a URL's path component."""
    if is_url(location):
        location = urlsplit(location).path
    return PurePosixPath(location).suffix.lower()


def read_source(location: str, kind: str, error: Type[ActionDocError]) -> str:
    """Return the text stored at *location*.

    Args:
        location: A file path, an ``http(s)`` URL, or ``-`` for stdin.
        kind: What is being read (``"metadata"``, ``"swagger"``), used in
            error messages.
        error: The exception type raised on failure.

    Raises:
        ActionDocError: An instance of *error* if the location cannot be
            read or holds only whitespace.
    """
    if location == STDIN:
        try:
            text = sys.stdin.read()
        except OSError as exc:
            raise error(f"Failed to read {kind} from stdin: {exc}") from exc
        if not text.strip():
            raise error(f"No {kind} received from stdin")
        return text

    if is_url(location):
        text = _fetch(location, kind, error)
    else:
        path = Path(location)
        if not path.is_file():
            raise error(f"The {kind} file is not found: {location}")
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise error(f"Failed to read the {kind} file {location}: {exc}") from exc
    if not text.strip():
        raise error(f"The {kind} at {location} is empty")
    return text


def _fetch(url: str, kind: str, error: Type[ActionDocError]) -> str:
    try:
        response = httpx.get(url, timeout=FETCH_TIMEOUT, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise error(f"HTTP {exc.response.status_code} fetching {kind} from {url}") from exc
    except httpx.RequestError as exc:
        raise error(f"Failed to fetch {kind} from {url}: {exc}") from exc
    return response.text
