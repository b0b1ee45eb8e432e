"""Callables that customize swagger generation beyond the project config.

Every hook is optional. When a hook is absent the matching
:class:`~actiondoc.models.SwaggerOptions` value (or the built-in default)
applies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from actiondoc.models import ActionDocMeta


@dataclass
class SwaggerHooks:
    """Code-level customization points of :class:`~actiondoc.swagger.creator.SwaggerSpecCreator`.

    Attributes:
        default_form_http_method: Verb for an action whose method name
            carries none, e.g. ``lambda a: "post" if a.form_type_doc_meta else "get"``.
        target_action: Returns ``False`` for actions left out of the document.
        success_http_status: Success status of an action; ``None`` falls back
            to the status declared on the action.
        failure_http_status: Failure status -> cause exception names; ``None``
            or an empty mapping yields the default ``400: client error``.
        base_path: Filters the derived ``basePath``.
    """

    default_form_http_method: Optional[Callable[[ActionDocMeta], str]] = None
    target_action: Optional[Callable[[ActionDocMeta], bool]] = None
    success_http_status: Optional[Callable[[ActionDocMeta], Optional[int]]] = None
    failure_http_status: Optional[Callable[[ActionDocMeta], Optional[dict[int, list[str]]]]] = None
    base_path: Optional[Callable[[str], str]] = None
