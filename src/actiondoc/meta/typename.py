"""Normalize type identifiers into display and simple names.

:class:`TypeNameAdjuster` is the customization point: subclass it and
override :meth:`~TypeNameAdjuster.adjust_type_name` to apply domain-specific
renaming. Unless overridden, the display name is the identifier itself.
"""

from __future__ import annotations

import re
from typing import Union

from actiondoc.models import ClassTrait, ClassType, TypeDescriptor

_PACKAGE_SEGMENT = re.compile(r"[a-z0-9]+\.")


class TypeNameAdjuster:
    """Turns type identifiers into the names shown in generated documents."""

    def adjust_type_name(self, identifier: str) -> str:
        """Return the display name of *identifier* (identity unless overridden)."""
        return identifier

    def adjust_simple_type_name(self, target: Union[TypeDescriptor, str]) -> str:
        """Return the unqualified name of a descriptor or raw identifier.

        Classification enums keep their container class, so
        ``org.app.AppCDef$MemberStatus`` becomes ``AppCDef.MemberStatus``.
        Other classes yield their last segment. Any other descriptor is
        rendered, passed through :meth:`adjust_type_name` and stripped of its
        package segments, so ``java.util.List<org.app.ProductRow>`` becomes
        ``List<ProductRow>``. A plain string is only stripped.
        """
        if isinstance(target, ClassType):
            if target.has_trait(ClassTrait.CLASSIFICATION):
                return target.title
            return target.simple_name
        if isinstance(target, str):
            return self.strip_package_segments(target)
        return self.strip_package_segments(self.adjust_type_name(describe(target)))

    def strip_package_segments(self, name: str) -> str:
        """Remove every dot-terminated lowercase-or-digit segment from *name*."""
        return _PACKAGE_SEGMENT.sub("", name)


def describe(descriptor: TypeDescriptor) -> str:
    """Render a descriptor the way it would appear in source code."""
    kind = descriptor.kind
    if kind == "class":
        return descriptor.name
    if kind == "parameterized":
        args = ", ".join(describe(arg) for arg in descriptor.arguments)
        return f"{descriptor.raw.name}<{args}>"
    if kind == "variable":
        return descriptor.name
    if kind == "wildcard":
        if descriptor.lower_bounds:
            return "? super " + " & ".join(describe(b) for b in descriptor.lower_bounds)
        if descriptor.upper_bounds:
            return "? extends " + " & ".join(describe(b) for b in descriptor.upper_bounds)
        return "?"
    return describe(descriptor.component) + "[]"


_default_adjuster = TypeNameAdjuster()


def normalize_display_name(identifier: str) -> str:
    """Display name of *identifier* using the default adjuster."""
    return _default_adjuster.adjust_type_name(identifier)


def normalize_simple_name(target: Union[TypeDescriptor, str]) -> str:
    """Simple name of *target* using the default adjuster."""
    return _default_adjuster.adjust_simple_type_name(target)
