"""
Marker decorator — the trigger that discovery looks for.

The decorator does nothing at runtime except tag the object; discovery
reads the decorator call statically from the source with ``ast``.
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

T = TypeVar("T")

TEMPLATE_ATTR = "__archetype_template__"


def archetype(template: str) -> Callable[[T], T]:
    """Mark a class for companion-file generation.

    Args:
        template: Template path relative to the template namespace root.
    """
    if not isinstance(template, str) or not template:
        raise TypeError("archetype() requires a non-empty 'template' string")

    def decorate(obj: T) -> T:
        setattr(obj, TEMPLATE_ATTR, template)
        return obj

    return decorate


def template_of(obj: Any) -> str | None:
    """Return the template an object was marked with, or None."""
    return getattr(obj, TEMPLATE_ATTR, None)
