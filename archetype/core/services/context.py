"""
Context builders — what a template gets to see.

The default context is empty.  Builders must be pure functions of the
declaration so that a richer builder can be swapped in without touching
the processor.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from archetype.core.models.declaration import AnnotatedDeclaration


class ContextBuilder(ABC):
    @abstractmethod
    def build(self, declaration: AnnotatedDeclaration) -> dict[str, Any]:
        """Return a fresh render context for one declaration."""


class EmptyContextBuilder(ContextBuilder):
    """Minimal builder: every template renders against ``{}``."""

    def build(self, declaration: AnnotatedDeclaration) -> dict[str, Any]:
        return {}


class DeclarationContextBuilder(ContextBuilder):
    """Expose the declaration's identity to the template.

    Keys:
        name, namespace, qualified_name, module, kind, template, test_name
    """

    def build(self, declaration: AnnotatedDeclaration) -> dict[str, Any]:
        target = declaration.target()
        return {
            "name": declaration.simple_name,
            "namespace": declaration.namespace,
            "qualified_name": declaration.qualified_name,
            "module": declaration.module or declaration.namespace,
            "kind": declaration.kind.value,
            "template": declaration.template,
            "test_name": target.name.rsplit(".", 1)[0],
        }


_BUILDERS: dict[str, type[ContextBuilder]] = {
    "minimal": EmptyContextBuilder,
    "declaration": DeclarationContextBuilder,
}


def get_context_builder(name: str) -> ContextBuilder:
    """Look up a builder by its config name."""
    try:
        return _BUILDERS[name]()
    except KeyError:
        raise ValueError(
            f"Unknown context builder {name!r}; expected one of {sorted(_BUILDERS)}"
        ) from None
