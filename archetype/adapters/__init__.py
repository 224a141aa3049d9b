"""Adapters — bindings to the processor's external collaborators.

Public re-exports for convenient access.
"""

from archetype.adapters.base import ResourceResolver
from archetype.adapters.filesystem import FileSystemResolver
from archetype.adapters.mock import InMemoryResolver
from archetype.adapters.templating import (
    CompiledTemplate,
    Jinja2Engine,
    TemplateEngine,
)

__all__ = [
    "CompiledTemplate",
    "FileSystemResolver",
    "InMemoryResolver",
    "Jinja2Engine",
    "ResourceResolver",
    "TemplateEngine",
]
