"""
Resolver base — the contract between the processor and its namespaces.

A resolver fronts two stores:

    template namespace          read-only, path-addressed template files
    generated-sources namespace writable, keyed by (namespace, file name)

The processor only talks to these stores through this protocol, so tests
can inject an in-memory resolver instead of touching the filesystem.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from pathlib import PurePosixPath
from typing import TextIO

from archetype.core.errors import TemplateNotFoundError, ValidationError
from archetype.core.models.declaration import AnnotatedDeclaration


def normalize_identifier(identifier: str) -> str:
    """Validate a template identifier and return it in posix form.

    Identifiers are relative to the template namespace root; absolute
    paths and ``..`` segments never resolve.
    """
    cleaned = identifier.replace("\\", "/").strip()
    path = PurePosixPath(cleaned)
    if not cleaned or path.is_absolute() or ".." in path.parts:
        raise TemplateNotFoundError(identifier)
    return str(path)


def namespace_parts(namespace: str, name: str) -> list[str]:
    """Split a (namespace, name) key into path segments.

    Raises:
        ValidationError: If the name or a namespace segment cannot be a path.
    """
    if not name or "/" in name or "\\" in name or name in (".", ".."):
        raise ValidationError(f"Invalid output name: {name!r}")
    parts = [p for p in namespace.split(".") if p]
    for part in parts:
        if not part.isidentifier():
            raise ValidationError(f"Invalid namespace segment {part!r} in {namespace!r}")
    return [*parts, name]


class ResourceResolver(ABC):
    """Abstract base class for template and output lookup.

    To create a new resolver:
        1. Subclass ResourceResolver
        2. Implement name and the lookup methods
        3. Pass it to ArchetypeProcessor
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Resolver identifier (e.g., 'filesystem', 'memory')."""

    @abstractmethod
    def resolve_template(self, identifier: str) -> str:
        """Return the location of a template.

        Raises:
            TemplateNotFoundError: If nothing matches ``identifier``.
        """

    @abstractmethod
    def open_template(self, location: str) -> AbstractContextManager[TextIO]:
        """Open a resolved template location for reading.

        Raises:
            GenerationIOError: On any underlying read failure.
        """

    @abstractmethod
    def exists_output(self, namespace: str, name: str) -> bool:
        """Whether an artifact already exists. Never creates anything."""

    @abstractmethod
    def open_output(
        self,
        namespace: str,
        name: str,
        origin: AnnotatedDeclaration | None = None,
    ) -> AbstractContextManager[TextIO]:
        """Create (or truncate) an artifact and open it for writing.

        ``origin`` is recorded so every artifact can be traced back to the
        declaration that produced it.

        Raises:
            GenerationIOError: On any underlying write failure.
        """

    @abstractmethod
    def output_location(self, namespace: str, name: str) -> str:
        """Human-readable location of an artifact (for reports)."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
