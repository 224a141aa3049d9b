"""
Declaration models — what discovery finds and where its output goes.
"""

from __future__ import annotations

from enum import Enum
from pathlib import PurePosixPath

from pydantic import BaseModel, ConfigDict

# Fixed naming convention for generated companion files
TARGET_SUFFIX = "Test"
SOURCE_EXTENSION = ".py"


class ElementKind(str, Enum):
    """Kind of a decorated declaration."""

    CLASS = "class"
    FUNCTION = "function"
    METHOD = "method"

    @property
    def is_class_like(self) -> bool:
        return self is ElementKind.CLASS


class AnnotatedDeclaration(BaseModel):
    """A single declaration carrying the marker decorator.

    Supplied per round by the discovery feed and never persisted.

    Attributes:
        kind:        What sort of declaration this is.
        namespace:   Dotted package path ("" for a module at a source root).
        simple_name: Unqualified declaration name.
        module:      Dotted module the declaration lives in.
        template:    Template identifier from the decorator payload.
        source_path: File the declaration was found in (traceability only).
        lineno:      Line of the declaration in ``source_path``.
    """

    model_config = ConfigDict(frozen=True)

    kind: ElementKind
    namespace: str = ""
    simple_name: str
    template: str
    module: str = ""
    source_path: str = ""
    lineno: int = 0

    @property
    def qualified_name(self) -> str:
        if self.namespace:
            return f"{self.namespace}.{self.simple_name}"
        return self.simple_name

    @property
    def location(self) -> str:
        """``file:line`` for messages, or the qualified name if unknown."""
        if self.source_path:
            return f"{self.source_path}:{self.lineno}"
        return self.qualified_name

    def target(self) -> GenerationTarget:
        """Derive where this declaration's companion file is written."""
        return GenerationTarget(
            namespace=self.namespace,
            name=f"{self.simple_name}{TARGET_SUFFIX}{SOURCE_EXTENSION}",
        )


class GenerationTarget(BaseModel):
    """A (namespace, file name) pair in the generated-sources namespace."""

    model_config = ConfigDict(frozen=True)

    namespace: str = ""
    name: str

    @property
    def relative_path(self) -> str:
        """Posix-style path of the target relative to the output root."""
        parts = [p for p in self.namespace.split(".") if p]
        return str(PurePosixPath(*parts, self.name))
