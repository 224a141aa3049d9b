"""
Error taxonomy for a generation round.

Only ``ValidationError`` is turned into a diagnostic by the processor.
Everything else is fatal for the round and propagates to the caller with
the underlying cause chained via ``raise ... from``.
"""

from __future__ import annotations


class ArchetypeError(Exception):
    """Base class for all generation failures."""


class ValidationError(ArchetypeError):
    """A declaration cannot be generated for.

    Raised when the marker sits on something other than a class, or when
    the declaration's namespace or name cannot map to an output path.
    """


class TemplateNotFoundError(ArchetypeError):
    """A template identifier does not resolve in the template namespace."""

    def __init__(self, identifier: str, searched: list[str] | None = None):
        self.identifier = identifier
        self.searched = searched or []
        where = f" (searched: {', '.join(self.searched)})" if self.searched else ""
        super().__init__(f"Template not found: {identifier}{where}")


class GenerationIOError(ArchetypeError):
    """Reading a template or writing an artifact failed."""


class RenderError(ArchetypeError):
    """The template engine failed to compile or execute a template."""


class DiscoveryError(ArchetypeError):
    """A source file could not be scanned for marker declarations."""
