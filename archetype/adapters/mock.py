"""
In-memory resolver — test double for both namespaces.

Used to run the processor without touching the filesystem.  Templates
and artifacts are plain dicts, and every call is logged so tests can
assert on what the processor asked for (and what it did not).
"""

from __future__ import annotations

import io
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TextIO

from archetype.adapters.base import ResourceResolver, namespace_parts, normalize_identifier
from archetype.core.errors import GenerationIOError, TemplateNotFoundError
from archetype.core.models.declaration import AnnotatedDeclaration

_LOCATION_PREFIX = "memory:"


class InMemoryResolver(ResourceResolver):
    """Dict-backed resolver for tests.

    Artifacts are keyed by their posix path relative to the output root,
    e.g. ``"com/example/WidgetTest.py"``.
    """

    def __init__(
        self,
        templates: dict[str, str] | None = None,
        outputs: dict[str, str] | None = None,
    ):
        self.templates: dict[str, str] = dict(templates or {})
        self.outputs: dict[str, str] = dict(outputs or {})
        self.origins: dict[str, str] = {}
        self._call_log: list[tuple[str, str]] = []
        self._fail_writes: set[str] = set()

    @property
    def name(self) -> str:
        return "memory"

    @property
    def call_log(self) -> list[tuple[str, str]]:
        """(operation, key) pairs in call order."""
        return self._call_log

    def calls(self, operation: str) -> list[str]:
        """Keys passed to one operation, in call order."""
        return [key for op, key in self._call_log if op == operation]

    def set_write_failure(self, key: str) -> None:
        """Make writes to ``key`` raise GenerationIOError."""
        self._fail_writes.add(key)

    @staticmethod
    def _key(namespace: str, name: str) -> str:
        return "/".join(namespace_parts(namespace, name))

    def resolve_template(self, identifier: str) -> str:
        self._call_log.append(("resolve_template", identifier))
        relative = normalize_identifier(identifier)
        if relative not in self.templates:
            raise TemplateNotFoundError(identifier, [self.name])
        return _LOCATION_PREFIX + relative

    @contextmanager
    def open_template(self, location: str) -> Iterator[TextIO]:
        self._call_log.append(("open_template", location))
        relative = location.removeprefix(_LOCATION_PREFIX)
        if relative not in self.templates:
            raise GenerationIOError(f"Cannot read template {location}: gone")
        yield io.StringIO(self.templates[relative])

    def output_location(self, namespace: str, name: str) -> str:
        return self._key(namespace, name)

    def exists_output(self, namespace: str, name: str) -> bool:
        key = self._key(namespace, name)
        self._call_log.append(("exists_output", key))
        return key in self.outputs

    @contextmanager
    def open_output(
        self,
        namespace: str,
        name: str,
        origin: AnnotatedDeclaration | None = None,
    ) -> Iterator[TextIO]:
        key = self._key(namespace, name)
        self._call_log.append(("open_output", key))
        if key in self._fail_writes:
            raise GenerationIOError(f"Cannot create {key}: mock failure")
        if origin is not None:
            self.origins[key] = origin.qualified_name

        buffer = io.StringIO()
        # The artifact exists as soon as it is opened, like a real file.
        self.outputs[key] = ""
        try:
            yield buffer
        finally:
            self.outputs[key] = buffer.getvalue()
