"""
Filesystem resolver — templates and artifacts on local disk.

Templates are searched in the configured template directories first and
then in the built-in template directory shipped with the package, much
like a classpath lookup.  Artifacts live under a single output root, one
subdirectory per namespace segment.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TextIO

from archetype.adapters.base import ResourceResolver, namespace_parts, normalize_identifier
from archetype.core.data import BUILTIN_TEMPLATE_DIR
from archetype.core.errors import GenerationIOError, TemplateNotFoundError
from archetype.core.models.declaration import AnnotatedDeclaration

logger = logging.getLogger(__name__)


class FileSystemResolver(ResourceResolver):
    """Resolve templates and artifacts against real directories."""

    def __init__(
        self,
        template_paths: list[Path],
        output_dir: Path,
        encoding: str = "utf-8",
        include_builtin: bool = True,
    ):
        self._template_paths = list(template_paths)
        if include_builtin:
            self._template_paths.append(BUILTIN_TEMPLATE_DIR)
        self._output_dir = output_dir
        self._encoding = encoding
        self.origins: dict[str, str] = {}

    @property
    def name(self) -> str:
        return "filesystem"

    @property
    def template_paths(self) -> list[Path]:
        return list(self._template_paths)

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    # ── Template namespace ──────────────────────────────────────

    def resolve_template(self, identifier: str) -> str:
        relative = normalize_identifier(identifier)
        for root in self._template_paths:
            candidate = root / relative
            if candidate.is_file():
                logger.debug("Template %s resolved to %s", identifier, candidate)
                return str(candidate.resolve())
        raise TemplateNotFoundError(identifier, [str(p) for p in self._template_paths])

    @contextmanager
    def open_template(self, location: str) -> Iterator[TextIO]:
        try:
            handle = open(location, encoding=self._encoding)
        except OSError as e:
            raise GenerationIOError(f"Cannot read template {location}: {e}") from e
        try:
            with handle:
                yield handle
        except (OSError, UnicodeDecodeError) as e:
            raise GenerationIOError(f"Cannot read template {location}: {e}") from e

    # ── Generated-sources namespace ─────────────────────────────

    def _output_path(self, namespace: str, name: str) -> Path:
        return self._output_dir.joinpath(*namespace_parts(namespace, name))

    def output_location(self, namespace: str, name: str) -> str:
        return str(self._output_path(namespace, name))

    def exists_output(self, namespace: str, name: str) -> bool:
        return self._output_path(namespace, name).exists()

    @contextmanager
    def open_output(
        self,
        namespace: str,
        name: str,
        origin: AnnotatedDeclaration | None = None,
    ) -> Iterator[TextIO]:
        path = self._output_path(namespace, name)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            handle = path.open("w", encoding=self._encoding, newline="")
        except OSError as e:
            raise GenerationIOError(f"Cannot create {path}: {e}") from e

        if origin is not None:
            self.origins[str(path)] = origin.qualified_name
        logger.debug("Opened %s for writing", path)

        try:
            with handle:
                yield handle
        except OSError as e:
            raise GenerationIOError(f"Cannot write {path}: {e}") from e
