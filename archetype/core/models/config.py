"""
Generator configuration model — loaded from archetype.yml.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class ArchetypeConfig(BaseModel):
    """Settings for a generation round.

    Relative paths are resolved against ``root`` (the directory holding
    archetype.yml, or the cwd when no file exists).
    """

    root: Path = Field(default_factory=Path.cwd)

    source_roots: list[str] = Field(default_factory=lambda: ["src"])
    template_paths: list[str] = Field(default_factory=lambda: ["templates"])
    output_dir: str = "build/generated-sources"

    marker: str = "archetype"
    context: Literal["minimal", "declaration"] = "minimal"
    stop_after_first: bool = False
    encoding: str = "utf-8"
    audit: bool = True

    @field_validator("marker")
    @classmethod
    def _marker_is_identifier(cls, v: str) -> str:
        if not v.isidentifier():
            raise ValueError(f"marker must be a Python identifier, got {v!r}")
        return v

    def _resolve(self, value: str) -> Path:
        path = Path(value)
        return path if path.is_absolute() else (self.root / path).resolve()

    @property
    def source_root_paths(self) -> list[Path]:
        return [self._resolve(p) for p in self.source_roots]

    @property
    def template_path_list(self) -> list[Path]:
        return [self._resolve(p) for p in self.template_paths]

    @property
    def output_path(self) -> Path:
        return self._resolve(self.output_dir)
