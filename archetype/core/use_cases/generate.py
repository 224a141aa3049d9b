"""
Generate use case — load config, discover, run one round, record it.

This is the host side of a round: it owns discovery and the concrete
filesystem namespaces, and hands the processor nothing but an iterable
of declarations and injected collaborators.
"""

from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from archetype.adapters.filesystem import FileSystemResolver
from archetype.core.config.loader import ConfigError, load_config
from archetype.core.engine.processor import ArchetypeProcessor
from archetype.core.errors import ArchetypeError
from archetype.core.models.config import ArchetypeConfig
from archetype.core.models.declaration import AnnotatedDeclaration
from archetype.core.models.diagnostic import Diagnostic, RoundReport
from archetype.core.persistence.audit import AuditEntry, AuditWriter
from archetype.core.services.context import get_context_builder
from archetype.core.services.discovery import scan_sources
from archetype.core.services.messager import Messager

logger = logging.getLogger(__name__)


@dataclass
class GenerateResult:
    """Outcome of ``archetype generate``."""

    config: ArchetypeConfig | None = None
    report: RoundReport | None = None
    diagnostics: list[Diagnostic] = field(default_factory=list)
    error: str | None = None
    error_type: str | None = None

    @property
    def ok(self) -> bool:
        if self.error:
            return False
        return self.report is not None and not self.report.has_errors

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "ok": self.ok,
            "output_dir": str(self.config.output_path) if self.config else None,
            "error": self.error,
            "error_type": self.error_type,
        }
        if self.report is not None:
            data.update(self.report.to_dict())
        else:
            data["diagnostics"] = [
                {"severity": d.severity.value, "message": d.message} for d in self.diagnostics
            ]
        return data


@dataclass
class ScanResult:
    """Outcome of ``archetype scan``."""

    config: ArchetypeConfig | None = None
    declarations: list[AnnotatedDeclaration] = field(default_factory=list)
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.error,
            "declarations": [
                {
                    "name": d.qualified_name,
                    "kind": d.kind.value,
                    "template": d.template,
                    "target": d.target().relative_path,
                    "location": d.location,
                }
                for d in self.declarations
            ],
        }


def build_resolver(config: ArchetypeConfig) -> FileSystemResolver:
    return FileSystemResolver(
        template_paths=config.template_path_list,
        output_dir=config.output_path,
        encoding=config.encoding,
    )


def build_processor(
    config: ArchetypeConfig,
    resolver: FileSystemResolver | None = None,
    messager: Messager | None = None,
) -> ArchetypeProcessor:
    """Wire a processor from configuration."""
    return ArchetypeProcessor(
        resolver=resolver or build_resolver(config),
        context_builder=get_context_builder(config.context),
        messager=messager,
        stop_after_first=config.stop_after_first,
        marker=config.marker,
    )


def discover(config: ArchetypeConfig) -> list[AnnotatedDeclaration]:
    """Run discovery over the configured source roots."""
    return list(
        scan_sources(
            config.source_root_paths,
            marker=config.marker,
            exclude=[config.output_path],
            encoding=config.encoding,
        )
    )


def run_scan(config_path: Path | None = None) -> ScanResult:
    result = ScanResult()
    try:
        result.config = load_config(config_path)
        result.declarations = discover(result.config)
    except (ConfigError, ArchetypeError) as e:
        result.error = str(e)
    return result


def run_generate(config_path: Path | None = None) -> GenerateResult:
    """Run one generation round.

    Fatal round errors are captured on the result (with their type) so
    the caller can report them and fail the build.
    """
    result = GenerateResult()
    try:
        result.config = load_config(config_path)
    except ConfigError as e:
        result.error, result.error_type = str(e), type(e).__name__
        return result

    config = result.config
    messager = Messager()
    round_id = f"round-{uuid.uuid4().hex[:8]}"
    start = time.monotonic()
    declarations: list[AnnotatedDeclaration] = []

    try:
        declarations = discover(config)
        logger.info("Discovered %d marked declaration(s)", len(declarations))
        result.report = build_processor(config, messager=messager).process(declarations)
    except ArchetypeError as e:
        logger.error("Generation round failed: %s", e)
        result.error, result.error_type = str(e), type(e).__name__

    result.diagnostics = messager.diagnostics

    if config.audit:
        _write_audit(config, round_id, declarations, result, start)
    return result


def _write_audit(
    config: ArchetypeConfig,
    round_id: str,
    declarations: list[AnnotatedDeclaration],
    result: GenerateResult,
    start: float,
) -> None:
    report = result.report
    if result.error:
        status = "failed"
    elif report is not None and report.halted:
        status = "halted"
    else:
        status = "ok"

    entry = AuditEntry(
        round_id=round_id,
        status=status,
        declarations=len(declarations),
        generated=[r.target for r in report.generated] if report else [],
        skipped=[r.target for r in report.skipped] if report else [],
        invalid=[r.declaration.qualified_name for r in report.invalid] if report else [],
        duration_ms=int((time.monotonic() - start) * 1000),
        error=result.error,
    )
    AuditWriter(project_root=config.root).write(entry)
