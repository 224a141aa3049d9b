"""
Messager — the diagnostic sink for a round.

Collects diagnostics for the caller (CLI, tests) and mirrors each one to
the log: errors at ERROR, notes at INFO.
"""

from __future__ import annotations

import logging

from archetype.core.models.declaration import AnnotatedDeclaration
from archetype.core.models.diagnostic import Diagnostic, Severity

logger = logging.getLogger(__name__)


class Messager:
    def __init__(self) -> None:
        self._diagnostics: list[Diagnostic] = []

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return list(self._diagnostics)

    def print_message(
        self,
        severity: Severity,
        message: str,
        declaration: AnnotatedDeclaration | None = None,
    ) -> Diagnostic:
        diagnostic = Diagnostic(severity=severity, message=message, declaration=declaration)
        self._diagnostics.append(diagnostic)
        if severity is Severity.ERROR:
            logger.error("%s", diagnostic.format())
        else:
            logger.info("%s", diagnostic.format())
        return diagnostic

    def error(self, declaration: AnnotatedDeclaration | None, msg: str, *args: object) -> Diagnostic:
        return self.print_message(Severity.ERROR, msg % args if args else msg, declaration)

    def note(self, declaration: AnnotatedDeclaration | None, msg: str, *args: object) -> Diagnostic:
        return self.print_message(Severity.NOTE, msg % args if args else msg, declaration)

    def clear(self) -> None:
        self._diagnostics.clear()
