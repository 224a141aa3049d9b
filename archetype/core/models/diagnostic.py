"""
Diagnostic and receipt models — what a round reports back.

Diagnostics are messages for the user (error / note), tied to the
declaration they are about.  Receipts record the outcome of each
declaration the processor handled.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field

from archetype.core.models.declaration import AnnotatedDeclaration


class Severity(str, Enum):
    ERROR = "error"
    NOTE = "note"


class Diagnostic(BaseModel):
    """One message emitted during a round."""

    severity: Severity
    message: str
    declaration: AnnotatedDeclaration | None = None

    def format(self) -> str:
        """Render as ``location: severity: message``."""
        if self.declaration is not None:
            return f"{self.declaration.location}: {self.severity.value}: {self.message}"
        return f"{self.severity.value}: {self.message}"


class GenerationReceipt(BaseModel):
    """Outcome of processing a single declaration.

    Attributes:
        declaration: The declaration that was processed.
        status:      generated, skipped (target existed) or invalid.
        target:      Target path relative to the output root.
    """

    declaration: AnnotatedDeclaration
    status: Literal["generated", "skipped", "invalid"]
    target: str = ""

    @property
    def generated(self) -> bool:
        return self.status == "generated"

    def to_dict(self) -> dict[str, Any]:
        return {
            "declaration": self.declaration.qualified_name,
            "kind": self.declaration.kind.value,
            "template": self.declaration.template,
            "status": self.status,
            "target": self.target,
        }


class RoundReport(BaseModel):
    """Everything one call to the processor produced."""

    receipts: list[GenerationReceipt] = Field(default_factory=list)
    diagnostics: list[Diagnostic] = Field(default_factory=list)
    halted: bool = False

    @property
    def generated(self) -> list[GenerationReceipt]:
        return [r for r in self.receipts if r.status == "generated"]

    @property
    def skipped(self) -> list[GenerationReceipt]:
        return [r for r in self.receipts if r.status == "skipped"]

    @property
    def invalid(self) -> list[GenerationReceipt]:
        return [r for r in self.receipts if r.status == "invalid"]

    @property
    def has_errors(self) -> bool:
        return any(d.severity is Severity.ERROR for d in self.diagnostics)

    def to_dict(self) -> dict[str, Any]:
        return {
            "halted": self.halted,
            "generated": len(self.generated),
            "skipped": len(self.skipped),
            "invalid": len(self.invalid),
            "receipts": [r.to_dict() for r in self.receipts],
            "diagnostics": [
                {"severity": d.severity.value, "message": d.message, "location": (
                    d.declaration.location if d.declaration else None
                )}
                for d in self.diagnostics
            ],
        }
