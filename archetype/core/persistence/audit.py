"""
Audit ledger — append-only record of generation rounds.

Each ``archetype generate`` run appends one NDJSON line: what was
generated, what was skipped, and the error if the round failed.  Entries
are never rewritten.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

DEFAULT_AUDIT_DIR = ".state"
DEFAULT_AUDIT_FILE = "audit.ndjson"


class AuditEntry(BaseModel):
    """One generation round."""

    timestamp: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())
    round_id: str = ""
    status: str = ""               # ok, halted, failed

    declarations: int = 0
    generated: list[str] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)
    invalid: list[str] = Field(default_factory=list)
    duration_ms: int = 0

    error: str | None = None


class AuditWriter:
    """Append-only ledger writer.

    The ledger file and its directory are created on first write.
    """

    def __init__(self, path: Path | None = None, project_root: Path | None = None):
        if path is not None:
            self._path = path
        else:
            self._path = (project_root or Path(".")) / DEFAULT_AUDIT_DIR / DEFAULT_AUDIT_FILE

    @property
    def path(self) -> Path:
        return self._path

    def write(self, entry: AuditEntry) -> None:
        """Append an entry.

        A failed ledger write is logged, not raised: the round's own
        outcome has already happened and must not be masked.
        """
        line = json.dumps(entry.model_dump(mode="json"), ensure_ascii=False) + "\n"
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("a", encoding="utf-8") as f:
                f.write(line)
            logger.debug("Audit entry written: %s (%s)", entry.round_id, entry.status)
        except OSError as e:
            logger.error("Failed to write audit entry: %s", e)

    def read_all(self) -> list[AuditEntry]:
        """Read every entry, oldest first. Corrupt lines are skipped."""
        if not self._path.is_file():
            return []

        entries = []
        with self._path.open("r", encoding="utf-8") as f:
            for line_num, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    entries.append(AuditEntry.model_validate_json(line))
                except ValueError as e:
                    logger.warning("Skipping corrupt audit entry at line %d: %s", line_num, e)
        return entries

    def read_recent(self, n: int = 20) -> list[AuditEntry]:
        return self.read_all()[-n:]
