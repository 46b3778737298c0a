"""Structured logging helpers.

Records are kept in memory and, when a sink file is configured, appended to
it as JSON lines as they are logged. Nothing is written to stdout, which
belongs to cargo directives.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(slots=True)
class StructuredLogger:
    records: list[dict[str, Any]] = field(default_factory=list)
    sink: Path | None = None

    def log(
        self,
        *,
        operation: str,
        phase: str | None,
        builder: str | None,
        message: str,
        level: str = "info",
        extra: dict[str, Any] | None = None,
    ) -> None:
        record: dict[str, Any] = {
            "level": level,
            "operation": operation,
            "phase": phase,
            "builder": builder,
            "message": message,
        }
        if extra is not None:
            record["extra"] = extra
        self.records.append(record)
        if self.sink is not None:
            self._append(self.sink, record)

    def records_for_phase(self, phase: str) -> list[dict[str, Any]]:
        return [record for record in self.records if record.get("phase") == phase]

    def phases(self) -> list[str]:
        """Phases in the order they were entered, one entry per transition."""
        return [record["phase"] for record in self.records if record.get("phase")]

    def errors(self) -> list[dict[str, Any]]:
        return [record for record in self.records if record["level"] == "error"]

    def _append(self, sink: Path, record: dict[str, Any]) -> None:
        sink.parent.mkdir(parents=True, exist_ok=True)
        # Flushed per record so the file is complete even if build() exits.
        with sink.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record, sort_keys=True, default=str) + "\n")
