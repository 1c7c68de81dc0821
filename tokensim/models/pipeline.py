"""Interpretation run data models for the TokenSim output interpreter.

Defines InterpretationContext (shared state object) and PhaseRecord
(per-phase timing log).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from config.settings import InterpreterConfig
from tokensim.models.console import ConsoleReport
from tokensim.models.output import ProjectOutput


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class PhaseRecord:
    """Timing and status record for a single interpretation phase."""

    phase_name: str
    start_time: datetime
    end_time: Optional[datetime] = None
    status: str = "OK"

    @property
    def elapsed_seconds(self) -> float:
        """Compute elapsed time in seconds."""
        if self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time).total_seconds()


@dataclass
class InterpretationContext:
    """Shared state object threaded through the interpretation agents.

    The output phase reads artifacts from ``output_dir``; the console phase
    reads the transcript held in ``stdout``/``stderr``. Each agent writes its
    own result field.
    """

    config: InterpreterConfig
    customer_name: str
    project_id: str
    output_dir: Path

    # ── Console transcript (set when a simulation run was just executed) ──────
    stdout: Optional[str] = None
    stderr: Optional[str] = None

    # ── Agent results (populated progressively) ────────────────────────────────
    output_result: Optional[ProjectOutput] = None
    console_result: Optional[ConsoleReport] = None

    # ── Run metadata ───────────────────────────────────────────────────────────
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    phase_log: List[PhaseRecord] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def project_label(self) -> str:
        return f"{self.customer_name}/{self.project_id}"

    def log_phase_start(self, phase_name: str) -> PhaseRecord:
        """Record the start of a phase."""
        record = PhaseRecord(phase_name=phase_name, start_time=_utcnow())
        self.phase_log.append(record)
        return record

    def log_phase_end(self, record: PhaseRecord, status: str = "OK") -> None:
        """Record the end of a phase."""
        record.end_time = _utcnow()
        record.status = status

    def add_warning(self, warning: str) -> None:
        self.warnings.append(warning)

    def add_error(self, error: str) -> None:
        self.errors.append(error)
