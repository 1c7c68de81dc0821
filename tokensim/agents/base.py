"""Agent interface shared by the interpretation phases.

Each phase of ``tokensim.pipeline.run`` is an agent: it reads what it needs
from the InterpretationContext and returns a result model, which the
orchestrator stores back on the context.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from tokensim.models.pipeline import InterpretationContext

logger = logging.getLogger(__name__)


class AgentStatus:
    """Result and phase status values.

    OK:       every input was interpreted
    PARTIAL:  a result was produced but some inputs could not be read
    CRITICAL: a result was produced but is not usable
    FAILED:   the agent raised; no result
    """

    OK = "OK"
    PARTIAL = "PARTIAL"
    CRITICAL = "CRITICAL"
    FAILED = "FAILED"


class BaseAgent(ABC):
    """One interpretation phase.

    Subclasses keep no per-project state between calls; the same instance may
    interpret several projects.
    """

    name: str = "BaseAgent"
    version: str = "1.0.0"

    @abstractmethod
    def run(self, context: "InterpretationContext") -> Any:
        """Interpret the inputs held on ``context`` and return the phase result."""

    def validate_output(self, result: Any) -> bool:
        """Return True when ``result`` is a usable phase result (non-None by default)."""
        return result is not None

    def _run_timed(self, context: "InterpretationContext") -> Any:
        """Call run() and log how long it took; exceptions are logged and re-raised."""
        started = time.perf_counter()
        try:
            result = self.run(context)
        except Exception:
            logger.error(
                "%s v%s raised after %.3fs",
                self.name,
                self.version,
                time.perf_counter() - started,
                exc_info=True,
            )
            raise

        logger.info(
            "%s v%s finished in %.3fs (status=%s)",
            self.name,
            self.version,
            time.perf_counter() - started,
            getattr(result, "status", AgentStatus.OK),
        )
        return result
