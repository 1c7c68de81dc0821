"""ConsoleReportAgent — Structure the console transcript of a simulation run."""

from __future__ import annotations

import logging
from typing import Any

from tokensim.agents.base import BaseAgent
from tokensim.analysis.console_extractor import extract_console_report
from tokensim.models.console import ConsoleReport

logger = logging.getLogger(__name__)


class ConsoleReportAgent(BaseAgent):
    """Turn the stdout/stderr held on the context into a ConsoleReport."""

    name = "ConsoleReportAgent"
    version = "1.0.0"

    def run(self, context: Any) -> ConsoleReport:
        if context.stdout is None and context.stderr is None:
            logger.info("ConsoleReportAgent: no transcript on context, empty report")
        report = extract_console_report(context.stdout, context.stderr)
        if not report.success:
            context.add_warning(
                f"Simulator wrote {len(report.errors)} error line(s) for {context.project_label}"
            )
        return report

    def validate_output(self, result: Any) -> bool:
        return isinstance(result, ConsoleReport)
