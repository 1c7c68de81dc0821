"""TokenSim output interpreter orchestrator.

Runs the interpretation agents for one customer project and exposes the two
read paths consumed by the HTTP layer:

  parse_output           — unified node/token model built from the project's artifacts
  extract_console_report — structured report built from a run's stdout/stderr
  get_output_file        — raw text of one named artifact

Usage:
    from tokensim.pipeline import parse_output

    output = parse_output("acme", "ring-expansion")
    payload = output.to_dict()
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from config.settings import InterpreterConfig
from tokensim.agents.base import AgentStatus, BaseAgent
from tokensim.agents.console_agent import ConsoleReportAgent
from tokensim.agents.output_agent import OutputAgent
from tokensim.analysis.console_extractor import extract_console_report as _extract
from tokensim.io.artifact_store import ArtifactStore
from tokensim.models.console import ConsoleReport
from tokensim.models.output import ProjectOutput
from tokensim.models.pipeline import InterpretationContext, PhaseRecord

logger = logging.getLogger(__name__)


def _run_phase(
    context: InterpretationContext,
    phase_name: str,
    agent: BaseAgent,
    result_attr: str,
) -> bool:
    """Execute a single interpretation phase and record its timing.

    If the context already holds a result for ``result_attr``, the phase is skipped.

    Args:
        context: Shared interpretation context.
        phase_name: Human-readable phase label for logs and phase_log.
        agent: Agent instance with a ``run(context)`` method.
        result_attr: Name of the InterpretationContext field to write the result to.

    Returns:
        True if the phase completed, False if it raised.
    """
    if getattr(context, result_attr) is not None:
        logger.info("Pipeline: %s already complete — skipping", phase_name)
        return True

    record: PhaseRecord = context.log_phase_start(phase_name)
    logger.info("Pipeline: starting %s for %s", phase_name, context.project_label)

    try:
        result = agent._run_timed(context)
    except Exception as exc:
        context.log_phase_end(record, status=AgentStatus.FAILED)
        logger.exception("Pipeline: %s raised unhandled exception: %s", phase_name, exc)
        context.add_error(f"{phase_name} failed with exception: {exc}")
        return False

    setattr(context, result_attr, result)
    status = getattr(result, "status", AgentStatus.OK)
    context.log_phase_end(record, status=str(status))

    if not agent.validate_output(result):
        context.add_warning(f"[{phase_name}] produced an unexpected result type")

    for warning in getattr(result, "warnings", None) or []:
        context.add_warning(f"[{phase_name}] {warning}")

    logger.info(
        "Pipeline: %s complete (%.2fs, status=%s)", phase_name, record.elapsed_seconds, status
    )
    return True


def run(
    config: InterpreterConfig,
    customer_name: str,
    project_id: str,
    stdout: Optional[str] = None,
    stderr: Optional[str] = None,
    store: Optional[ArtifactStore] = None,
) -> InterpretationContext:
    """Interpret a project's artifacts and, when given, a run's console transcript.

    Both phases run independently: a failure in one is recorded on the context
    and does not prevent the other.

    Args:
        config: Interpreter configuration (volume path, enrichment defaults).
        customer_name: Customer folder name.
        project_id: Project folder name.
        stdout: Simulator stdout of a just-finished run (enables the console phase).
        stderr: Simulator stderr of that run.
        store: Artifact store override (built from config when omitted).

    Returns:
        InterpretationContext with populated results and the phase timing log.

    Raises:
        ValueError: If the customer name or project ID is malformed.
    """
    store = store or ArtifactStore(config.volume_path, config.output_dir_name)
    context = InterpretationContext(
        config=config,
        customer_name=customer_name,
        project_id=project_id,
        output_dir=store.output_path(customer_name, project_id),
        stdout=stdout,
        stderr=stderr,
    )
    context.start_time = datetime.now(timezone.utc)
    logger.info(
        "Pipeline: interpreting %s → %s (simulator container: %s)",
        context.project_label,
        context.output_dir,
        config.container_name,
    )

    _run_phase(context, "OutputAgent", OutputAgent(store=store), "output_result")

    if stdout is not None or stderr is not None:
        _run_phase(context, "ConsoleReportAgent", ConsoleReportAgent(), "console_result")

    _finalise(context)
    return context


def parse_output(
    customer_name: str,
    project_id: str,
    config: Optional[InterpreterConfig] = None,
    store: Optional[ArtifactStore] = None,
) -> ProjectOutput:
    """Build the unified model and file-level summary for one project.

    Unparseable or missing content never fails this call; the worst case is an
    empty or partially populated model.

    Raises:
        ValueError: If the customer name or project ID is malformed.
        OSError: If the output directory exists but cannot be listed.
    """
    config = config or InterpreterConfig()
    store = store or ArtifactStore(config.volume_path, config.output_dir_name)
    context = InterpretationContext(
        config=config,
        customer_name=customer_name,
        project_id=project_id,
        output_dir=store.output_path(customer_name, project_id),
    )
    return OutputAgent(store=store).run(context)


def extract_console_report(stdout: Optional[str], stderr: Optional[str] = None) -> ConsoleReport:
    """Structure a simulation run's console output (see console_extractor)."""
    return _extract(stdout, stderr)


def get_output_file(
    customer_name: str,
    project_id: str,
    filename: str,
    config: Optional[InterpreterConfig] = None,
) -> str:
    """Return the raw text of one named artifact.

    Raises:
        ArtifactNotFoundError: If the artifact does not exist.
    """
    config = config or InterpreterConfig()
    store = ArtifactStore(config.volume_path, config.output_dir_name)
    return store.get_output_file(customer_name, project_id, filename)


def _finalise(context: InterpretationContext) -> None:
    """Record the end time and emit a summary log line."""
    context.end_time = datetime.now(timezone.utc)
    elapsed = (context.end_time - context.start_time).total_seconds() if context.start_time else 0.0
    completed = [p.phase_name for p in context.phase_log if p.status != AgentStatus.FAILED]
    logger.info(
        "Pipeline: %s complete in %.2fs | phases=%d | warnings=%d | errors=%d",
        context.project_label,
        elapsed,
        len(completed),
        len(context.warnings),
        len(context.errors),
    )
    for err in context.errors:
        logger.error("Pipeline error: %s", err)
