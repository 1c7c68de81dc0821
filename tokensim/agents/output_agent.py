"""OutputAgent — Interpret the artifact files of one project's output directory.

Lists the project's artifacts, reads them concurrently, decodes each one by
its filename-derived kind, and merges the results into a UnifiedModel. A
missing directory or an empty one yields an empty model; an unreadable file is
decoded as empty content and reported as a warning.
"""

from __future__ import annotations

import dataclasses
import logging
from collections import Counter
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from tokensim.agents.base import AgentStatus, BaseAgent
from tokensim.analysis.decoders import parse_artifact
from tokensim.analysis.model_builder import build_unified_model
from tokensim.io.artifact_store import ArtifactStore
from tokensim.models.artifacts import FileSummary, ParsedFile, RawArtifact
from tokensim.models.output import ProjectOutput
from tokensim.utils.logging_utils import get_project_logger

logger = logging.getLogger(__name__)


class OutputAgent(BaseAgent):
    """Build the unified node/token model for a project from its artifact files.

    Args:
        store: Artifact store to read from; built from the context config when omitted.
    """

    name = "OutputAgent"
    version = "1.0.0"

    def __init__(self, store: Optional[ArtifactStore] = None) -> None:
        self._store = store

    def run(self, context: Any) -> ProjectOutput:
        """Parse every .txt and .json artifact of the context's project.

        Args:
            context: InterpretationContext with config and output_dir.

        Returns:
            ProjectOutput with the unified model, per-file results, and file summary.
        """
        cfg = context.config
        log = get_project_logger(__name__, context.customer_name, context.project_id)
        store = self._store or ArtifactStore(cfg.volume_path, cfg.output_dir_name)
        result = ProjectOutput(customer_name=context.customer_name, project_id=context.project_id)

        suffixes = (cfg.text_suffix, cfg.json_suffix)
        artifact_paths = [
            path
            for path in store.list_artifacts(context.output_dir)
            if path.name.lower().endswith(suffixes)
        ]

        if not artifact_paths:
            log.info("No artifact files in %s, returning empty model", context.output_dir)
            result.warnings.append(
                f"No output files found for project '{context.project_id}'. Run simulation first."
            )
            result.model = build_unified_model(
                [], cfg.default_region, cfg.default_rack, cfg.region_tags
            )
            return result

        contents, read_errors = self._read_all(store, artifact_paths, cfg.max_read_workers)

        parsed_files: List[ParsedFile] = []
        for path in artifact_paths:
            parsed = parse_artifact(RawArtifact(filename=path.name, content=contents[path.name]))
            if path.name in read_errors:
                parsed = dataclasses.replace(
                    parsed,
                    metadata=dataclasses.replace(parsed.metadata, read_error=read_errors[path.name]),
                )
            parsed_files.append(parsed)

        for filename, error in sorted(read_errors.items()):
            result.warnings.append(f"Could not read {filename}: {error}")
        if read_errors:
            result.status = AgentStatus.PARTIAL

        result.files = parsed_files
        result.file_summary = summarize_files(parsed_files, cfg.text_suffix, cfg.json_suffix)
        result.model = build_unified_model(
            parsed_files, cfg.default_region, cfg.default_rack, cfg.region_tags
        )

        log.info(
            "Parsed %d artifacts (%d unreadable): %d nodes, %d tokens, %d datacenters",
            len(parsed_files),
            len(read_errors),
            result.model.summary.total_nodes,
            result.model.summary.total_tokens,
            result.model.summary.total_datacenters,
        )
        return result

    def validate_output(self, result: Any) -> bool:
        return isinstance(result, ProjectOutput)

    # ── Private helpers ─────────────────────────────────────────────────────────

    def _read_all(
        self, store: ArtifactStore, paths: List[Path], max_workers: int
    ) -> Tuple[Dict[str, str], Dict[str, str]]:
        """Read artifacts in parallel.

        Returns:
            ``(contents, read_errors)`` keyed by filename; unreadable files map
            to empty content plus an error message.
        """
        contents: Dict[str, str] = {}
        read_errors: Dict[str, str] = {}
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            future_map = {executor.submit(store.read_text, path): path for path in paths}
            for future in as_completed(future_map):
                path = future_map[future]
                try:
                    contents[path.name] = future.result()
                except OSError as exc:
                    logger.warning("OutputAgent: could not read %s: %s", path, exc)
                    contents[path.name] = ""
                    read_errors[path.name] = str(exc)
        return contents, read_errors


def summarize_files(
    parsed_files: List[ParsedFile], text_suffix: str = ".txt", json_suffix: str = ".json"
) -> FileSummary:
    """Count parsed artifacts by suffix and by kind.

    Args:
        parsed_files: ParsedFile results of one pass.
        text_suffix: Suffix of line-oriented text artifacts.
        json_suffix: Suffix of JSON passthrough artifacts.

    Returns:
        FileSummary with kinds listed in first-seen order.
    """
    kind_counts = Counter(parsed.kind for parsed in parsed_files)
    return FileSummary(
        total_files=len(parsed_files),
        txt_files=sum(1 for p in parsed_files if p.filename.lower().endswith(text_suffix)),
        json_files=sum(1 for p in parsed_files if p.filename.lower().endswith(json_suffix)),
        file_types=list(kind_counts),
        kind_counts=dict(kind_counts),
    )
