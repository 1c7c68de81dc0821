"""Unit tests for tokensim.agents.

Covers:
- OutputAgent.run: happy path, suffix filtering, empty project, unreadable files
- summarize_files: suffix and kind counts
- ConsoleReportAgent.run: report built from context, stderr warning
- BaseAgent._run_timed: result passthrough and re-raise
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from tokensim.agents.base import AgentStatus, BaseAgent
from tokensim.agents.console_agent import ConsoleReportAgent
from tokensim.agents.output_agent import OutputAgent, summarize_files
from tokensim.io.artifact_store import ArtifactStore
from tokensim.models.console import ConsoleReport
from tokensim.models.output import ProjectOutput


# ── Helpers ───────────────────────────────────────────────────────────────────────

class _UnreadableStore(ArtifactStore):
    """Artifact store that fails to read the named files."""

    def __init__(self, volume_path, unreadable):
        super().__init__(volume_path)
        self._unreadable = set(unreadable)

    def read_text(self, path):
        if path.name in self._unreadable:
            raise PermissionError(f"Permission denied: '{path}'")
        return super().read_text(path)


def _make_console_context(stdout=None, stderr=None):
    ctx = MagicMock()
    ctx.stdout = stdout
    ctx.stderr = stderr
    ctx.project_label = "acme/ring-expansion"
    return ctx


# ── OutputAgent ───────────────────────────────────────────────────────────────────

class TestOutputAgent:
    def test_run_happy_path(self, test_context):
        result = OutputAgent().run(test_context)

        assert isinstance(result, ProjectOutput)
        assert result.status == AgentStatus.OK
        assert result.warnings == []
        assert result.model.summary.total_nodes == 4

    def test_only_txt_and_json_files_parsed(self, test_context):
        """notes.md sits in the output directory but is not an artifact."""
        result = OutputAgent().run(test_context)
        names = [parsed.filename for parsed in result.files]

        assert "notes.md" not in names
        assert len(names) == 9

    def test_files_in_name_order(self, test_context):
        names = [parsed.filename for parsed in OutputAgent().run(test_context).files]

        assert names == sorted(names)

    def test_empty_project_returns_empty_model(self, test_config, empty_project_dir):
        from tokensim.models.pipeline import InterpretationContext

        ctx = InterpretationContext(
            config=test_config,
            customer_name="acme",
            project_id="empty-project",
            output_dir=empty_project_dir,
        )
        result = OutputAgent().run(ctx)

        assert result.status == AgentStatus.OK
        assert result.model.nodes == []
        assert result.files == []
        assert result.warnings == [
            "No output files found for project 'empty-project'. Run simulation first."
        ]

    def test_unreadable_file_reported_as_warning(self, test_context, volume_path):
        """An unreadable artifact is decoded as empty and the pass is PARTIAL."""
        store = _UnreadableStore(volume_path, ["tokenmap.txt"])
        result = OutputAgent(store=store).run(test_context)

        assert result.status == AgentStatus.PARTIAL
        assert len(result.warnings) == 1
        assert result.warnings[0].startswith("Could not read tokenmap.txt:")

        parsed = next(p for p in result.files if p.filename == "tokenmap.txt")
        assert parsed.data["totalMappings"] == 0
        assert "Permission denied" in parsed.metadata.read_error
        # 10.0.0.1 only had token-map tokens
        assert result.model.node_by_ip("10.0.0.1") is None
        assert result.model.node_by_ip("10.0.0.2") is not None

    def test_validate_output(self):
        agent = OutputAgent()

        assert agent.validate_output(ProjectOutput(customer_name="a", project_id="b"))
        assert not agent.validate_output(None)


# ── summarize_files ───────────────────────────────────────────────────────────────

class TestSummarizeFiles:
    def test_counts(self, sample_parsed_files):
        summary = summarize_files(sample_parsed_files)

        assert summary.total_files == 9
        assert summary.txt_files == 7
        assert summary.json_files == 2
        assert summary.kind_counts["json"] == 2
        assert summary.kind_counts["ip_tokens"] == 2
        assert set(summary.file_types) == set(summary.kind_counts)

    def test_empty(self):
        assert summarize_files([]).to_dict() == {
            "totalFiles": 0,
            "txtFiles": 0,
            "jsonFiles": 0,
            "fileTypes": [],
            "kindCounts": {},
        }


# ── ConsoleReportAgent ────────────────────────────────────────────────────────────

class TestConsoleReportAgent:
    def test_run_builds_report(self, console_stdout):
        ctx = _make_console_context(stdout=console_stdout)
        report = ConsoleReportAgent().run(ctx)

        assert isinstance(report, ConsoleReport)
        assert report.section("dc-1") is not None
        ctx.add_warning.assert_not_called()

    def test_stderr_adds_context_warning(self):
        ctx = _make_console_context(stdout="", stderr="boom\n")
        report = ConsoleReportAgent().run(ctx)

        assert report.success is False
        ctx.add_warning.assert_called_once()
        assert "1 error line(s)" in ctx.add_warning.call_args[0][0]


# ── BaseAgent ─────────────────────────────────────────────────────────────────────

class TestBaseAgent:
    def test_run_timed_returns_result(self):
        class _Echo(BaseAgent):
            def run(self, context):
                return context

        assert _Echo()._run_timed("ctx") == "ctx"

    def test_run_timed_reraises(self):
        class _Boom(BaseAgent):
            def run(self, context):
                raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            _Boom()._run_timed(None)

    def test_default_validate_output(self):
        class _Echo(BaseAgent):
            def run(self, context):
                return context

        assert _Echo().validate_output(1)
        assert not _Echo().validate_output(None)
