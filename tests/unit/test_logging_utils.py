"""Unit tests for tokensim.utils.logging_utils.

Covers:
- get_logger: 'tokensim' namespacing
- ProjectContextAdapter: [customer/project] prefix
- configure_logging: YAML config, level override, file handler, basicConfig fallback
"""

from __future__ import annotations

import logging

import pytest

from tokensim.utils.logging_utils import (
    ProjectContextAdapter,
    configure_logging,
    get_logger,
    get_project_logger,
)


@pytest.fixture
def restore_tokensim_logger():
    """Undo handler and level changes made to the 'tokensim' and root loggers by a test."""
    root = logging.getLogger()
    tokensim_logger = logging.getLogger("tokensim")
    saved = {
        logger: (list(logger.handlers), logger.level, logger.propagate)
        for logger in (root, tokensim_logger)
    }
    yield tokensim_logger
    for logger, (handlers, level, propagate) in saved.items():
        for handler in logger.handlers:
            if handler not in handlers:
                handler.close()
        logger.handlers = handlers
        logger.setLevel(level)
        logger.propagate = propagate


# ── get_logger ────────────────────────────────────────────────────────────────────

class TestGetLogger:
    def test_prefixes_namespace(self):
        assert get_logger("agents.output_agent").name == "tokensim.agents.output_agent"

    def test_keeps_existing_namespace(self):
        assert get_logger("tokensim.pipeline").name == "tokensim.pipeline"


# ── ProjectContextAdapter ─────────────────────────────────────────────────────────

class TestProjectContextAdapter:
    def test_message_prefixed_with_project(self):
        adapter = get_project_logger("agents.output_agent", "acme", "ring-expansion")
        msg, _ = adapter.process("Parsed 9 artifacts", {})

        assert isinstance(adapter, ProjectContextAdapter)
        assert msg == "[acme/ring-expansion] Parsed 9 artifacts"

    def test_missing_context_uses_placeholder(self):
        adapter = ProjectContextAdapter(logging.getLogger("tokensim.test"), {})
        msg, _ = adapter.process("hello", {})

        assert msg == "[?/?] hello"


# ── configure_logging ─────────────────────────────────────────────────────────────

class TestConfigureLogging:
    def test_level_override(self, restore_tokensim_logger):
        configure_logging(log_level="debug")

        assert restore_tokensim_logger.level == logging.DEBUG

    def test_file_handler_receives_records(self, tmp_path, restore_tokensim_logger):
        log_file = tmp_path / "interpreter.log"
        configure_logging(log_level="INFO", log_file=str(log_file))

        get_logger("test").info("artifact pass complete")
        for handler in restore_tokensim_logger.handlers:
            handler.flush()

        assert "artifact pass complete" in log_file.read_text(encoding="utf-8")

    def test_missing_yaml_falls_back_to_basic_config(self, tmp_path, restore_tokensim_logger):
        """A missing config file must not raise."""
        configure_logging(config_path=str(tmp_path / "missing.yaml"), log_level="WARNING")
