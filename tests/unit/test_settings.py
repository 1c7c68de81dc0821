"""Unit tests for config.settings.InterpreterConfig."""

from __future__ import annotations

from config.defaults import DEFAULT_REGION, MAX_READ_WORKERS, OUTPUT_DIR_NAME, VOLUME_PATH
from config.settings import InterpreterConfig


class TestInterpreterConfig:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("VOLUME_PATH", raising=False)
        monkeypatch.delenv("DEFAULT_REGION", raising=False)
        config = InterpreterConfig()

        assert config.volume_path == VOLUME_PATH
        assert config.output_dir_name == OUTPUT_DIR_NAME
        assert config.default_region == DEFAULT_REGION
        assert config.max_read_workers == MAX_READ_WORKERS

    def test_environment_overrides(self, monkeypatch):
        """Deployment-specific values are read from the environment at construction."""
        monkeypatch.setenv("VOLUME_PATH", "/mnt/tokensim")
        monkeypatch.setenv("DEFAULT_REGION", "apac")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        config = InterpreterConfig()

        assert config.volume_path == "/mnt/tokensim"
        assert config.default_region == "apac"
        assert config.log_level == "DEBUG"

    def test_explicit_values_win_over_environment(self, monkeypatch):
        monkeypatch.setenv("VOLUME_PATH", "/mnt/tokensim")

        assert InterpreterConfig(volume_path="/tmp/vol").volume_path == "/tmp/vol"

    def test_read_workers_clamped(self):
        assert InterpreterConfig(max_read_workers=0).max_read_workers == 1

    def test_region_tags_normalised(self):
        config = InterpreterConfig(region_tags=["EMEA", "", "Apac"])

        assert config.region_tags == ["emea", "apac"]
