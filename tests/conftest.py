"""Shared pytest fixtures for the TokenSim output interpreter tests.

Conventions:
- Fixture data lives in tests/fixtures/ as static text files
- Volume trees are built under tmp_path; nothing is written elsewhere
- No subprocess calls and no network access in any test
"""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Dict

import pytest

_FIXTURES_DIR = Path(__file__).parent / "fixtures"
_SAMPLE_OUTPUT_DIR = _FIXTURES_DIR / "sample_output"

CUSTOMER = "acme"
PROJECT = "ring-expansion"


# ── Raw fixture data loaders ─────────────────────────────────────────────────────

@pytest.fixture(scope="session")
def console_stdout() -> str:
    """Two-section simulator transcript; only dc-1 carries a host table."""
    return (_FIXTURES_DIR / "sample_console_stdout.txt").read_text(encoding="utf-8")


@pytest.fixture(scope="session")
def artifact_texts() -> Dict[str, str]:
    """Filename → content of every artifact in the sample output directory."""
    return {
        path.name: path.read_text(encoding="utf-8")
        for path in sorted(_SAMPLE_OUTPUT_DIR.iterdir())
        if path.is_file()
    }


# ── Model object fixtures ────────────────────────────────────────────────────────

@pytest.fixture(scope="session")
def sample_parsed_files(artifact_texts):
    """ParsedFile list for the sample .txt/.json artifacts (notes.md excluded)."""
    from tokensim.analysis.decoders import parse_artifact
    from tokensim.models.artifacts import RawArtifact

    return [
        parse_artifact(RawArtifact(filename=name, content=content))
        for name, content in artifact_texts.items()
        if name.endswith((".txt", ".json"))
    ]


# ── Volume fixtures ──────────────────────────────────────────────────────────────

@pytest.fixture
def volume_path(tmp_path) -> Path:
    """Empty shared-volume root under tmp_path."""
    root = tmp_path / "volume"
    root.mkdir()
    return root


@pytest.fixture
def project_output_dir(volume_path) -> Path:
    """Sample artifacts copied into <volume>/customers/acme/projects/ring-expansion/output."""
    output_dir = volume_path / "customers" / CUSTOMER / "projects" / PROJECT / "output"
    shutil.copytree(_SAMPLE_OUTPUT_DIR, output_dir)
    return output_dir


@pytest.fixture
def empty_project_dir(volume_path) -> Path:
    """A project folder whose output directory exists but holds no artifacts."""
    output_dir = volume_path / "customers" / CUSTOMER / "projects" / "empty-project" / "output"
    output_dir.mkdir(parents=True)
    return output_dir


# ── Interpreter config fixture ───────────────────────────────────────────────────

@pytest.fixture
def test_config(volume_path):
    """InterpreterConfig pointed at the tmp volume with a single read worker."""
    from config.settings import InterpreterConfig

    return InterpreterConfig(volume_path=str(volume_path), max_read_workers=1)


@pytest.fixture
def test_context(test_config, project_output_dir):
    """InterpretationContext for the sample project."""
    from tokensim.models.pipeline import InterpretationContext

    return InterpretationContext(
        config=test_config,
        customer_name=CUSTOMER,
        project_id=PROJECT,
        output_dir=project_output_dir,
    )
