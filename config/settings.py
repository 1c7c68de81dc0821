"""TokenSim output interpreter — InterpreterConfig and environment-based loading.

All runtime configuration flows through InterpreterConfig. Paths and defaults
that differ per deployment come from environment variables (or a .env file).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

from config.defaults import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_RACK,
    DEFAULT_REGION,
    JSON_ARTIFACT_SUFFIX,
    MAX_READ_WORKERS,
    OUTPUT_DIR_NAME,
    REGION_TAGS,
    TEXT_ARTIFACT_SUFFIX,
    TOKENSIM_CONTAINER_NAME,
    VOLUME_PATH,
)

# Load .env file if present; silently skip if missing
load_dotenv()


@dataclass
class InterpreterConfig:
    """Single configuration object threaded through the interpretation agents.

    Volume layout, artifact discovery, and node enrichment defaults live here.
    """

    # ── Shared volume ──────────────────────────────────────────────────────────
    volume_path: str = field(default_factory=lambda: os.getenv("VOLUME_PATH", VOLUME_PATH))
    output_dir_name: str = OUTPUT_DIR_NAME
    container_name: str = field(
        default_factory=lambda: os.getenv("TOKENSIM_CONTAINER_NAME", TOKENSIM_CONTAINER_NAME)
    )

    # ── Artifact discovery ─────────────────────────────────────────────────────
    text_suffix: str = TEXT_ARTIFACT_SUFFIX
    json_suffix: str = JSON_ARTIFACT_SUFFIX
    max_read_workers: int = MAX_READ_WORKERS

    # ── Node enrichment ────────────────────────────────────────────────────────
    default_region: str = field(
        default_factory=lambda: os.getenv("DEFAULT_REGION", DEFAULT_REGION)
    )
    region_tags: List[str] = field(default_factory=lambda: list(REGION_TAGS))
    default_rack: str = DEFAULT_RACK

    # ── Logging ────────────────────────────────────────────────────────────────
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL))

    def __post_init__(self) -> None:
        if self.max_read_workers < 1:
            self.max_read_workers = 1
        self.region_tags = [tag.lower() for tag in self.region_tags if tag]
