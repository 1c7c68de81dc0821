"""Read-only access to simulation artifacts on the shared TokenSim volume.

Resolves the customer/project folder layout and lists and reads artifact
files. No business logic — file I/O only.

Volume layout:
    <volume>/customers/<customer>/projects/<project>/output/<artifact>
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List

from config.defaults import IDENTIFIER_PATTERN, OUTPUT_DIR_NAME

logger = logging.getLogger(__name__)

_IDENTIFIER_RE = re.compile(IDENTIFIER_PATTERN)


class ArtifactNotFoundError(FileNotFoundError):
    """Raised when a specifically requested artifact does not exist."""


def validate_identifier(value: str, label: str = "identifier") -> str:
    """Check a customer name or project ID against the allowed pattern.

    Args:
        value: Candidate identifier.
        label: Human-readable name used in the error message.

    Returns:
        The identifier with surrounding whitespace removed.

    Raises:
        ValueError: If the identifier is empty or has disallowed characters.
    """
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValueError(f"{label} is required")
    if not _IDENTIFIER_RE.match(cleaned):
        raise ValueError(
            f"{label} must contain only alphanumeric characters, hyphens, and underscores"
        )
    return cleaned


class ArtifactStore:
    """Locate, list, and read the artifacts of customer projects.

    Args:
        volume_path: Root of the shared TokenSim volume.
        output_dir_name: Name of the per-project artifact directory.
    """

    def __init__(self, volume_path: str | Path, output_dir_name: str = OUTPUT_DIR_NAME) -> None:
        self.volume_path = Path(volume_path)
        self.output_dir_name = output_dir_name

    def customer_path(self, customer_name: str) -> Path:
        return self.volume_path / "customers" / validate_identifier(customer_name, "Customer name")

    def project_path(self, customer_name: str, project_id: str) -> Path:
        return (
            self.customer_path(customer_name)
            / "projects"
            / validate_identifier(project_id, "Project ID")
        )

    def output_path(self, customer_name: str, project_id: str) -> Path:
        return self.project_path(customer_name, project_id) / self.output_dir_name

    def list_artifacts(self, directory: str | Path) -> List[Path]:
        """List the regular files of a directory, sorted by name.

        Args:
            directory: Directory to list.

        Returns:
            Sorted file paths; an empty list when the directory does not exist.

        Raises:
            OSError: If the directory exists but cannot be listed.
        """
        directory = Path(directory)
        if not directory.is_dir():
            logger.debug("Artifact directory not found: %s", directory)
            return []
        return sorted(
            (path for path in directory.iterdir() if path.is_file()),
            key=lambda path: path.name,
        )

    def read_text(self, path: str | Path) -> str:
        """Read an artifact as UTF-8 text (undecodable bytes are replaced).

        Raises:
            ArtifactNotFoundError: If the file does not exist.
            OSError: If the file exists but cannot be read.
        """
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8", errors="replace") as f:
                return f.read()
        except FileNotFoundError as exc:
            raise ArtifactNotFoundError(f"File not found: {path}") from exc

    def get_output_file(self, customer_name: str, project_id: str, filename: str) -> str:
        """Read one named artifact from a project's output directory.

        Args:
            customer_name: Customer folder name.
            project_id: Project folder name.
            filename: Artifact basename.

        Returns:
            Raw artifact text.

        Raises:
            ArtifactNotFoundError: If the artifact does not exist or the name
                points outside the output directory.
        """
        output_dir = self.output_path(customer_name, project_id)
        candidate = output_dir / filename
        if not filename or candidate.resolve().parent != output_dir.resolve():
            raise ArtifactNotFoundError(f"Output file '{filename}' not found")
        if not candidate.is_file():
            raise ArtifactNotFoundError(f"Output file '{filename}' not found")
        return self.read_text(candidate)
