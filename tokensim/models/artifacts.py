"""Artifact data models for the TokenSim output interpreter.

Defines the raw input (RawArtifact), the filename-derived FileKind tags, and
the per-file decode result (ParsedFile) produced by the line-format decoders.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


class FileKind:
    """Semantic artifact kinds, derived from the artifact filename only."""

    HOSTNAME = "hostname"
    DC = "dc"
    EMEA_DC = "emea_dc"
    TOKENMAP = "tokenmap"
    EMEA_TOKEN = "emea_token"
    ALL_TOKENS = "all_tokens"
    IP_TOKENS = "ip_tokens"
    TOKEN_LIST = "token_list"
    JSON = "json"


# Kinds grouped by the part of the unified model they feed
DATACENTER_KINDS = (FileKind.DC, FileKind.EMEA_DC)
TOKEN_MAP_KINDS = (FileKind.TOKENMAP, FileKind.EMEA_TOKEN, FileKind.ALL_TOKENS)


@dataclass
class RawArtifact:
    """A single artifact filename and its raw text content."""

    filename: str
    content: str


@dataclass
class FileMetadata:
    """Size counters and error markers recorded while decoding one artifact."""

    format: Optional[str] = None
    line_count: Optional[int] = None
    token_count: Optional[int] = None
    ip_count: Optional[int] = None
    parse_error: Optional[str] = None
    read_error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize set fields only, using the API's camelCase names."""
        out: Dict[str, Any] = {}
        for key, value in (
            ("format", self.format),
            ("lineCount", self.line_count),
            ("tokenCount", self.token_count),
            ("ipCount", self.ip_count),
            ("parseError", self.parse_error),
            ("readError", self.read_error),
        ):
            if value is not None:
                out[key] = value
        return out


@dataclass(frozen=True)
class ParsedFile:
    """Decoded content of one artifact.

    ``data`` holds the kind-specific payload as plain JSON-compatible values
    (see tokensim.analysis.decoders for the shape of each kind).
    """

    filename: str
    kind: str
    data: Any = field(default_factory=dict)
    metadata: FileMetadata = field(default_factory=FileMetadata)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "filename": self.filename,
            "type": self.kind,
            "data": self.data,
            "metadata": self.metadata.to_dict(),
        }


@dataclass
class FileSummary:
    """Per-pass counts of artifacts by suffix and by kind."""

    total_files: int = 0
    txt_files: int = 0
    json_files: int = 0
    file_types: List[str] = field(default_factory=list)
    kind_counts: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalFiles": self.total_files,
            "txtFiles": self.txt_files,
            "jsonFiles": self.json_files,
            "fileTypes": list(self.file_types),
            "kindCounts": dict(self.kind_counts),
        }
