"""TokenSim output interpreter data models package.

All agent input/output schemas are defined here as typed dataclasses.
API-facing dictionaries are produced only through each model's to_dict().
"""

from tokensim.models.artifacts import (
    DATACENTER_KINDS,
    TOKEN_MAP_KINDS,
    FileKind,
    FileMetadata,
    FileSummary,
    ParsedFile,
    RawArtifact,
)
from tokensim.models.console import (
    ConsoleReport,
    DatacenterSection,
    HostRow,
    OwnershipExtreme,
    SectionSummary,
)
from tokensim.models.output import ProjectOutput
from tokensim.models.pipeline import InterpretationContext, PhaseRecord
from tokensim.models.topology import ModelSummary, Node, TokenMapping, UnifiedModel

__all__ = [
    # artifacts
    "FileKind",
    "DATACENTER_KINDS",
    "TOKEN_MAP_KINDS",
    "RawArtifact",
    "FileMetadata",
    "ParsedFile",
    "FileSummary",
    # topology
    "Node",
    "TokenMapping",
    "ModelSummary",
    "UnifiedModel",
    # console
    "ConsoleReport",
    "DatacenterSection",
    "HostRow",
    "OwnershipExtreme",
    "SectionSummary",
    # output
    "ProjectOutput",
    # pipeline
    "InterpretationContext",
    "PhaseRecord",
]
