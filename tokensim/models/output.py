"""Output interpretation result model for the TokenSim output interpreter."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from tokensim.models.artifacts import FileSummary, ParsedFile
from tokensim.models.topology import UnifiedModel


@dataclass
class ProjectOutput:
    """Complete output from the OutputAgent for one project.

    ``to_dict()`` flattens the unified model fields to the top level next to
    the per-file parse results, matching the "get output" response body.
    """

    customer_name: str
    project_id: str
    model: UnifiedModel = field(default_factory=UnifiedModel)
    files: List[ParsedFile] = field(default_factory=list)
    file_summary: FileSummary = field(default_factory=FileSummary)
    warnings: List[str] = field(default_factory=list)
    status: str = "OK"   # "OK", "PARTIAL"

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "customerName": self.customer_name,
            "projectId": self.project_id,
        }
        out.update(self.model.to_dict())
        out["files"] = [parsed.to_dict() for parsed in self.files]
        out["fileSummary"] = self.file_summary.to_dict()
        return out
