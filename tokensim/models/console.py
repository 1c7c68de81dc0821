"""Console report data models for the TokenSim output interpreter.

Defines the structured view of a simulator stdout/stderr transcript: one
DatacenterSection per "Data Center:" block, each holding its host balance
table (HostRow) and the balance statistics printed beneath it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class HostRow:
    """A single row of a datacenter's host ownership table."""

    host: str
    is_new: bool = False                      # Row carried the leading '*' marker
    host_data_ownership_raw_tb: float = 0.0
    number_of_tokens: int = 0
    average_data_ownership_per_vnode_raw_tb: float = 0.0
    deviation_percent: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "host": self.host,
            "isNew": self.is_new,
            "hostDataOwnershipRawTB": self.host_data_ownership_raw_tb,
            "numberOfTokens": self.number_of_tokens,
            "averageDataOwnershipPerVNodeRawTB": self.average_data_ownership_per_vnode_raw_tb,
            "deviationPercent": self.deviation_percent,
        }


@dataclass
class OwnershipExtreme:
    """Highest or lowest per-vnode average together with the host that holds it."""

    value: float
    host: str

    def to_dict(self) -> Dict[str, Any]:
        return {"value": self.value, "host": self.host}


@dataclass
class SectionSummary:
    """Balance statistics printed below a datacenter's host table."""

    highest_average: Optional[OwnershipExtreme] = None
    lowest_average: Optional[OwnershipExtreme] = None
    datacenter_average: Optional[float] = None
    deviation_threshold_percent: Optional[float] = None
    hosts_beyond_threshold_count: Optional[int] = None
    hosts_beyond_threshold: List[str] = field(default_factory=list)
    max_deviation_percent: Optional[float] = None
    imbalance: bool = False
    imbalance_threshold_percent: Optional[float] = None
    imbalance_message: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "highestAverage": self.highest_average.to_dict() if self.highest_average else None,
            "lowestAverage": self.lowest_average.to_dict() if self.lowest_average else None,
            "datacenterAverage": self.datacenter_average,
            "deviationThresholdPercent": self.deviation_threshold_percent,
            "hostsBeyondThresholdCount": self.hosts_beyond_threshold_count,
            "hostsBeyondThreshold": list(self.hosts_beyond_threshold),
            "maxDeviationPercent": self.max_deviation_percent,
            "imbalance": self.imbalance,
            "imbalanceThresholdPercent": self.imbalance_threshold_percent,
            "imbalanceMessage": self.imbalance_message,
        }


@dataclass
class DatacenterSection:
    """One "Data Center:" block of the simulator report."""

    name: str
    storage_policy: Optional[str] = None
    policy_description: Optional[str] = None
    hosts: List[HostRow] = field(default_factory=list)
    summary: SectionSummary = field(default_factory=SectionSummary)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "storagePolicy": self.storage_policy,
            "policyDescription": self.policy_description,
            "hosts": [row.to_dict() for row in self.hosts],
            "summary": self.summary.to_dict(),
        }


@dataclass
class ConsoleReport:
    """Structured report reconstructed from one simulation run's console output.

    ``success`` only reflects whether stderr was blank; it is not an exit code.
    """

    raw: str = ""
    stderr: Optional[str] = None
    success: bool = True
    cumulative_mode: Optional[bool] = None
    data_centers: List[DatacenterSection] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def section(self, name: str) -> Optional[DatacenterSection]:
        """Return the section for datacenter ``name``, or None."""
        for section in self.data_centers:
            if section.name == name:
                return section
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "raw": self.raw,
            "stderr": self.stderr,
            "cumulativeMode": self.cumulative_mode,
            "dataCenters": [section.to_dict() for section in self.data_centers],
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }
