"""Cluster topology data models for the TokenSim output interpreter.

Defines Node (the per-IP cross-reference record), ModelSummary, and the
UnifiedModel assembled by the model builder from all decoded artifacts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class TokenMapping:
    """One token-to-IP pair from a token-map artifact."""

    token: str
    ip: str

    def to_dict(self) -> Dict[str, str]:
        return {"token": self.token, "ip": self.ip}


@dataclass
class Node:
    """A cluster node keyed by IP, joined across hostname, datacenter, and token artifacts.

    A node with no hostname or datacenter entry keeps ``hostname`` and
    ``datacenter`` as None and falls back to the IP for ``name``.
    """

    ip: str
    name: str
    hostname: Optional[str] = None
    datacenter: Optional[str] = None
    region: Optional[str] = None
    rack: str = ""
    tokens: List[str] = field(default_factory=list)

    @property
    def token_count(self) -> int:
        return len(self.tokens)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ip": self.ip,
            "name": self.name,
            "hostname": self.hostname,
            "datacenter": self.datacenter,
            "region": self.region,
            "rack": self.rack,
            "tokens": list(self.tokens),
            "tokenCount": self.token_count,
        }


@dataclass
class ModelSummary:
    """Aggregate counters over the unified model."""

    total_nodes: int = 0
    total_tokens: int = 0
    total_datacenters: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "totalNodes": self.total_nodes,
            "totalTokens": self.total_tokens,
            "totalDatacenters": self.total_datacenters,
        }


@dataclass
class UnifiedModel:
    """Cross-referenced view of every artifact of one project output directory."""

    nodes: List[Node] = field(default_factory=list)
    datacenters: Dict[str, List[str]] = field(default_factory=dict)
    hostnames: Dict[str, str] = field(default_factory=dict)
    token_mappings: List[TokenMapping] = field(default_factory=list)
    summary: ModelSummary = field(default_factory=ModelSummary)

    def node_by_ip(self, ip: str) -> Optional[Node]:
        """Return the node for ``ip``, or None when the IP was never observed."""
        for node in self.nodes:
            if node.ip == ip:
                return node
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "datacenters": {dc: list(ips) for dc, ips in self.datacenters.items()},
            "hostnames": dict(self.hostnames),
            "tokenMappings": [m.to_dict() for m in self.token_mappings],
            "summary": self.summary.to_dict(),
        }
