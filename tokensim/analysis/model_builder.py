"""Unified model construction for the TokenSim output interpreter.

Merges the decoded payloads of every artifact of one project into a single
cross-referenced UnifiedModel keyed by node IP. Pure functions — no I/O.

Merge rules:
  - Files are merged in filename order, so "last write wins" collisions on a
    hostname IP or a datacenter name are reproducible across runs.
  - Nodes exist for every IP seen in a token-map pair or a per-IP token file,
    whether or not a hostname or datacenter entry names it.
  - An IP listed under several datacenters resolves to the first datacenter
    in sorted name order.
  - Nodes are ordered by IP (numeric octet order).
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from config.defaults import DEFAULT_RACK, DEFAULT_REGION, REGION_TAGS
from tokensim.models.artifacts import DATACENTER_KINDS, TOKEN_MAP_KINDS, FileKind, ParsedFile
from tokensim.models.topology import ModelSummary, Node, TokenMapping, UnifiedModel
from tokensim.utils.text import ip_sort_key

logger = logging.getLogger(__name__)


def build_unified_model(
    parsed_files: Iterable[ParsedFile],
    default_region: str = DEFAULT_REGION,
    default_rack: str = DEFAULT_RACK,
    region_tags: Sequence[str] = REGION_TAGS,
) -> UnifiedModel:
    """Build the unified node/datacenter/token model from decoded artifacts.

    Args:
        parsed_files: ParsedFile results for one project, in any order.
        default_region: Region given to nodes whose token file names no region tag.
        default_rack: Rack given to nodes whose hostname entry has no rack part.
        region_tags: Lower-case region tags recognised in per-IP token filenames.

    Returns:
        A freshly built UnifiedModel; identical inputs give identical output.
    """
    files = sorted(parsed_files, key=lambda parsed: parsed.filename)

    hostnames = merge_hostnames(files)
    datacenters = merge_datacenters(files)
    token_mappings = collect_token_mappings(files)
    per_ip_tokens = collect_per_ip_tokens(files)

    pair_tokens: Dict[str, List[str]] = {}
    for mapping in token_mappings:
        pair_tokens.setdefault(mapping.ip, []).append(mapping.token)

    node_ips = sorted(set(pair_tokens) | set(per_ip_tokens), key=ip_sort_key)
    dc_names = sorted(datacenters)

    nodes: List[Node] = []
    for ip in node_ips:
        hostname, _, rack = hostnames.get(ip, "").partition(":")
        hostname, rack = hostname.strip(), rack.strip()

        source_file: Optional[str] = None
        if ip in per_ip_tokens:
            tokens, source_file = per_ip_tokens[ip]
        else:
            tokens = pair_tokens.get(ip, [])

        nodes.append(
            Node(
                ip=ip,
                name=hostname or ip,
                hostname=hostname or None,
                datacenter=resolve_datacenter(ip, datacenters, dc_names),
                region=_resolve_region(source_file, default_region, region_tags),
                rack=rack or default_rack,
                tokens=list(tokens),
            )
        )

    summary = ModelSummary(
        total_nodes=len(nodes),
        total_tokens=sum(node.token_count for node in nodes),
        total_datacenters=len(datacenters),
    )
    logger.debug(
        "Model builder: %d nodes, %d tokens, %d datacenters, %d token mappings",
        summary.total_nodes,
        summary.total_tokens,
        summary.total_datacenters,
        len(token_mappings),
    )

    return UnifiedModel(
        nodes=nodes,
        datacenters=datacenters,
        hostnames=hostnames,
        token_mappings=token_mappings,
        summary=summary,
    )


def merge_hostnames(files: Iterable[ParsedFile]) -> Dict[str, str]:
    """Union the IP→"hostname:rack" mappings of all hostname artifacts (last wins)."""
    hostnames: Dict[str, str] = {}
    for parsed in files:
        if parsed.kind == FileKind.HOSTNAME and isinstance(parsed.data, dict):
            hostnames.update(parsed.data.get("mappings") or {})
    return hostnames


def merge_datacenters(files: Iterable[ParsedFile]) -> Dict[str, List[str]]:
    """Union the datacenter→IPs mappings of all datacenter artifacts (last wins per name)."""
    datacenters: Dict[str, List[str]] = {}
    for parsed in files:
        if parsed.kind in DATACENTER_KINDS and isinstance(parsed.data, dict):
            for dc, ips in (parsed.data.get("datacenters") or {}).items():
                datacenters[dc] = list(ips)
    return datacenters


def collect_token_mappings(files: Iterable[ParsedFile]) -> List[TokenMapping]:
    """Concatenate the (token, ip) pairs of every token-map artifact."""
    mappings: List[TokenMapping] = []
    for parsed in files:
        if parsed.kind in TOKEN_MAP_KINDS and isinstance(parsed.data, dict):
            for pair in parsed.data.get("mappings") or []:
                mappings.append(TokenMapping(token=pair["token"], ip=pair["ip"]))
    return mappings


def collect_per_ip_tokens(files: Iterable[ParsedFile]) -> Dict[str, Tuple[List[str], str]]:
    """Map each IP to the tokens of its dedicated token file and that file's name.

    When several files name the same IP, the last one in iteration order wins.
    """
    per_ip: Dict[str, Tuple[List[str], str]] = {}
    for parsed in files:
        if parsed.kind != FileKind.IP_TOKENS or not isinstance(parsed.data, dict):
            continue
        ip = parsed.data.get("ip")
        if ip:
            per_ip[ip] = (list(parsed.data.get("tokens") or []), parsed.filename)
    return per_ip


def resolve_datacenter(
    ip: str,
    datacenters: Dict[str, List[str]],
    dc_names: Optional[Sequence[str]] = None,
) -> Optional[str]:
    """Return the first datacenter (sorted by name) whose members include ``ip``.

    Args:
        ip: Node IP address.
        datacenters: Datacenter name → member IPs.
        dc_names: Pre-sorted datacenter names (computed when omitted).

    Returns:
        Datacenter name, or None when no datacenter lists the IP.
    """
    for dc in dc_names if dc_names is not None else sorted(datacenters):
        if ip in datacenters[dc]:
            return dc
    return None


def _resolve_region(
    source_file: Optional[str], default_region: str, region_tags: Sequence[str]
) -> str:
    if source_file:
        lowered = source_file.lower()
        for tag in region_tags:
            if tag and tag.lower() in lowered:
                return tag.lower()
    return default_region
