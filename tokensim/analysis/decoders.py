"""Line-format decoders for TokenSim output artifacts.

One decoder per FileKind turns raw artifact text into a kind-specific payload
of plain JSON-compatible values. Decoders never raise on a malformed line:
the line is skipped and the rest of the file is still decoded.

Payload shapes:
    hostname      {format, mappings: {ip: "host:rack"}, entries: [{ip, hostname, rack}]}
    dc / emea_dc  {format, datacenters: {dc: [ip]}, entries: [{datacenter, ips, ipCount}]}
    token maps    {format, mappings: [{token, ip}], byIp: [{ip, tokens, tokenCount}],
                   totalMappings}
    token lists   {format, source, ip, tokens, tokenCount}
    json          the parsed document, or {raw} when it is not valid JSON
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from tokensim.analysis.classifier import classify
from tokensim.models.artifacts import (
    FileKind,
    FileMetadata,
    ParsedFile,
    RawArtifact,
)
from tokensim.utils.text import leading_ipv4, non_blank_lines, split_csv, split_key_value

logger = logging.getLogger(__name__)

JSON_PARSE_ERROR = "Invalid JSON"


# ── Mapping decoders ────────────────────────────────────────────────────────────


def decode_hostnames(text: str) -> Dict[str, Any]:
    """Decode a hostname map (``ip=hostname:rack`` or ``ip:hostname``, one per line).

    Args:
        text: Raw artifact content.

    Returns:
        Hostname payload; later lines win when an IP repeats.
    """
    mappings: Dict[str, str] = {}
    for line in non_blank_lines(text):
        pair = split_key_value(line)
        if pair is None:
            logger.debug("Hostname decoder: skipping line without delimiter: %.80s", line)
            continue
        ip, value = pair
        mappings[ip] = value

    entries = []
    for ip, value in mappings.items():
        hostname, _, rack = value.partition(":")
        entries.append({"ip": ip, "hostname": hostname.strip(), "rack": rack.strip() or None})

    return {"format": "key_value", "mappings": mappings, "entries": entries}


def decode_datacenters(text: str) -> Dict[str, Any]:
    """Decode a datacenter map (``dc=ip1,ip2,...`` or ``dc:ip1,ip2,...``, one per line).

    Args:
        text: Raw artifact content.

    Returns:
        Datacenter payload with empty IP entries trimmed.
    """
    datacenters: Dict[str, List[str]] = {}
    for line in non_blank_lines(text):
        pair = split_key_value(line)
        if pair is None:
            logger.debug("Datacenter decoder: skipping line without delimiter: %.80s", line)
            continue
        dc, ips = pair
        datacenters[dc] = split_csv(ips)

    return {
        "format": "datacenter_mapping",
        "datacenters": datacenters,
        "entries": [
            {"datacenter": dc, "ips": ips, "ipCount": len(ips)}
            for dc, ips in datacenters.items()
        ],
    }


# ── Token-map decoders ──────────────────────────────────────────────────────────


def _pair_from_assignment(fragment: str) -> Optional[Tuple[str, str]]:
    """Parse ``token=ip`` (trailing commas tolerated) into ``(token, ip)``."""
    pair = split_key_value(fragment.strip().rstrip(","), separators=("=",))
    if pair is None:
        return None
    token, value = pair
    ip = value.split(",")[0].strip()
    if not ip:
        return None
    return token, ip


def _pairs_per_line(text: str) -> List[Tuple[str, str]]:
    """Sub-format (a): one ``token=ip`` pair per line."""
    pairs = []
    for line in non_blank_lines(text):
        pair = _pair_from_assignment(line)
        if pair is None:
            logger.debug("Token-map decoder: skipping malformed line: %.80s", line)
            continue
        pairs.append(pair)
    return pairs


def _pairs_comma_joined(text: str) -> List[Tuple[str, str]]:
    """Sub-format (b): ``token=ip, token=ip, ...`` on a single line."""
    pairs = []
    for fragment in split_csv((text or "").replace("\n", ",")):
        pair = _pair_from_assignment(fragment)
        if pair is None:
            logger.debug("Token-map decoder: skipping malformed pair: %.80s", fragment)
            continue
        pairs.append(pair)
    return pairs


def _pairs_pipe_delimited(text: str) -> List[Tuple[str, str]]:
    """Sub-format (c): one ``token|ip`` pair per line."""
    pairs = []
    for line in non_blank_lines(text):
        parts = [part.strip() for part in line.split("|")]
        if len(parts) != 2 or not all(parts):
            logger.debug("Token-map decoder: skipping malformed line: %.80s", line)
            continue
        pairs.append((parts[0], parts[1]))
    return pairs


_TOKEN_MAP_READERS: Dict[str, Callable[[str], List[Tuple[str, str]]]] = {
    FileKind.TOKENMAP: _pairs_per_line,
    FileKind.EMEA_TOKEN: _pairs_comma_joined,
    FileKind.ALL_TOKENS: _pairs_pipe_delimited,
}


def decode_token_map(text: str, kind: str = FileKind.TOKENMAP) -> Dict[str, Any]:
    """Decode any of the three token-to-IP sub-formats into one payload shape.

    Args:
        text: Raw artifact content.
        kind: FileKind.TOKENMAP, FileKind.EMEA_TOKEN, or FileKind.ALL_TOKENS.

    Returns:
        Token-map payload with pairs in file order and a per-IP grouping
        ordered by first appearance.

    Raises:
        ValueError: If ``kind`` is not a token-map kind.
    """
    reader = _TOKEN_MAP_READERS.get(kind)
    if reader is None:
        raise ValueError(f"Not a token-map kind: {kind!r}")

    pairs = reader(text)
    by_ip: Dict[str, List[str]] = {}
    for token, ip in pairs:
        by_ip.setdefault(ip, []).append(token)

    return {
        "format": "token_to_ip",
        "mappings": [{"token": token, "ip": ip} for token, ip in pairs],
        "byIp": [
            {"ip": ip, "tokens": tokens, "tokenCount": len(tokens)}
            for ip, tokens in by_ip.items()
        ],
        "totalMappings": len(pairs),
    }


# ── Token lists and passthrough ─────────────────────────────────────────────────


def decode_token_list(text: str, filename: str) -> Dict[str, Any]:
    """Decode a token list (one token per line, or comma-joined).

    Args:
        text: Raw artifact content.
        filename: Artifact basename; its leading dotted quad names the owning IP.

    Returns:
        Token-list payload; ``ip`` is None when the filename carries no IP.
    """
    tokens: List[str] = []
    for line in non_blank_lines(text):
        tokens.extend(split_csv(line))

    return {
        "format": "token_list",
        "source": filename,
        "ip": leading_ipv4(filename),
        "tokens": tokens,
        "tokenCount": len(tokens),
    }


def decode_json(text: str) -> Tuple[Any, Optional[str]]:
    """Strictly parse a JSON artifact.

    Args:
        text: Raw artifact content.

    Returns:
        ``(document, None)`` on success, or ``({"raw": text}, "Invalid JSON")``
        when the content does not parse (including documents nested too
        deeply for the decoder).
    """
    try:
        return json.loads(text), None
    except (ValueError, RecursionError) as exc:
        logger.debug("JSON decoder: invalid JSON (%s)", exc)
        return {"raw": text}, JSON_PARSE_ERROR


# ── Dispatch ────────────────────────────────────────────────────────────────────


def _hostname_entry(content: str, filename: str, kind: str, line_count: int) -> Tuple[Any, FileMetadata]:
    data = decode_hostnames(content)
    return data, FileMetadata(format=data["format"], line_count=line_count)


def _datacenter_entry(content: str, filename: str, kind: str, line_count: int) -> Tuple[Any, FileMetadata]:
    data = decode_datacenters(content)
    return data, FileMetadata(format=data["format"], line_count=line_count)


def _token_map_entry(content: str, filename: str, kind: str, line_count: int) -> Tuple[Any, FileMetadata]:
    data = decode_token_map(content, kind)
    # emea_token content is one comma-joined line, so it has no line count
    return data, FileMetadata(
        format=data["format"],
        line_count=line_count if kind != FileKind.EMEA_TOKEN else None,
        token_count=data["totalMappings"],
        ip_count=len(data["byIp"]),
    )


def _token_list_entry(content: str, filename: str, kind: str, line_count: int) -> Tuple[Any, FileMetadata]:
    data = decode_token_list(content, filename)
    return data, FileMetadata(format=data["format"], token_count=data["tokenCount"])


def _json_entry(content: str, filename: str, kind: str, line_count: int) -> Tuple[Any, FileMetadata]:
    data, parse_error = decode_json(content)
    return data, FileMetadata(format="json", parse_error=parse_error)


_ArtifactDecoder = Callable[[str, str, str, int], Tuple[Any, FileMetadata]]

_ARTIFACT_DECODERS: Dict[str, _ArtifactDecoder] = {
    FileKind.HOSTNAME: _hostname_entry,
    FileKind.DC: _datacenter_entry,
    FileKind.EMEA_DC: _datacenter_entry,
    FileKind.TOKENMAP: _token_map_entry,
    FileKind.EMEA_TOKEN: _token_map_entry,
    FileKind.ALL_TOKENS: _token_map_entry,
    FileKind.IP_TOKENS: _token_list_entry,
    FileKind.TOKEN_LIST: _token_list_entry,
    FileKind.JSON: _json_entry,
}


def parse_artifact(artifact: RawArtifact) -> ParsedFile:
    """Classify an artifact by filename and decode it with the matching decoder.

    Args:
        artifact: Filename and raw content of one artifact.

    Returns:
        ParsedFile with the decoded payload and size metadata.
    """
    kind = classify(artifact.filename)
    content = artifact.content or ""
    decoder = _ARTIFACT_DECODERS.get(kind, _token_list_entry)
    data, metadata = decoder(content, artifact.filename, kind, len(non_blank_lines(content)))
    return ParsedFile(filename=artifact.filename, kind=kind, data=data, metadata=metadata)
