"""Text processing utilities for the TokenSim output interpreter.

Pure helpers shared by the line-format decoders and the model builder.
All functions are stateless with no I/O or external calls.
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple, Union

# Leading dotted quad of an artifact filename, e.g. "192.168.202.212.txt"
_LEADING_IPV4_RE = re.compile(r"^(\d+\.\d+\.\d+\.\d+)")

_DOTTED_QUAD_RE = re.compile(r"^\d+\.\d+\.\d+\.\d+$")


def non_blank_lines(text: Optional[str]) -> List[str]:
    """Split text on newlines and return the stripped, non-empty lines.

    Args:
        text: Raw artifact or transcript text (None is treated as empty).

    Returns:
        List of stripped lines with blank lines removed.
    """
    if not text:
        return []
    return [line.strip() for line in text.splitlines() if line.strip()]


def split_key_value(line: str, separators: Tuple[str, ...] = ("=", ":")) -> Optional[Tuple[str, str]]:
    """Split a ``key<sep>value`` line on the first separator present.

    Separators are tried in order, so ``10.0.0.1=web1:rack2`` splits on ``=``
    and keeps ``web1:rack2`` intact.

    Args:
        line: A single artifact line.
        separators: Candidate separators in priority order.

    Returns:
        ``(key, value)`` with surrounding whitespace removed, or None when no
        separator is present or either side is empty.
    """
    for sep in separators:
        if sep in line:
            key, _, value = line.partition(sep)
            key, value = key.strip(), value.strip()
            if key and value:
                return key, value
            return None
    return None


def split_csv(value: str) -> List[str]:
    """Split a comma-joined value and drop empty entries."""
    return [item.strip() for item in value.split(",") if item.strip()]


def leading_ipv4(filename: str) -> Optional[str]:
    """Extract the leading dotted-quad IP address from an artifact filename.

    Args:
        filename: Artifact basename (e.g. "1.1.1.1_Logiq_th2_th2.txt").

    Returns:
        The IP string, or None when the filename does not start with one.
    """
    match = _LEADING_IPV4_RE.match(filename)
    return match.group(1) if match else None


def ip_sort_key(ip: str) -> Tuple[int, Union[Tuple[int, ...], str]]:
    """Sort key placing dotted quads first in numeric octet order, then other keys.

    Args:
        ip: IP address or any other node key.

    Returns:
        Tuple usable as a ``sorted`` key.
    """
    if _DOTTED_QUAD_RE.match(ip):
        return (0, tuple(int(octet) for octet in ip.split(".")))
    return (1, ip)
