"""Artifact filename classification for the TokenSim output interpreter.

Maps an artifact filename to a FileKind through an ordered table of
(rule name, predicate, kind) entries. The first matching rule wins and a
permissive token-list fallback guarantees every filename gets a kind.
Pure functions; filenames only, never file content.
"""

from __future__ import annotations

import os
import re
from typing import Callable, List, NamedTuple

from tokensim.models.artifacts import FileKind

# Bare IP token files: "192.168.202.212" or "192.168.202.212.txt"
_BARE_IPV4_RE = re.compile(r"^\d+\.\d+\.\d+\.\d+(\.txt)?$")

# IP token files with a label suffix: "1.1.1.1_Logiq_th2_th2.txt"
_IPV4_PREFIX_RE = re.compile(r"^\d+\.\d+\.\d+\.\d+_")


class ClassificationRule(NamedTuple):
    """One entry of the classification table. ``matches`` receives the lower-cased basename."""

    name: str
    matches: Callable[[str], bool]
    kind: str


# Order matters: "emea" variants must be tested before their generic counterparts,
# and IP-named files before any substring rule.
_RULES: List[ClassificationRule] = [
    ClassificationRule(
        "ip_address_name",
        lambda name: bool(_BARE_IPV4_RE.match(name) or _IPV4_PREFIX_RE.match(name)),
        FileKind.IP_TOKENS,
    ),
    ClassificationRule("json_suffix", lambda name: name.endswith(".json"), FileKind.JSON),
    ClassificationRule("hostname", lambda name: "hostname" in name, FileKind.HOSTNAME),
    ClassificationRule("tokenmap", lambda name: "tokenmap" in name, FileKind.TOKENMAP),
    ClassificationRule(
        "emea_token", lambda name: "token" in name and "emea" in name, FileKind.EMEA_TOKEN
    ),
    ClassificationRule("emea_dc", lambda name: "dc" in name and "emea" in name, FileKind.EMEA_DC),
    ClassificationRule("dc", lambda name: "dc" in name, FileKind.DC),
    ClassificationRule("all_tokens", lambda name: "all-tokens" in name, FileKind.ALL_TOKENS),
]

FALLBACK_KIND: str = FileKind.TOKEN_LIST


def classification_rules() -> List[ClassificationRule]:
    """Return a copy of the ordered classification table."""
    return list(_RULES)


def classify(filename: str) -> str:
    """Classify an artifact by its filename.

    Only the basename is considered, lower-cased. Unrecognised names fall back
    to the generic token-list kind rather than being rejected.

    Args:
        filename: Artifact filename or path.

    Returns:
        One of the FileKind constants.
    """
    name = os.path.basename(filename).lower()
    for rule in _RULES:
        if rule.matches(name):
            return rule.kind
    return FALLBACK_KIND
