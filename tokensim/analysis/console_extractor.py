"""Console report extraction for TokenSim simulation runs.

Reconstructs a structured ConsoleReport from the simulator's free-form
stdout/stderr transcript. The report is semi-formatted text, so extraction is
a set of narrow, independent regex matchers plus one stateful line scanner for
the per-datacenter host table. Nothing here raises on unexpected text: an
unmatched pattern simply leaves its field unset, and the raw transcript is
always preserved.

Pure functions — no I/O or external calls.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Tuple

from tokensim.models.console import (
    ConsoleReport,
    DatacenterSection,
    HostRow,
    OwnershipExtreme,
    SectionSummary,
)
from tokensim.utils.text import non_blank_lines

logger = logging.getLogger(__name__)

_NUMBER = r"\d+(?:\.\d+)?"
_SIGNED_NUMBER = r"[+-]?\d+(?:\.\d+)?"

# ── Transcript-level matchers ─────────────────────────────────────────────────
_CUMULATIVE_RE = re.compile(r"cumulative\s+mode\s*:\s*(true|false)\b", re.IGNORECASE)
_ERROR_LINE_RE = re.compile(r"^\s*ERROR", re.IGNORECASE)
_SECTION_ANCHOR_RE = re.compile(r"data\s+center\s*:", re.IGNORECASE)

# ── Section header matchers ───────────────────────────────────────────────────
_STORAGE_POLICY_RE = re.compile(r"storage\s+policy\s*:\s*(?P<policy>[^\n]+)", re.IGNORECASE)
_POLICY_DESCRIPTION_RE = re.compile(
    r"\bwith\s+(?P<policy>[^\n,]+?)\s+storage\s+policy\s*,\s*(?P<clause>[^\n]+)",
    re.IGNORECASE,
)

# ── Host table ────────────────────────────────────────────────────────────────
_HOST_ROW_RE = re.compile(
    r"^\s*(?P<new>\*)?\s*(?P<host>[A-Za-z0-9][\w.:-]*)\s+"
    rf"(?P<ownership>{_NUMBER})(?:\s*TB)?\s+"
    r"(?P<tokens>\d+)\s+"
    rf"(?P<average>{_NUMBER})(?:\s*TB)?"
    rf"(?:\s*\(\s*(?P<deviation>{_SIGNED_NUMBER})\s*%\s*\))?\s*$",
    re.IGNORECASE,
)
_TABLE_END_RE = re.compile(r"(highest|lowest)\s+average", re.IGNORECASE)

# ── Section summary matchers ──────────────────────────────────────────────────
_HIGHEST_AVERAGE_RE = re.compile(
    rf"highest\s+average[^:\n]*:\s*(?P<value>{_NUMBER})[^(\n]*\(\s*(?P<host>[^)\n]+?)\s*\)",
    re.IGNORECASE,
)
_LOWEST_AVERAGE_RE = re.compile(
    rf"lowest\s+average[^:\n]*:\s*(?P<value>{_NUMBER})[^(\n]*\(\s*(?P<host>[^)\n]+?)\s*\)",
    re.IGNORECASE,
)
_DATACENTER_AVERAGE_RE = re.compile(
    rf"(?:data\s*center|dc)\s+average[^:\n]*:\s*(?P<value>{_NUMBER})",
    re.IGNORECASE,
)
# "2 hosts deviate by more than 2% from the average (h1, h2)"
# "Hosts with deviation greater than 2%: 2 (h1, h2)"
_DEVIATING_HOSTS_RES = (
    re.compile(
        rf"(?P<count>\d+)\s+hosts?\b[^\n]*?(?:more|greater)\s+than\s+(?P<threshold>{_NUMBER})\s*%"
        r"[^\n(]*(?:\((?P<hosts>[^)\n]*)\))?",
        re.IGNORECASE,
    ),
    re.compile(
        r"hosts?\s+(?:with\s+)?(?:a\s+)?deviat\w*\s+(?:of\s+)?(?:more|greater)\s+than\s+"
        rf"(?P<threshold>{_NUMBER})\s*%\s*:\s*(?P<count>\d+)[^\n(]*(?:\((?P<hosts>[^)\n]*)\))?",
        re.IGNORECASE,
    ),
)
_MAX_DEVIATION_RE = re.compile(
    rf"max(?:imum)?\s+deviation(?:\s+degree)?[^:\n]*:\s*(?P<value>{_SIGNED_NUMBER})\s*%",
    re.IGNORECASE,
)
_IMBALANCE_RE = re.compile(
    r"^(?P<line>(?P<lead>[^\n]*?)data\s+imbalance\s+of\s+(?:greater|more)\s+than\s+"
    rf"(?P<threshold>{_NUMBER})\s*%[^\n]*)$",
    re.IGNORECASE | re.MULTILINE,
)
_NEGATION_RE = re.compile(r"\b(?:no|not)\b", re.IGNORECASE)


def extract_console_report(stdout: Optional[str], stderr: Optional[str] = None) -> ConsoleReport:
    """Build a ConsoleReport from one simulation run's console output.

    Args:
        stdout: Simulator standard output (the semi-formatted report).
        stderr: Simulator standard error, if captured.

    Returns:
        ConsoleReport with every section that has at least one host row.
        ``success`` is True iff stderr is empty or whitespace only.
    """
    stdout = stdout or ""
    sections: List[DatacenterSection] = []
    for chunk in split_sections(stdout):
        section = parse_section(chunk)
        if section.hosts:
            sections.append(section)
        else:
            logger.debug("Console extractor: dropping section %r with no host rows", section.name)

    report = ConsoleReport(
        raw=stdout,
        stderr=stderr,
        success=not (stderr or "").strip(),
        cumulative_mode=detect_cumulative_mode(stdout),
        data_centers=sections,
        errors=collect_errors(stdout, stderr),
        warnings=collect_warnings(stdout),
    )
    logger.info(
        "Console extractor: %d datacenter sections, %d warnings, %d errors (success=%s)",
        len(report.data_centers),
        len(report.warnings),
        len(report.errors),
        report.success,
    )
    return report


# ── Transcript-level matchers ───────────────────────────────────────────────────


def detect_cumulative_mode(text: str) -> Optional[bool]:
    """Return the ``Cumulative mode: true|false`` flag, or None when absent."""
    match = _CUMULATIVE_RE.search(text or "")
    if match is None:
        return None
    return match.group(1).lower() == "true"


def collect_errors(stdout: str, stderr: Optional[str] = None) -> List[str]:
    """Every non-blank stderr line, then every stdout line starting with ERROR."""
    errors = non_blank_lines(stderr)
    errors.extend(
        line.strip() for line in (stdout or "").splitlines() if _ERROR_LINE_RE.match(line)
    )
    return errors


def collect_warnings(stdout: str) -> List[str]:
    """Stdout lines mentioning a warning, excluding "no warnings" notices."""
    warnings = []
    for line in non_blank_lines(stdout):
        lowered = line.lower()
        if "warning" in lowered and "no warnings" not in lowered:
            warnings.append(line)
    return warnings


def split_sections(text: str) -> List[str]:
    """Split the transcript into chunks, each starting at a "Data Center:" anchor.

    Text before the first anchor belongs to no section and is discarded.
    """
    starts = [match.start() for match in _SECTION_ANCHOR_RE.finditer(text or "")]
    return [
        text[start:end]
        for start, end in zip(starts, starts[1:] + [len(text)])
    ]


# ── Section parsing ─────────────────────────────────────────────────────────────


def parse_section(chunk: str) -> DatacenterSection:
    """Parse one "Data Center:" chunk into a DatacenterSection.

    Args:
        chunk: Transcript text from one anchor up to the next.

    Returns:
        DatacenterSection (possibly with no hosts; the caller drops those).
    """
    anchor = _SECTION_ANCHOR_RE.match(chunk)
    first_line = chunk[anchor.end():] if anchor else chunk
    name = first_line.split("\n", 1)[0].strip()

    policy_match = _STORAGE_POLICY_RE.search(chunk)
    description_match = _POLICY_DESCRIPTION_RE.search(chunk)

    return DatacenterSection(
        name=name,
        storage_policy=policy_match.group("policy").strip() if policy_match else None,
        policy_description=description_match.group(0).strip() if description_match else None,
        hosts=parse_host_table(chunk),
        summary=parse_section_summary(chunk),
    )


def parse_host_table(chunk: str) -> List[HostRow]:
    """Scan a section for its host ownership table.

    A header line naming both "Host Data Ownership" and "Number of Tokens"
    turns table mode on; a blank line or a "Highest/Lowest average" line turns
    it off. Only lines inside table mode that match the row pattern count.
    """
    rows: List[HostRow] = []
    in_table = False
    for line in chunk.splitlines():
        lowered = line.lower()
        if "host data ownership" in lowered and "number of tokens" in lowered:
            in_table = True
            continue
        if not in_table:
            continue
        if not line.strip() or _TABLE_END_RE.search(line):
            in_table = False
            continue
        row = parse_host_row(line)
        if row is not None:
            rows.append(row)
    return rows


def parse_host_row(line: str) -> Optional[HostRow]:
    """Parse ``[*]host ownership tokens average [(±pct%)]``, or return None."""
    match = _HOST_ROW_RE.match(line)
    if match is None:
        return None
    deviation = match.group("deviation")
    return HostRow(
        host=match.group("host"),
        is_new=match.group("new") is not None,
        host_data_ownership_raw_tb=float(match.group("ownership")),
        number_of_tokens=int(match.group("tokens")),
        average_data_ownership_per_vnode_raw_tb=float(match.group("average")),
        deviation_percent=float(deviation) if deviation is not None else None,
    )


def parse_section_summary(chunk: str) -> SectionSummary:
    """Run each summary matcher independently over a section chunk."""
    summary = SectionSummary(
        highest_average=_match_extreme(_HIGHEST_AVERAGE_RE, chunk),
        lowest_average=_match_extreme(_LOWEST_AVERAGE_RE, chunk),
    )

    dc_average = _DATACENTER_AVERAGE_RE.search(chunk)
    if dc_average:
        summary.datacenter_average = float(dc_average.group("value"))

    deviating = _match_deviating_hosts(chunk)
    if deviating is not None:
        count, threshold, hosts = deviating
        summary.hosts_beyond_threshold_count = count
        summary.deviation_threshold_percent = threshold
        summary.hosts_beyond_threshold = hosts

    max_deviation = _MAX_DEVIATION_RE.search(chunk)
    if max_deviation:
        summary.max_deviation_percent = float(max_deviation.group("value"))

    imbalance = _match_imbalance(chunk)
    if imbalance:
        summary.imbalance = True
        summary.imbalance_threshold_percent = float(imbalance.group("threshold"))
        summary.imbalance_message = imbalance.group("line").strip()

    return summary


def _match_extreme(pattern: re.Pattern, chunk: str) -> Optional[OwnershipExtreme]:
    match = pattern.search(chunk)
    if match is None:
        return None
    return OwnershipExtreme(value=float(match.group("value")), host=match.group("host"))


def _match_deviating_hosts(chunk: str) -> Optional[Tuple[int, float, List[str]]]:
    for pattern in _DEVIATING_HOSTS_RES:
        match = pattern.search(chunk)
        if match is None:
            continue
        hosts_text = match.group("hosts") or ""
        hosts = [host.strip() for host in hosts_text.split(",") if host.strip()]
        return int(match.group("count")), float(match.group("threshold")), hosts
    return None


def _match_imbalance(chunk: str) -> Optional[re.Match]:
    """First imbalance sentence that is not negated ("no data imbalance", "not ...")."""
    for match in _IMBALANCE_RE.finditer(chunk):
        if _NEGATION_RE.search(match.group("lead")):
            logger.debug("Console extractor: ignoring negated imbalance line: %.80s", match.group("line"))
            continue
        return match
    return None
