"""TokenSim output interpreter analysis package.

Pure interpretation functions only — no I/O, no subprocess calls, no side effects.
"""

from tokensim.analysis.classifier import classification_rules, classify
from tokensim.analysis.console_extractor import extract_console_report
from tokensim.analysis.decoders import (
    decode_datacenters,
    decode_hostnames,
    decode_json,
    decode_token_list,
    decode_token_map,
    parse_artifact,
)
from tokensim.analysis.model_builder import build_unified_model

__all__ = [
    "classify",
    "classification_rules",
    "decode_hostnames",
    "decode_datacenters",
    "decode_token_map",
    "decode_token_list",
    "decode_json",
    "parse_artifact",
    "build_unified_model",
    "extract_console_report",
]
