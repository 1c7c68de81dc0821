"""TokenSim output interpreter utilities package.

All utilities except logging configuration are stateless pure functions.
"""

from tokensim.utils.logging_utils import configure_logging, get_logger, get_project_logger
from tokensim.utils.text import (
    ip_sort_key,
    leading_ipv4,
    non_blank_lines,
    split_csv,
    split_key_value,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "get_project_logger",
    "ip_sort_key",
    "leading_ipv4",
    "non_blank_lines",
    "split_csv",
    "split_key_value",
]
