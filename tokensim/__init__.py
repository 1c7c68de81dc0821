"""TokenSim output interpreter — Normalize TokenSim simulation artifacts and console output.

Public API surface:
    - InterpreterConfig: Runtime configuration
    - parse_output: Unified node/token model for a project's output directory
    - extract_console_report: Structured report from a run's stdout/stderr
    - get_output_file: Raw text of one named artifact
    - run: Run every interpretation phase for a project
"""

__version__ = "1.0.0"
__author__ = "TokenSim Tools Contributors"

from config.settings import InterpreterConfig
from tokensim.pipeline import extract_console_report, get_output_file, parse_output, run

__all__ = [
    "__version__",
    "InterpreterConfig",
    "extract_console_report",
    "get_output_file",
    "parse_output",
    "run",
]
