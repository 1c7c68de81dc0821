"""TokenSim output interpreter configuration package."""

from config.defaults import (
    DEFAULT_RACK,
    DEFAULT_REGION,
    MAX_READ_WORKERS,
    OUTPUT_DIR_NAME,
    VOLUME_PATH,
)
from config.settings import InterpreterConfig

__all__ = [
    "InterpreterConfig",
    "DEFAULT_RACK",
    "DEFAULT_REGION",
    "MAX_READ_WORKERS",
    "OUTPUT_DIR_NAME",
    "VOLUME_PATH",
]
