"""Logging setup for the TokenSim output interpreter.

``configure_logging`` applies config/logging.yaml through dictConfig. Library
modules only ever call ``logging.getLogger(__name__)``; the adapter below adds
the customer/project being interpreted to agent log lines.
"""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path
from typing import Any, Dict, MutableMapping, Optional

import yaml

_DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent.parent / "config" / "logging.yaml"
_FALLBACK_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(
    config_path: Optional[str] = None,
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
) -> None:
    """Configure logging for CLI runs.

    Args:
        config_path: YAML dictConfig file (defaults to config/logging.yaml).
            When the file does not exist, ``logging.basicConfig`` is used.
        log_level: Level applied to every configured logger and the root.
        log_file: Also write records to this file.
    """
    path = Path(config_path) if config_path else _DEFAULT_CONFIG_PATH
    if not path.is_file():
        logging.basicConfig(
            level=(log_level or "INFO").upper(),
            format=_FALLBACK_FORMAT,
            filename=log_file,
        )
        return

    with open(path, "r", encoding="utf-8") as f:
        cfg: Dict[str, Any] = yaml.safe_load(f) or {}

    if log_file:
        _add_file_handler(cfg, log_file)
    if log_level:
        _override_levels(cfg, log_level.upper())

    logging.config.dictConfig(cfg)


def _add_file_handler(cfg: Dict[str, Any], log_file: str) -> None:
    cfg.setdefault("handlers", {})["file"] = {
        "class": "logging.FileHandler",
        "formatter": "standard",
        "filename": log_file,
        "encoding": "utf-8",
    }
    for logger_cfg in cfg.get("loggers", {}).values():
        logger_cfg.setdefault("handlers", []).append("file")


def _override_levels(cfg: Dict[str, Any], level: str) -> None:
    for logger_cfg in cfg.get("loggers", {}).values():
        logger_cfg["level"] = level
    if "root" in cfg:
        cfg["root"]["level"] = level


def get_logger(name: str) -> logging.Logger:
    """Return the logger ``tokensim.<name>`` (names already under tokensim are kept)."""
    if name == "tokensim" or name.startswith("tokensim."):
        return logging.getLogger(name)
    return logging.getLogger(f"tokensim.{name}")


class ProjectContextAdapter(logging.LoggerAdapter):
    """Prefix log messages with ``[customer/project]``.

    Usage:
        log = get_project_logger("agents.output_agent", "acme", "ring-expansion")
        log.info("Parsed %d artifacts", 9)
        # [INFO] tokensim.agents.output_agent: [acme/ring-expansion] Parsed 9 artifacts
    """

    def process(
        self, msg: str, kwargs: MutableMapping[str, Any]
    ) -> tuple[str, MutableMapping[str, Any]]:
        customer = self.extra.get("customer_name", "?")
        project = self.extra.get("project_id", "?")
        return f"[{customer}/{project}] {msg}", kwargs


def get_project_logger(name: str, customer_name: str, project_id: str) -> ProjectContextAdapter:
    """Return a logger adapter bound to one customer project."""
    return ProjectContextAdapter(
        get_logger(name), {"customer_name": customer_name, "project_id": project_id}
    )
