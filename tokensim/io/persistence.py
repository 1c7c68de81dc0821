"""JSON persistence for interpreted TokenSim results.

Interpreted models are written with the same camelCase field names they
expose through ``to_dict()``, so a saved file matches the API response body.
Writes go to a sibling temp file first and are renamed into place.
"""

from __future__ import annotations

import dataclasses
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)


def _encode_default(obj: Any) -> Any:
    """``json.dumps`` fallback for interpreter models.

    Models with ``to_dict()`` come first; other dataclasses fall back to
    ``dataclasses.asdict`` and paths to their string form.
    """
    if callable(getattr(obj, "to_dict", None)):
        return obj.to_dict()
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    if isinstance(obj, Path):
        return str(obj)
    raise TypeError(f"{type(obj).__name__} is not JSON serializable")


def to_json(data: Any, indent: Optional[int] = 2) -> str:
    """Render a model, dict or list as a JSON document (non-ASCII kept as-is)."""
    return json.dumps(data, indent=indent, ensure_ascii=False, default=_encode_default)


def save_json(data: Any, path: str | Path, indent: int = 2) -> Path:
    """Write ``data`` as JSON to ``path`` without leaving a partial file behind.

    Missing parent directories are created. If the final rename fails the
    temp file is removed and the error is re-raised.

    Args:
        data: Model, dict or list to serialize.
        path: Destination file.
        indent: JSON indentation level.

    Returns:
        The destination path.

    Raises:
        TypeError: If part of ``data`` cannot be serialized.
        OSError: If the file cannot be written or renamed.
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    document = to_json(data, indent=indent)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as tmp:
            tmp.write(document)
        os.replace(tmp_name, target)
    except OSError as exc:
        logger.error("Could not write %s: %s", target, exc)
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise

    logger.debug("Wrote %s (%d chars)", target, len(document))
    return target


def load_json(path: str | Path) -> Optional[Any]:
    """Read a previously saved JSON document.

    Returns:
        The parsed document, or None when the file is missing or unreadable.
    """
    source = Path(path)
    try:
        text = source.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug("No saved result at %s", source)
        return None
    except OSError as exc:
        logger.warning("Could not read %s: %s", source, exc)
        return None

    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        logger.warning("Saved result %s is not valid JSON: %s", source, exc)
        return None
