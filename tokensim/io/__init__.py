"""TokenSim output interpreter I/O package.

File read/write operations only — no business logic in this layer.
"""

from tokensim.io.artifact_store import ArtifactNotFoundError, ArtifactStore, validate_identifier
from tokensim.io.persistence import load_json, save_json, to_json

__all__ = [
    "ArtifactNotFoundError",
    "ArtifactStore",
    "validate_identifier",
    "save_json",
    "load_json",
    "to_json",
]
