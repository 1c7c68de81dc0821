"""TokenSim output interpreter — All default values and configuration constants.

All tuneable values live here. Never hard-code magic numbers in source files.
Import constants from this module; override via InterpreterConfig at runtime.
"""

# ── Shared volume layout ───────────────────────────────────────────────────────
# Root of the volume shared with the TokenSim runtime container
VOLUME_PATH: str = "/home/ats/files"

# Directory (inside each project folder) where a simulation run writes artifacts
OUTPUT_DIR_NAME: str = "output"

# Name of the container running the simulator (reported in logs only)
TOKENSIM_CONTAINER_NAME: str = "ats-runtime"

# Customer and project identifiers must match this pattern
IDENTIFIER_PATTERN: str = r"^[A-Za-z0-9_-]+$"

# ── Artifact discovery ─────────────────────────────────────────────────────────
# Line-oriented text artifacts decoded by the line-format decoders
TEXT_ARTIFACT_SUFFIX: str = ".txt"

# Passthrough artifacts parsed as strict JSON
JSON_ARTIFACT_SUFFIX: str = ".json"

# Maximum concurrent artifact reads per parse pass
MAX_READ_WORKERS: int = 4

# ── Node enrichment ────────────────────────────────────────────────────────────
# Region assigned to a node when its token file name carries no region tag
DEFAULT_REGION: str = "emea"

# Region tags recognised in per-IP token file names
REGION_TAGS: tuple = ("emea",)

# Rack assigned to a node when its hostname entry has no rack component
DEFAULT_RACK: str = ""

# ── Logging ────────────────────────────────────────────────────────────────────
DEFAULT_LOG_LEVEL: str = "INFO"
