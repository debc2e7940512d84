#!/usr/bin/env python3
import os

# ---------- config helpers ----------

def env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value

PROVIDER         = os.getenv("FOXPRO_PROVIDER", "VFPOLEDB.1").strip()
OUTPUT_ENCODING  = os.getenv("FOXPRO_EXPORT_ENCODING", "utf-8").strip()
FETCH_BATCH_SIZE = env_int("FOXPRO_FETCH_BATCH", 500)

# ---------- fixed formats ----------

SEPARATOR          = "|"
DATABASE_EXTENSION = ".dbc"
CSV_EXTENSION      = ".csv"
MANIFEST_NAME      = "manifest.json"

# fixed width of the text read back for Double, Currency and Numeric columns
COERCED_TEXT_WIDTH = 40

CONNECTION_STRING_FORMAT = "Provider={provider};Data Source={path};"
SELECT_COMMAND_FORMAT    = "SELECT {columns} FROM {table}"
