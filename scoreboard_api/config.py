# scoreboard_api/config.py
from __future__ import annotations

import logging
import os
from dotenv import load_dotenv

# Load .env from project root
load_dotenv()


def _env(name: str, default: str = "") -> str:
    value = os.environ.get(name)
    return default if value is None else value.strip()


def _env_int(name: str, default: int) -> int:
    # malformed numbers fall back to the default; range checks live in validate_config()
    value = _env(name)
    digits = value[1:] if value.startswith("-") else value
    return int(value) if digits.isdecimal() else default


def _env_flag(name: str, default: bool = False) -> bool:
    return _env(name, "1" if default else "0") == "1"


# -------------------------
# Undo history
# -------------------------
HISTORY_LIMIT: int = _env_int("SCOREBOARD_HISTORY_LIMIT", 20)


# -------------------------
# Persistence (key-value slot)
# -------------------------
# "memory" keeps the slot in-process; "file" writes <key>.json under STORAGE_DIR
STORAGE_BACKEND: str = _env("SCOREBOARD_STORAGE_BACKEND", "memory").lower()
STORAGE_DIR: str = _env("SCOREBOARD_STORAGE_DIR", ".scoreboard")
STORAGE_KEY: str = _env("SCOREBOARD_STORAGE_KEY", "cricketState")


# -------------------------
# Delivery parsing
# -------------------------
# If 1, unrecognised delivery tokens are rejected instead of scored as a dot ball
STRICT_TOKENS: bool = _env_flag("SCOREBOARD_STRICT_TOKENS")


# -------------------------
# Logging
# -------------------------
LOG_LEVEL: str = _env("SCOREBOARD_LOG_LEVEL", "INFO").upper()


def validate_config() -> None:
    if HISTORY_LIMIT <= 0:
        raise RuntimeError("SCOREBOARD_HISTORY_LIMIT must be positive")

    if STORAGE_BACKEND not in {"memory", "file"}:
        raise RuntimeError("SCOREBOARD_STORAGE_BACKEND must be 'memory' or 'file'")

    if STORAGE_BACKEND == "file" and not STORAGE_DIR:
        raise RuntimeError("SCOREBOARD_STORAGE_DIR is required when SCOREBOARD_STORAGE_BACKEND=file")

    if not STORAGE_KEY:
        raise RuntimeError("SCOREBOARD_STORAGE_KEY must be non-empty")

    if not isinstance(logging.getLevelName(LOG_LEVEL), int):
        raise RuntimeError(f"SCOREBOARD_LOG_LEVEL is not a logging level: {LOG_LEVEL}")
