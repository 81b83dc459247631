"""
Paths, logging setup, config load/save, and the CLI/file config merge.
"""

import os
import sys
import json
import logging
from pathlib import Path

from .constants import (
    LOG_NAME, LOG_MAX_BYTES, POLL_INTERVAL_SEC, REQUEST_TIMEOUT_SEC,
)


# ─── Paths ───────────────────────────────────────────────────────
# One config + log per user. Override with GERRIT_CHECK_HOME.
_FOLDER_NAME = ".gerrit-check"

BASE_DIR = Path(os.environ.get("GERRIT_CHECK_HOME") or Path.home() / _FOLDER_NAME)

CONFIG_FILE = BASE_DIR / "config.json"
LOG_FILE = BASE_DIR / "gerrit-check.log"

DEFAULTS = {
    "server": "",
    "project": "",
    "username": "",
    "pollIntervalSec": POLL_INTERVAL_SEC,
    "requestTimeoutSec": REQUEST_TIMEOUT_SEC,
    "pruneStaleRevisions": True,
}


# ─── Logging ─────────────────────────────────────────────────────

log = logging.getLogger(LOG_NAME)

_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def resolve_log_level(value) -> int:
    """Map a level name ("debug", "INFO", ...) to a logging level. Defaults to INFO."""
    name = (value or "").strip().upper()
    level = logging.getLevelName(name) if name else logging.INFO
    return level if isinstance(level, int) else logging.INFO


def setup_logging(level=logging.INFO, log_file=None):
    """
    Attach a file handler and a stdout handler to the shared logger.
    The log file is emptied first when it has grown past LOG_MAX_BYTES.
    """
    log_file = Path(log_file) if log_file else LOG_FILE
    log_file.parent.mkdir(parents=True, exist_ok=True)

    try:
        if log_file.exists() and log_file.stat().st_size > LOG_MAX_BYTES:
            log_file.write_text("")
    except OSError as e:
        print(f"Could not truncate {log_file}: {e}", file=sys.stderr)

    formatter = logging.Formatter(_FORMAT, datefmt=_DATEFMT)

    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)

    for handler in list(log.handlers):
        log.removeHandler(handler)
        handler.close()
    log.addHandler(file_handler)
    log.addHandler(console_handler)
    log.setLevel(level)
    log.propagate = False
    return log


# ─── Config Management ──────────────────────────────────────────

def load_config(path=None):
    """Load config from disk. Returns dict or None."""
    path = Path(path) if path else CONFIG_FILE
    if path.exists():
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            log.warning("Ignoring unreadable config %s: %s", path, e)
            return None
        if not isinstance(data, dict):
            log.warning("Ignoring config %s: expected a JSON object", path)
            return None
        return data
    return None


def save_config(config, path=None):
    """Save config dict to disk."""
    path = Path(path) if path else CONFIG_FILE
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=2)
    log.info("Config saved to %s", path)


def merge_config(stored, overrides):
    """
    Layer DEFAULTS < stored file < CLI overrides.
    None values in overrides mean "not given" and are skipped.
    """
    merged = dict(DEFAULTS)
    if stored:
        merged.update({k: v for k, v in stored.items() if k in DEFAULTS})
    merged.update({k: v for k, v in overrides.items() if v is not None})
    return merged


def get_number(config, key, default):
    """Read a positive number from the config dict, falling back to default."""
    value = config.get(key, default)
    if isinstance(value, bool):
        return default
    try:
        value = float(value)
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default
