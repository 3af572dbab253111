"""Load and validate environment variables. Uses python-dotenv.

This module is intentionally thin and side-effect free except for loading `.env`.
Callers should use the accessor functions below rather than reading `os.environ`
directly, to keep environment handling consistent.
"""

import math
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
import os

DEFAULT_BACKEND_URL = "https://ucs-backend-gullmaryam00.repl.co/predict"


def _project_root() -> Path:
    """Resolve project root (the directory holding app.py)."""
    return Path(__file__).resolve().parent.parent.parent


def load_config() -> None:
    """
    Load .env from project root. Idempotent; safe to call multiple times.
    Uses override=True to ensure .env values take precedence over existing env vars.
    """
    env_path = _project_root() / ".env"
    load_dotenv(env_path, override=True)


def get_optional(key: str, default: str = "") -> str:
    """Get optional env var; return default if missing or empty."""
    load_config()
    val = os.getenv(key, "").strip()
    return val if val else default


def get_optional_float(key: str, default: Optional[float] = None) -> Optional[float]:
    """Get optional env var as float; return default if missing or invalid."""
    load_config()
    raw = os.getenv(key, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


# --- Public config accessors ---

def backend_url() -> str:
    """Optional: prediction endpoint URL. Defaults to the hosted /predict backend."""
    return get_optional("UCS_BACKEND_URL", DEFAULT_BACKEND_URL)


def request_timeout() -> float | None:
    """
    Optional: request timeout in seconds for the prediction call.
    None (no timeout) when unset, invalid, or not positive.
    """
    val = get_optional_float("UCS_REQUEST_TIMEOUT")
    if val is None or not math.isfinite(val) or val <= 0:
        return None
    return val


def log_level() -> str:
    """Optional: log level name. Default INFO."""
    return get_optional("LOG_LEVEL", "INFO").upper()


def log_file() -> Path | None:
    """Optional: also write logs to this file. Relative paths resolve against the project root."""
    val = get_optional("UCS_LOG_FILE", "")
    if not val:
        return None
    path = Path(val).expanduser()
    return path if path.is_absolute() else _project_root() / path
