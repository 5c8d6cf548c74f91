"""
Configuration constants and environment lookups for gemini-client.
"""

import os
from typing import Optional


# ─────────────────────────────────────────────────────────────────────
# DEFAULTS - Overridable via environment
# ─────────────────────────────────────────────────────────────────────

DEFAULT_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_TIMEOUT_SECONDS: float = 60.0
DEFAULT_MODEL: str = "models/gemini-1.5-flash"


# ─────────────────────────────────────────────────────────────────────
# INTERNAL CONSTANTS - Wire format
# ─────────────────────────────────────────────────────────────────────

STREAM_LINE_PREFIX: str = "data: "
STREAM_LINE_PREFIX_LENGTH: int = len(STREAM_LINE_PREFIX)
API_KEY_HEADER: str = "x-goog-api-key"


# ─────────────────────────────────────────────────────────────────────
# ENVIRONMENT LOADING
# ─────────────────────────────────────────────────────────────────────

def get_api_key() -> Optional[str]:
    """Get the Gemini API key from GEMINI_API_KEY."""
    value = os.environ.get("GEMINI_API_KEY", "").strip()
    return value or None


def get_base_url() -> str:
    """
    Get the API base URL from environment or default.

    Set GEMINI_BASE_URL in .env to point at a proxy or a mock server.
    """
    return os.environ.get("GEMINI_BASE_URL", DEFAULT_BASE_URL).rstrip("/")


def get_timeout_seconds() -> float:
    """
    Get the HTTP timeout from environment or default.

    Set GEMINI_TIMEOUT_SECONDS in .env (default: 60).
    """
    try:
        return float(os.environ.get("GEMINI_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS))
    except ValueError:
        return DEFAULT_TIMEOUT_SECONDS


def get_default_model() -> str:
    """Get the model used by the CLI when --model is omitted."""
    return os.environ.get("GEMINI_MODEL", DEFAULT_MODEL)
