"""Runtime settings loaded from environment variables."""

from __future__ import annotations

import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _parse_float(value: Optional[str], fallback: Optional[float]) -> Optional[float]:
    if value is None or not value.strip():
        return fallback
    try:
        return float(value)
    except ValueError:
        return fallback


LOG_DIR = os.getenv("LOG_DIR", "logs")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Credentials
VUFORIA_ACCESS_KEY = os.getenv("VUFORIA_ACCESS_KEY", "")
VUFORIA_SECRET_KEY = os.getenv("VUFORIA_SECRET_KEY", "")

# API configuration
VWS_HOST = os.getenv("VWS_HOST", "vws.vuforia.com")
VWS_TIMEOUT = _parse_float(os.getenv("VWS_TIMEOUT"), 30.0)

# Processing waiter
WAIT_DEFAULT_INTERVAL = _parse_float(os.getenv("WAIT_DEFAULT_INTERVAL"), 5.0)
WAIT_EXTENDED_INTERVAL = _parse_float(os.getenv("WAIT_EXTENDED_INTERVAL"), 30.0)
WAIT_TIMEOUT = _parse_float(os.getenv("WAIT_TIMEOUT"), None)
