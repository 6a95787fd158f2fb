"""Environment validation helpers."""

from __future__ import annotations

import logging


def validate_environment(
    access_key: str,
    secret_key: str,
    logger: logging.Logger,
) -> None:
    """Validate the VWS credentials and exit on failure."""
    missing = []
    if not access_key:
        missing.append("VUFORIA_ACCESS_KEY")
    if not secret_key:
        missing.append("VUFORIA_SECRET_KEY")

    if missing:
        logger.error("Missing required environment variables: %s", ", ".join(missing))
        raise SystemExit(1)
