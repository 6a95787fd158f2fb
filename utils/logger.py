"""Logging setup."""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime
from typing import Optional


def setup_logging(
    log_dir: Optional[str],
    logger_name: str = "vws",
    level: str = "INFO",
) -> logging.Logger:
    """Configure logging handlers and return the named logger.

    With ``log_dir`` set, a timestamped ``vws_*.log`` file is written there
    in addition to stdout.
    """
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        log_path = os.path.join(
            log_dir, f"vws_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
        )
        handlers.insert(0, logging.FileHandler(log_path))
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=handlers,
    )
    return logging.getLogger(logger_name)
