"""Logging configuration."""

import logging
import sys
from typing import Optional

from ledger.config.settings import Settings


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Configure application logging."""
    level_name = settings.log_level if settings else "INFO"

    logging.basicConfig(
        level=getattr(logging, level_name.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Reduce noise from third-party libraries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("uvicorn").setLevel(logging.INFO)
