"""
Logging configuration for the share ledger.

Modules log through ``logging.getLogger(__name__)``; the host calls
``configure_logging`` once at startup. Logging must not change program
behavior and never logs anything beyond keys, amounts and error codes.
"""

import logging
import sys
from typing import Final, Optional, TextIO

LOG_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO", stream: Optional[TextIO] = None) -> None:
    """Configure root logging for the ledger.

    Args:
        level: The log level string (DEBUG, INFO, WARNING, ERROR).
        stream: Output stream, stdout by default.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=stream or sys.stdout,
        force=True,
    )
