"""
Logging configuration for the application.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None,
) -> None:
    """
    Configure logging for the application.

    Logs go to stderr so that command output on stdout stays clean.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR).
        log_file: Optional file to also write logs to.
        format_string: Custom format string.
    """
    handlers = [logging.StreamHandler(sys.stderr)]

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=format_string or DEFAULT_FORMAT,
        handlers=handlers,
        force=True,
    )
