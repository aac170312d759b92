"""
Logging setup for command-line and configured runs.
"""

import logging
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Configure the root logger.

    Args:
        level: Logging level (name or number)
        log_file: Append to this file instead of writing to stderr
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper())
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        filename=log_file,
        filemode="a",
        force=True,
    )
