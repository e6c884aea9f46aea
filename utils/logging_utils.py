"""Logging setup shared by the CLI and the Streamlit app."""

import logging
from typing import Optional


def setup_logging(level: int = logging.INFO,
                  format_string: Optional[str] = None) -> None:
    """Setup logging configuration.

    Args:
        level: Logging level
        format_string: Custom format string
    """
    if format_string is None:
        if level <= logging.DEBUG:
            format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_string = "%(levelname)s: %(message)s"

    logging.basicConfig(
        level=level,
        format=format_string,
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    # Reduce noise from the UI stack
    logging.getLogger('streamlit').setLevel(logging.WARNING)
    logging.getLogger('altair').setLevel(logging.WARNING)


def verbosity_to_level(verbose: int = 0, quiet: bool = False) -> int:
    """Map -v/-vv/--quiet flags to a logging level."""
    if quiet:
        return logging.ERROR
    if verbose == 0:
        return logging.WARNING
    if verbose == 1:
        return logging.INFO
    return logging.DEBUG
