"""Logging configuration for the CLI."""

from __future__ import annotations

import logging
from typing import Union

from rich.console import Console
from rich.logging import RichHandler

NOISY_LOGGERS = ("boto3", "botocore", "urllib3", "s3transfer")


def setup_logging(level: Union[str, int] = "INFO", verbose: bool = False) -> None:
    """Configure root logging with a Rich handler on stderr.

    Args:
        level: Log level name or number
        verbose: Show timestamps and source paths, and let AWS SDK loggers through
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=verbose,
        show_path=verbose,
        rich_tracebacks=verbose,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    root = logging.getLogger()
    for existing in list(root.handlers):
        if isinstance(existing, RichHandler):
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)

    sdk_level = level if verbose else max(level, logging.WARNING)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(sdk_level)
