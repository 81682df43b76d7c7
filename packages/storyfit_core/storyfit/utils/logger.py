"""Logging helpers for storyfit.

Library modules only create loggers; handlers are configured by applications
(the CLI calls :func:`setup_logging`).
"""

import logging
import sys
from typing import Optional, Union

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: Union[int, str] = logging.WARNING, fmt: Optional[str] = None) -> logging.Logger:
    """
    Configure console logging for the ``storyfit`` logger tree.

    Args:
        level: Logging level (name or number)
        fmt: Optional log format

    Returns:
        The configured ``storyfit`` logger
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)

    root = logging.getLogger("storyfit")
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))

    root.addHandler(handler)
    root.setLevel(level)
    return root
