"""Logging configuration: a single Rich handler on the root logger"""

import logging
import os

from rich.logging import RichHandler


LOG_LEVEL_ENV = "MDSITE_LOG_LEVEL"


def _resolve_level() -> int:
    """Return the level named by MDSITE_LOG_LEVEL, defaulting to INFO."""
    name = os.getenv(LOG_LEVEL_ENV, "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def configure_logging() -> None:
    """Install the Rich handler once; later calls only update the level."""
    root = logging.getLogger()
    root.setLevel(_resolve_level())
    if any(getattr(h, "_mdsite_managed", False) for h in root.handlers):
        return
    handler = RichHandler(show_path=False, markup=False, rich_tracebacks=True)
    handler._mdsite_managed = True
    root.addHandler(handler)
