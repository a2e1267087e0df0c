"""
Logging configuration for crudgen.

Usage in modules:
    from crudgen.logging_config import get_logger
    logger = get_logger(__name__)

Every logger lives under the "crudgen" hierarchy. Handlers are attached
only by setup_logging(), which the CLI calls once at startup; library
callers keep whatever logging setup they already have.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_ROOT_LOGGER = "crudgen"

_FMT_FILE = "%(asctime)s %(levelname)-7s %(name)s:%(lineno)d %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger inside the crudgen hierarchy.

    Args:
        name: Module ``__name__``; names outside the package are nested
            under the crudgen root logger.

    Returns:
        logging.Logger instance
    """
    if not name or name == _ROOT_LOGGER:
        return logging.getLogger(_ROOT_LOGGER)
    if name.startswith(_ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_ROOT_LOGGER}.{name}")


def setup_logging(level: str = "WARNING", log_file: str | None = None) -> None:
    """Configure console (rich) and optional file logging.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path of a file receiving full-detail records.
    """
    numeric_level = _parse_level(level)

    root = logging.getLogger(_ROOT_LOGGER)
    root.handlers.clear()

    # stdout is reserved for command output (e.g. --json)
    console = RichHandler(
        console=Console(stderr=True),
        show_path=numeric_level <= logging.DEBUG,
        markup=False,
    )
    console.setLevel(numeric_level)
    root.addHandler(console)

    effective_level = numeric_level
    if log_file:
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        root.addHandler(fh)
        effective_level = logging.DEBUG

    root.setLevel(effective_level)
    root.propagate = False


def _parse_level(level: str | None) -> int:
    """Convert a level name to its numeric constant, defaulting to WARNING."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
