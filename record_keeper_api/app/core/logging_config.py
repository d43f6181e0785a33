"""
Logging configuration for the Record Keeper API.

``setup_logging`` attaches console (and optionally file) handlers to
the root logger the first time it is called; later calls only adjust
levels.  Individual loggers can be tuned through ``LOG_LEVELS``, a
comma separated list of ``logger=LEVEL`` pairs, e.g.::

    LOG_LEVELS="record_keeper_api.app.services.record_service=DEBUG,uvicorn.access=WARNING"
"""

import logging
from pathlib import Path
from typing import Dict, Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger(__name__)


def _to_level(name: str) -> Optional[int]:
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else None


def parse_logger_levels(raw: str) -> Dict[str, int]:
    """Parse ``"name=LEVEL,other=LEVEL"`` into a mapping.

    Entries without a logger name or with an unknown level are skipped.
    """
    levels: Dict[str, int] = {}
    for entry in (raw or "").split(","):
        name, sep, level_name = entry.partition("=")
        name = name.strip()
        level = _to_level(level_name) if sep else None
        if not name or level is None:
            if entry.strip():
                logger.warning("Ignoring malformed LOG_LEVELS entry %r", entry.strip())
            continue
        levels[name] = level
    return levels


def setup_logging(
    level: str = "INFO",
    logfile: Optional[str] = None,
    logger_levels: Optional[Dict[str, int]] = None,
) -> None:
    """Configure the root logger and per-logger levels.

    Parameters
    ----------
    level : str
        Root level name (e.g. ``"DEBUG"``).  Case insensitive; unknown
        names fall back to ``INFO``.  Only applied on first setup.
    logfile : Optional[str]
        Path of an additional log file.  Empty means console only.
    logger_levels : Optional[Dict[str, int]]
        Levels for named loggers, see :func:`parse_logger_levels`.
        Applied on every call so each ``create_app`` can tune its own.
    """
    for name, logger_level in (logger_levels or {}).items():
        logging.getLogger(name).setLevel(logger_level)

    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(_to_level(level) or logging.INFO)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
