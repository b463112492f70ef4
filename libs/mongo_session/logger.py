from __future__ import annotations

import logging

from .settings import settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# parent of every logger in the package; set its level to tune store logs
# without touching the host application's root logger
PACKAGE_LOGGER = "mongo_session"


def _level(name: str | None) -> int:
    return getattr(logging, (name or settings.LOG_LEVEL).upper(), logging.INFO)


def setup_logging(level: str | None = None, *, configure_root: bool = True) -> None:
    """
    Apply LOG_LEVEL to the package logger. Standalone scripts also get a
    root handler; services that already configure logging pass
    configure_root=False.
    """
    lvl = _level(level)
    if configure_root:
        logging.basicConfig(level=lvl, format=LOG_FORMAT)
    logging.getLogger(PACKAGE_LOGGER).setLevel(lvl)


def get_logger(name: str | None = None) -> logging.Logger:
    """get_logger("manager") -> the "mongo_session.manager" logger."""
    if not name:
        return logging.getLogger(PACKAGE_LOGGER)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")


__all__ = ["LOG_FORMAT", "PACKAGE_LOGGER", "setup_logging", "get_logger"]
