from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
import sys


_LOGGER: logging.Logger | None = None
_NAMESPACES = ("partyflow", "partyflow_io")


def _work_dir() -> Path:
    env = os.getenv("PARTYFLOW_WORK_DIR")
    if env:
        return Path(env)
    return Path.cwd() / "partyflow_work"


def get_logger(log_dir: Path | None = None) -> logging.Logger:
    """Return a configured application logger writing to <work>/logs/app.log.

    Creates the directory if needed. Uses rotating file handler. Both the
    ``partyflow`` and ``partyflow_io`` namespaces share the handlers.
    """
    global _LOGGER
    if _LOGGER is not None:
        return _LOGGER

    if log_dir is None:
        base = _work_dir() / "logs"
    else:
        base = Path(log_dir)
    base.mkdir(parents=True, exist_ok=True)
    log_path = base / "app.log"

    fmt = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    file_handler = RotatingFileHandler(log_path, maxBytes=2 * 1024 * 1024, backupCount=3, encoding="utf-8")
    file_handler.setFormatter(fmt)

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(fmt)

    for namespace in _NAMESPACES:
        ns_logger = logging.getLogger(namespace)
        ns_logger.setLevel(logging.INFO)
        ns_logger.propagate = False
        for stale in list(ns_logger.handlers):
            ns_logger.removeHandler(stale)
        ns_logger.addHandler(file_handler)
        ns_logger.addHandler(console)

    _LOGGER = logging.getLogger("partyflow")
    return _LOGGER


def set_level(level: int) -> None:
    """Apply ``level`` to every PartyFlow logging namespace."""

    for namespace in _NAMESPACES:
        logging.getLogger(namespace).setLevel(level)
