"""Logging helpers for Phoenix.

Modules call `get_logger("phoenix.<area>")`; `setup_logging` configures the
root ``phoenix`` logger once at startup (stream handler plus an optional log
file).
"""
import logging
import os
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str = "phoenix") -> logging.Logger:
    logger = logging.getLogger(name)
    root = logging.getLogger("phoenix")
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())
    return logger


def setup_logging(level: str = "INFO", log_file: Optional[Path] = None) -> logging.Logger:
    """Configure the ``phoenix`` logger tree and return it.

    Safe to call more than once; handlers are only added the first time.
    """
    root = get_logger("phoenix")
    root.setLevel(level.upper())
    if log_file is not None and not any(isinstance(h, logging.FileHandler) for h in root.handlers):
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(fh)
    # discord.py logs through its own tree; keep it at the same level
    logging.getLogger("discord").setLevel(level.upper())
    return root
