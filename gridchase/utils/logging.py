"""Logging setup shared by the server and the headless CLI."""

from __future__ import annotations

import logging
import sys

# HTTP server loggers whose per-request lines only show at DEBUG
_CHATTY_LOGGERS = ("uvicorn.access",)


def setup_logging(level: str = "INFO") -> None:
    """Send game logs to stdout in a compact one-line format.

    At INFO and above the per-request access log of the server is raised to
    WARNING, so a polling UI does not bury tick and lifecycle messages.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s [%(levelname)-5s] %(name)-25s | %(message)s",
        datefmt="%H:%M:%S",
    ))

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers.clear()
    root.addHandler(handler)

    chatty_level = logging.WARNING if numeric_level >= logging.INFO else numeric_level
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(chatty_level)
