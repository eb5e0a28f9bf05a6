"""Logging setup for the command-line entry point."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(level: str = "WARNING") -> None:
    """Send ``orderdesk`` logs to stderr at *level*.

    Safe to call more than once; the handler is only installed the first
    time.
    """
    root = logging.getLogger("orderdesk")
    root.setLevel(level.upper())
    if not any(getattr(h, "_orderdesk", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._orderdesk = True  # type: ignore[attr-defined]
        root.addHandler(handler)
