"""Logging setup for the command-line scripts."""

import logging
import sys


def configure_logging(level: str = "INFO") -> None:
    """Attach a single stderr handler to the package logger."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root = logging.getLogger("ci_credentials")
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)
    root.propagate = False
