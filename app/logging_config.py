"""
Structured logging configuration for the entire application.
Call setup_logging() once at startup (main.py).
"""

import logging
import sys


def setup_logging(level: str = "INFO"):
    """Configure structured logging to stdout for the 'app' namespace."""
    root = logging.getLogger("app")
    root.setLevel(level)

    # main can be imported more than once (uvicorn reload, tests)
    if root.handlers:
        return

    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    )
    handler.setFormatter(formatter)
    root.addHandler(handler)
