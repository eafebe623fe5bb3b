from __future__ import annotations

import logging
import sys


def setup_logging(level: str = "INFO") -> None:
    """Plain stdout logging for the API process."""
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    if root.handlers:
        return  # uvicorn / pytest already installed handlers

    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )
    handler.setFormatter(formatter)

    root.addHandler(handler)
