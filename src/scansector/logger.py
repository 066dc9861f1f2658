"""Simple logging configuration for Scansector.

Provide a small helper to configure global logging with debug vs info levels.
"""
import logging
from typing import Optional


def configure_logging(debug: bool = False, level: Optional[str] = None) -> None:
    if debug:
        resolved = logging.DEBUG
    else:
        resolved = getattr(logging, str(level or "INFO").upper(), logging.INFO)
    fmt = "%(asctime)s [%(levelname)5s] %(name)s: %(message)s"
    logging.basicConfig(level=resolved, format=fmt)
