"""Systems package for Scansector subsystems.

This package contains system modules such as save parsing, background
loading, settings persistence and input mapping.
"""

__all__ = [
    "savefile",
    "loader",
    "settings",
]
