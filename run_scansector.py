"""Lightweight launcher for Scansector.

This should remain small and delegate to `scansector.main`. Install the
package first (`pip install -e .`).
"""
import sys

from scansector.main import main


if __name__ == "__main__":
    sys.exit(main())
