"""Scansector: a Starsector save scanner.

Loads a campaign save and plots the celestial objects of each star system,
marking the ones a mission points at.
"""

__version__ = "0.3.0"
