"""Scenes: the save picker and the system viewer."""
