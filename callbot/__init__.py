"""Callbot: terminal launcher for project and server scripts."""

__version__ = "0.3.0"
