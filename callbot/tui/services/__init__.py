"""Service helpers for TUI runtime."""

from .last_used_store import LastUsedStore

__all__ = [
    "LastUsedStore",
]
