"""Startup validation helpers for required runtime assets."""

from pathlib import Path
from typing import Union


class StartupCheckError(RuntimeError):
    """Raised when startup prerequisites are not met."""


def ensure_catalog_file(path: Union[str, Path]) -> Path:
    """Validate that the action catalog file exists and is usable."""
    catalog_path = Path(path).expanduser()
    if not catalog_path.exists():
        raise StartupCheckError(
            f"Catalog file not found: '{catalog_path}'. "
            "Create a callbot.toml file or pass --config."
        )

    if not catalog_path.is_file():
        raise StartupCheckError(
            f"Configured catalog path '{catalog_path}' is not a file."
        )

    if catalog_path.stat().st_size == 0:
        raise StartupCheckError(
            f"Configured catalog file '{catalog_path}' is empty."
        )

    return catalog_path
