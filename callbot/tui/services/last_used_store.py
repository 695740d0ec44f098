"""Atomic JSON persistence of last-used argument values."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Dict, Mapping, Optional


class LastUsedStore:
    """Read/write a flat key -> value JSON file with backup and atomic replacement."""

    def __init__(self, path: str = "data/last_used.json") -> None:
        self.path = Path(path)
        self._cache: Optional[Dict[str, str]] = None

    def load(self) -> Dict[str, str]:
        values: Dict[str, str] = {}
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return values
        except json.JSONDecodeError:
            # Corrupt file: start from an empty set of pre-fill values.
            return values
        if isinstance(payload, dict):
            for key, value in payload.items():
                if isinstance(value, str):
                    values[str(key)] = value
        return values

    def get(self, key: str) -> Optional[str]:
        if self._cache is None:
            self._cache = self.load()
        return self._cache.get(key)

    def update(self, values: Mapping[str, str]) -> None:
        merged = self.load()
        merged.update(values)
        self.save(merged)
        self._cache = merged

    def save(self, values: Mapping[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(dict(sorted(values.items())), indent=2) + "\n"

        if self.path.exists():
            backup_path = self.path.with_suffix(self.path.suffix + ".bak")
            backup_path.write_text(self.path.read_text(encoding="utf-8"), encoding="utf-8")

        temp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        fd = os.open(str(temp_path), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(payload)
        os.replace(temp_path, self.path)
