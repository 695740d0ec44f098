"""Breadcrumb widget showing where the operator is in the launcher."""

from __future__ import annotations

from rich.text import Text
from textual.reactive import reactive
from textual.widgets import Static

SEPARATOR = " > "


def breadcrumb_text(path: str) -> Text:
    """Dim trail with the current location highlighted."""
    parts = [part for part in path.split(SEPARATOR) if part] or ["Home"]
    text = Text()
    for index, part in enumerate(parts):
        if index:
            text.append(SEPARATOR, style="dim")
        text.append(part, style="bold cyan" if index == len(parts) - 1 else "dim")
    return text


class Breadcrumb(Static):
    _path = reactive("Home")

    def set_path(self, path: str) -> None:
        self._path = path or "Home"

    def watch__path(self, path: str) -> None:
        self.update(breadcrumb_text(path))

    def on_mount(self) -> None:
        self.update(breadcrumb_text(self._path))
