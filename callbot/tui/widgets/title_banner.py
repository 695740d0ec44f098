"""Large title banner: figlet output when installed, built-in art otherwise."""

from __future__ import annotations

import subprocess
from typing import List

from rich.text import Text
from textual.widgets import Static

_CALLBOT_ART = (
    r"  ____    _    _     _     ____   ___ _____ ",
    r" / ___|  / \  | |   | |   | __ ) / _ \_   _|",
    r"| |     / _ \ | |   | |   |  _ \| | | || |  ",
    r"| |___ / ___ \| |___| |___| |_) | |_| || |  ",
    r" \____/_/   \_\_____|_____|____/ \___/ |_|  ",
)


def banner_lines(title: str) -> List[str]:
    try:
        completed = subprocess.run(
            ["figlet", title],
            capture_output=True,
            text=True,
            timeout=2,
            check=False,
        )
    except (OSError, subprocess.SubprocessError):
        completed = None
    if completed is not None and completed.returncode == 0 and completed.stdout.strip():
        return completed.stdout.rstrip("\n").splitlines()
    if title.strip().upper() == "CALLBOT":
        return list(_CALLBOT_ART)
    return [title]


class TitleBanner(Static):
    """Header art for the main menu."""

    DEFAULT_CSS = "TitleBanner { height: auto; content-align: center middle; }"

    def __init__(self, title: str, **kwargs) -> None:
        super().__init__(**kwargs)
        self._title = title

    def on_mount(self) -> None:
        self.update(Text("\n".join(banner_lines(self._title)), style="bold #ffa500"))
