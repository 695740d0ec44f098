"""Status bar widget for Textual screens."""

from __future__ import annotations

from textual.reactive import reactive
from textual.widgets import Static


def _badge(label: str, state: str) -> str:
    palette = {
        "ok": "green",
        "warn": "yellow",
        "error": "red",
        "unknown": "grey66",
    }
    color = palette.get(state, "grey66")
    return f"[{color}]●[/{color}] {label}"


class StatusBar(Static):
    """Compact badges for execution mode and catalog health."""

    dry_run = reactive(False)
    action_count = reactive(0)
    broken_count = reactive(0)
    shell = reactive("/bin/sh")

    def set_states(
        self,
        *,
        dry_run: bool,
        action_count: int,
        broken_count: int,
        shell: str,
    ) -> None:
        self.dry_run = dry_run
        self.action_count = action_count
        self.broken_count = broken_count
        self.shell = shell

    def _badges(self) -> str:
        parts = [
            _badge("Dry run forced", "warn") if self.dry_run else _badge("Live", "ok"),
            _badge(f"Actions {self.action_count}", "ok"),
            _badge(
                f"Misconfigured {self.broken_count}",
                "error" if self.broken_count else "ok",
            ),
            _badge(f"Shell {self.shell}", "unknown"),
        ]
        return "   ".join(parts)

    def on_mount(self) -> None:
        self.update(self._badges())

    def watch_dry_run(self) -> None:
        self.update(self._badges())

    def watch_action_count(self) -> None:
        self.update(self._badges())

    def watch_broken_count(self) -> None:
        self.update(self._badges())

    def watch_shell(self) -> None:
        self.update(self._badges())
