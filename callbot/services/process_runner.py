"""Echo or run a rendered command with the terminal handed to the child."""

from __future__ import annotations

import contextlib
import shutil
import signal
import subprocess
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

from .contracts import TerminalGuard


_INTERRUPTS = (signal.SIGINT, signal.SIGQUIT)


def _default_interrupts() -> None:
    for signum in _INTERRUPTS:
        signal.signal(signum, signal.SIG_DFL)


@contextlib.contextmanager
def _parent_ignores_interrupts() -> Iterator[None]:
    """Leave Ctrl+C and Ctrl+\\ to the child while it owns the terminal."""
    if threading.current_thread() is not threading.main_thread():
        yield
        return
    previous = {
        signum: signal.signal(signum, signal.SIG_IGN)
        for signum in _INTERRUPTS
    }
    try:
        yield
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)


class ExecutionMode(str, Enum):
    ECHO = "echo"
    RUN = "run"


class SpawnError(RuntimeError):
    """The shell could not be started; the terminal was not handed over."""


@dataclass(frozen=True)
class RunOutcome:
    """Result of one Echo or Run confirmation."""

    mode: ExecutionMode
    command: str
    exit_code: Optional[int] = None
    forced_dry_run: bool = False

    @property
    def succeeded(self) -> bool:
        return self.exit_code in (None, 0)

    @property
    def message(self) -> str:
        if self.mode is ExecutionMode.ECHO:
            prefix = "Dry run forced" if self.forced_dry_run else "Dry run"
            return f"{prefix}: {self.command}"
        if self.exit_code is not None and self.exit_code < 0:
            try:
                name = signal.Signals(-self.exit_code).name
            except ValueError:
                name = f"signal {-self.exit_code}"
            return f"Command terminated by {name}"
        return f"Command exited with status {self.exit_code}"


class ProcessRunner:
    """Consumes finished command strings.

    ``terminal_guard`` releases the UI's hold on the terminal (raw mode,
    alternate screen) for the lifetime of the child and restores it on exit.
    """

    def __init__(
        self,
        *,
        shell: str = "/bin/sh",
        force_dry_run: bool = False,
        terminal_guard: Optional[TerminalGuard] = None,
    ) -> None:
        self.shell = shell
        self.force_dry_run = force_dry_run
        self._terminal_guard = terminal_guard or contextlib.nullcontext

    def execute(self, command: str, mode: ExecutionMode) -> RunOutcome:
        if mode is ExecutionMode.RUN and self.force_dry_run:
            return RunOutcome(mode=ExecutionMode.ECHO, command=command, forced_dry_run=True)
        if mode is ExecutionMode.RUN:
            return self.run(command)
        return self.echo(command)

    def echo(self, command: str) -> RunOutcome:
        return RunOutcome(mode=ExecutionMode.ECHO, command=command)

    def _resolve_shell(self) -> str:
        resolved = shutil.which(self.shell)
        if resolved is None:
            raise SpawnError(f"Shell '{self.shell}' was not found or is not executable")
        return resolved

    def run(self, command: str) -> RunOutcome:
        shell_path = self._resolve_shell()
        with self._terminal_guard():
            with _parent_ignores_interrupts():
                try:
                    child = subprocess.Popen(
                        [shell_path, "-c", command],
                        preexec_fn=_default_interrupts,
                    )
                except OSError as exc:
                    raise SpawnError(f"Could not start '{shell_path}': {exc}") from exc
                exit_code = child.wait()
        return RunOutcome(mode=ExecutionMode.RUN, command=command, exit_code=exit_code)
