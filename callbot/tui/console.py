"""Shared Rich console for the prompt runtime and CLI output."""

from rich.console import Console

console = Console()
err_console = Console(stderr=True)
