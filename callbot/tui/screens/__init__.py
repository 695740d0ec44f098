"""Textual screen modules for Callbot TUI."""

from .action_list import ActionListScreen
from .argument_form import ArgumentFormScreen
from .base import LauncherScreen
from .main_menu import MainMenuScreen
from .preview import PreviewScreen

__all__ = [
    "ActionListScreen",
    "ArgumentFormScreen",
    "LauncherScreen",
    "MainMenuScreen",
    "PreviewScreen",
]
