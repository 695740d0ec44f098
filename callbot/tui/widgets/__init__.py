"""Shared Textual widgets for Callbot TUI."""

from .breadcrumb import Breadcrumb
from .status_bar import StatusBar
from .title_banner import TitleBanner, banner_lines

__all__ = ["Breadcrumb", "StatusBar", "TitleBanner", "banner_lines"]
