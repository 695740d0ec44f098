"""Command template resolution and POSIX shell escaping."""

from __future__ import annotations

import re
import shlex
from typing import Mapping, Tuple

# ``${NAME}`` is shell parameter expansion and ``{{NAME}}`` is passed through
# verbatim (e.g. Go templates for ``docker --format``); neither is a placeholder.
PLACEHOLDER_PATTERN = re.compile(r"(?<![${])\{([A-Za-z_][A-Za-z0-9_]*)\}(?!\})")


class ResolutionError(Exception):
    """Raised when a template cannot be turned into a command."""


class MissingArgument(ResolutionError):
    """A placeholder in the template has no value."""

    def __init__(self, name: str) -> None:
        super().__init__(f"No value for placeholder '{{{name}}}'")
        self.name = name


def placeholders(template: str) -> Tuple[str, ...]:
    """Return the placeholder names used by ``template`` in first-seen order."""
    seen = []
    for match in PLACEHOLDER_PATTERN.finditer(template):
        name = match.group(1)
        if name not in seen:
            seen.append(name)
    return tuple(seen)


def shell_escape(value: str) -> str:
    """Quote ``value`` so a POSIX shell reads it back as one literal word.

    Values made only of characters the shell treats literally are returned
    unchanged to keep previews readable.
    """
    return shlex.quote(value)


def render(template: str, values: Mapping[str, str]) -> str:
    """Substitute every placeholder in ``template`` with its escaped value.

    Substitution happens in a single pass, so text inside a value is never
    scanned for placeholders.
    """

    def _substitute(match: re.Match) -> str:
        name = match.group(1)
        if name not in values:
            raise MissingArgument(name)
        return shell_escape(values[name])

    return PLACEHOLDER_PATTERN.sub(_substitute, template)
