"""Typed service contracts for dependency injection."""

from __future__ import annotations

from typing import TYPE_CHECKING, ContextManager, Mapping, Optional, Protocol, Tuple

if TYPE_CHECKING:
    from ..domain.catalog import KnownValue


class KnownValuesSource(Protocol):
    """Known environment/server names used for picklists."""

    def known_values(self, category: str) -> Tuple["KnownValue", ...]: ...


class LastUsedStore(Protocol):
    """Key/value store of previously used argument values."""

    def get(self, key: str) -> Optional[str]: ...

    def update(self, values: Mapping[str, str]) -> None: ...


class TerminalGuard(Protocol):
    """Releases the terminal for the duration of the returned context."""

    def __call__(self) -> ContextManager[object]: ...
