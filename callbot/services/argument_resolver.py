"""Validation and normalization of argument values typed or picked by the user."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Mapping, Optional, Sequence, Tuple

from .contracts import KnownValuesSource, LastUsedStore

if TYPE_CHECKING:
    from ..domain.catalog import ActionSpec, ArgumentSpec, KnownValue


class ArgumentValidationError(ValueError):
    """A field value was rejected; the form stays open."""

    def __init__(self, name: str, message: str) -> None:
        super().__init__(message)
        self.name = name
        self.message = message


@dataclass(frozen=True)
class ArgumentValue:
    """A committed value for one argument of the action being configured."""

    name: str
    value: str
    is_known: bool


@dataclass(frozen=True)
class Resolution:
    value: ArgumentValue
    warning: Optional[str] = None


def last_used_key(action_id: str, name: str) -> str:
    return f"{action_id}.{name}"


class ArgumentResolver:
    """Turns raw field input into ``ArgumentValue`` records.

    Unknown values for picklist-backed fields are accepted with a warning.
    """

    def __init__(
        self,
        known_values: KnownValuesSource,
        last_used: Optional[LastUsedStore] = None,
    ) -> None:
        self._known_values = known_values
        self._last_used = last_used

    def _argument(self, action: "ActionSpec", name: str) -> "ArgumentSpec":
        arg = action.argument(name)
        if arg is None:
            raise ArgumentValidationError(
                name, f"'{name}' is not an argument of action '{action.id}'"
            )
        return arg

    def suggestions(self, action: "ActionSpec", name: str) -> Tuple["KnownValue", ...]:
        arg = self._argument(action, name)
        if arg.options:
            return arg.options
        if arg.picklist is not None:
            return tuple(self._known_values.known_values(arg.picklist))
        return ()

    def matching(self, action: "ActionSpec", name: str, typed: str) -> List["KnownValue"]:
        """Typeahead filter: prefix matches first, then substring matches."""
        needle = typed.strip().lower()
        candidates = self.suggestions(action, name)
        if not needle:
            return list(candidates)
        prefix = [c for c in candidates if c.name.lower().startswith(needle)]
        inner = [
            c
            for c in candidates
            if c not in prefix and (needle in c.name.lower() or needle in c.label.lower())
        ]
        return prefix + inner

    def prefill(self, action: "ActionSpec") -> Dict[str, str]:
        values: Dict[str, str] = {}
        for arg in action.args:
            remembered = None
            if self._last_used is not None:
                remembered = self._last_used.get(last_used_key(action.id, arg.name))
                if remembered is None:
                    remembered = self._last_used.get(arg.name)
            if remembered:
                values[arg.name] = remembered
            elif arg.default is not None:
                values[arg.name] = arg.default
        return values

    def resolve(self, action: "ActionSpec", name: str, raw: Optional[str]) -> Resolution:
        arg = self._argument(action, name)
        value = (raw or "").strip()
        if not value:
            raise ArgumentValidationError(name, f"{arg.title} is required.")

        if not arg.has_known_set:
            return Resolution(ArgumentValue(name=name, value=value, is_known=True))

        known = {candidate.name for candidate in self.suggestions(action, name)}
        if value in known:
            return Resolution(ArgumentValue(name=name, value=value, is_known=True))

        category = arg.picklist or "options"
        warning = f"'{value}' is not in the known {category}; it will be used as typed."
        return Resolution(ArgumentValue(name=name, value=value, is_known=False), warning)

    def remember(self, action: "ActionSpec", values: Sequence[ArgumentValue]) -> None:
        if self._last_used is None or not values:
            return
        payload: Dict[str, str] = {}
        for item in values:
            payload[last_used_key(action.id, item.name)] = item.value
            payload[item.name] = item.value
        self._last_used.update(payload)


def as_mapping(values: Sequence[ArgumentValue]) -> Mapping[str, str]:
    return {item.name: item.value for item in values}
