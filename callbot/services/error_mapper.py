"""Centralized exception mapping for consistent user-facing errors."""

from dataclasses import dataclass
from typing import Any

from .argument_resolver import ArgumentValidationError
from .process_runner import SpawnError
from .startup_checks import StartupCheckError
from .template_engine import MissingArgument


@dataclass(frozen=True)
class ErrorMapping:
    """Normalized user-facing error payload used by both TUIs and the CLI."""

    code: str
    message: str
    hint: str = ""


def _extract_message(error: Any) -> str:
    if error is None:
        return ""
    message = getattr(error, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(error)


def map_exception(error: Any) -> ErrorMapping:
    """Map raw exceptions/messages into stable user-facing error semantics."""
    raw_message = _extract_message(error).strip()

    if isinstance(error, ArgumentValidationError):
        return ErrorMapping(code="validation_error", message=raw_message)

    if isinstance(error, MissingArgument):
        return ErrorMapping(
            code="missing_argument",
            message=f"Action template is misconfigured: {raw_message}.",
            hint="Fix the action's args/template in the catalog file.",
        )

    if isinstance(error, SpawnError):
        return ErrorMapping(
            code="spawn_failed",
            message=raw_message or "Could not start the command.",
            hint="Check CALLBOT_RUNNER_SHELL or use Echo to copy the command.",
        )

    if isinstance(error, StartupCheckError):
        return ErrorMapping(
            code="startup_check_failed",
            message=raw_message,
            hint="Pass --config or set CALLBOT_CATALOG_PATH.",
        )

    # Imported late: the domain package depends on this package.
    from ..domain.catalog import CatalogError

    if isinstance(error, CatalogError):
        return ErrorMapping(
            code="catalog_invalid",
            message=raw_message,
            hint="Run `callbot --check` after editing the catalog.",
        )

    lowered = raw_message.lower()
    if any(token in lowered for token in ("permission denied", "not permitted")):
        return ErrorMapping(
            code="permission_denied",
            message=raw_message,
            hint="Check file permissions of the script or state directory.",
        )

    return ErrorMapping(
        code="internal_error",
        message=raw_message or "Unexpected error",
    )
