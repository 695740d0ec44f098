"""Tests for centralized exception mapping."""

from callbot.domain.catalog import CatalogError
from callbot.services.argument_resolver import ArgumentValidationError
from callbot.services.error_mapper import map_exception
from callbot.services.process_runner import SpawnError
from callbot.services.startup_checks import StartupCheckError
from callbot.services.template_engine import MissingArgument


def test_maps_validation_error_message_verbatim():
    mapped = map_exception(ArgumentValidationError("env", "Env is required."))

    assert mapped.code == "validation_error"
    assert mapped.message == "Env is required."


def test_maps_missing_argument_as_catalog_bug():
    mapped = map_exception(MissingArgument("server"))

    assert mapped.code == "missing_argument"
    assert "misconfigured" in mapped.message
    assert "server" in mapped.message


def test_maps_spawn_failure_with_hint():
    mapped = map_exception(SpawnError("Shell '/bin/zsh' was not found or is not executable"))

    assert mapped.code == "spawn_failed"
    assert "/bin/zsh" in mapped.message
    assert "CALLBOT_RUNNER_SHELL" in mapped.hint


def test_maps_startup_and_catalog_errors():
    assert map_exception(StartupCheckError("missing")).code == "startup_check_failed"
    assert map_exception(CatalogError("bad toml")).code == "catalog_invalid"


def test_maps_permission_errors_from_text():
    mapped = map_exception(OSError("[Errno 13] Permission denied: 'data/last_used.json'"))

    assert mapped.code == "permission_denied"


def test_unknown_errors_become_internal_error():
    mapped = map_exception(RuntimeError(""))

    assert mapped.code == "internal_error"
    assert mapped.message == "Unexpected error"
