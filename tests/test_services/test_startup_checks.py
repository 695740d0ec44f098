"""Tests for startup prerequisite checks."""

import pytest

from callbot.services.startup_checks import StartupCheckError, ensure_catalog_file


def test_startup_check_fails_when_catalog_missing(tmp_path):
    missing_path = tmp_path / "missing.toml"

    with pytest.raises(StartupCheckError) as exc_info:
        ensure_catalog_file(missing_path)

    assert "--config" in str(exc_info.value)


def test_startup_check_fails_when_path_is_directory(tmp_path):
    with pytest.raises(StartupCheckError):
        ensure_catalog_file(tmp_path)


def test_startup_check_fails_when_catalog_empty(tmp_path):
    catalog_path = tmp_path / "callbot.toml"
    catalog_path.write_text("", encoding="utf-8")

    with pytest.raises(StartupCheckError):
        ensure_catalog_file(catalog_path)


def test_startup_check_passes_on_nonempty_catalog(tmp_path):
    catalog_path = tmp_path / "callbot.toml"
    catalog_path.write_text("[[actions]]\n", encoding="utf-8")

    assert ensure_catalog_file(catalog_path) == catalog_path
