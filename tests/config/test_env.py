from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from rosterpy.config import (
    ConfigurationError,
    MissingConfigurationError,
    configure_logging,
    env_flag,
    env_int,
    load_environment,
    require_env_var,
    require_env_vars,
)

if TYPE_CHECKING:
    from pathlib import Path


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "value")

    assert require_env_vars(["EXAMPLE_VAR"]) == {"EXAMPLE_VAR": "value"}


def test_require_env_vars_lists_every_missing_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_A", raising=False)
    monkeypatch.setenv("MISSING_B", "   ")

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_B", "MISSING_A"])

    assert "MISSING_A, MISSING_B" in str(exc.value)


def test_require_env_var_rejects_blank_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "   ")

    with pytest.raises(MissingConfigurationError):
        require_env_var("EXAMPLE_VAR")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("1", True), ("Yes", True), ("off", False), ("FALSE", False), ("", True)],
)
def test_env_flag_parses_toggles(
    monkeypatch: pytest.MonkeyPatch, raw: str, *, expected: bool
) -> None:
    monkeypatch.setenv("ROSTERPY_TEST_FLAG", raw)

    assert env_flag("ROSTERPY_TEST_FLAG", default=True) is expected


def test_env_flag_rejects_garbage(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ROSTERPY_TEST_FLAG", "sometimes")

    with pytest.raises(ConfigurationError, match="ROSTERPY_TEST_FLAG"):
        env_flag("ROSTERPY_TEST_FLAG", default=False)


def test_env_int_enforces_minimum(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("ROSTERPY_TEST_INT", raising=False)
    assert env_int("ROSTERPY_TEST_INT", default=7) == 7

    monkeypatch.setenv("ROSTERPY_TEST_INT", "0")
    with pytest.raises(ConfigurationError, match=">= 1"):
        env_int("ROSTERPY_TEST_INT", default=7, minimum=1)

    monkeypatch.setenv("ROSTERPY_TEST_INT", "ten")
    with pytest.raises(ConfigurationError, match="Invalid integer"):
        env_int("ROSTERPY_TEST_INT", default=7)


def test_load_environment_does_not_override_process_values(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    dotenv = tmp_path / ".env"
    dotenv.write_text("ROSTERPY_FROM_FILE=file\nROSTERPY_PRESET=file\n")
    monkeypatch.delenv("ROSTERPY_FROM_FILE", raising=False)
    monkeypatch.setenv("ROSTERPY_PRESET", "process")

    assert load_environment(dotenv)

    assert require_env_var("ROSTERPY_FROM_FILE") == "file"
    assert require_env_var("ROSTERPY_PRESET") == "process"
    monkeypatch.delenv("ROSTERPY_FROM_FILE")


def test_configure_logging_sets_root_level() -> None:
    root = logging.getLogger()
    previous_level = root.level
    previous_handlers = list(root.handlers)
    try:
        configure_logging(level=logging.DEBUG, force=True)
        assert root.level == logging.DEBUG
    finally:
        for handler in list(root.handlers):
            root.removeHandler(handler)
        for handler in previous_handlers:
            root.addHandler(handler)
        root.setLevel(previous_level)
