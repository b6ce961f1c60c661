"""Tests for verbosity flag handling in configure_logging."""

from __future__ import annotations

import logging

import pytest
import structlog

from lwm_common.logging import configure_logging, resolve_level


pytestmark = pytest.mark.unit_common


@pytest.mark.parametrize(
    ("verbose", "quiet", "expected"),
    [
        (False, False, logging.WARNING),
        (True, False, logging.INFO),
        (False, True, logging.ERROR),
        (True, True, logging.WARNING),
    ],
)
def test_resolve_level_from_flags(verbose: bool, quiet: bool, expected: int) -> None:
    assert resolve_level(verbose=verbose, quiet=quiet) == expected


def test_resolve_level_accepts_names_and_numbers() -> None:
    assert resolve_level(level="debug") == logging.DEBUG
    assert resolve_level(level="10") == logging.DEBUG
    assert resolve_level(level="nonsense") == logging.WARNING


def test_flags_take_precedence_over_explicit_level() -> None:
    assert resolve_level(verbose=True, level="ERROR") == logging.INFO


def test_configure_logging_force_replaces_handlers(monkeypatch) -> None:
    monkeypatch.delenv("LWM_LOG_LEVEL", raising=False)
    monkeypatch.delenv("LWM_LOG_FILE", raising=False)
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    try:
        configure_logging(verbose=True, force=True)
        assert root.level == logging.INFO
        assert len(root.handlers) == 1
        configure_logging(quiet=True, force=True)
        assert root.level == logging.ERROR
        assert len(root.handlers) == 1
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


def test_configure_logging_writes_log_file(tmp_path, monkeypatch) -> None:
    monkeypatch.delenv("LWM_LOG_LEVEL", raising=False)
    log_file = tmp_path / "monitor-debug.log"
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    try:
        configure_logging(verbose=True, log_file=str(log_file), json=True, force=True)
        logging.getLogger("lwm_runner.test").info("hello from test")
        for handler in root.handlers:
            handler.flush()
        assert "hello from test" in log_file.read_text()
    finally:
        for handler in root.handlers:
            if handler not in saved_handlers:
                handler.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


def test_environment_selects_level_and_json_renderer(monkeypatch) -> None:
    monkeypatch.setenv("LWM_LOG_LEVEL", "20")
    monkeypatch.setenv("LWM_LOG_JSON", "Yes")
    monkeypatch.delenv("LWM_LOG_FILE", raising=False)
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    try:
        configure_logging(force=True)
        assert root.level == logging.INFO
        formatter = root.handlers[0].formatter
        assert isinstance(formatter.processors[-1], structlog.processors.JSONRenderer)
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
