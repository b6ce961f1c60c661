"""Shared logging configuration using structlog."""

from __future__ import annotations

import logging
import os
import sys

import structlog

_TRUE_VALUES = {"1", "true", "yes", "on"}


def resolve_level(
    *,
    verbose: bool = False,
    quiet: bool = False,
    level: str | int | None = None,
) -> int:
    """Map the CLI verbosity flags onto a stdlib logging level.

    Informational messages need ``verbose`` and are always hidden by
    ``quiet``. ``quiet`` alone also hides warnings; with both flags set
    verbose wins and warnings stay visible. Errors always pass.
    """
    if quiet:
        return logging.WARNING if verbose else logging.ERROR
    if verbose:
        return logging.INFO
    if level is None:
        return logging.WARNING
    if isinstance(level, int):
        return level
    if level.strip().isdigit():
        return int(level)
    return logging._nameToLevel.get(level.strip().upper(), logging.WARNING)


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    level: str | int | None = None,
    log_file: str | None = None,
    json: bool | None = None,
    force: bool = False,
) -> None:
    """Configure stdlib logging and structlog with a shared formatter."""
    env_level = os.environ.get("LWM_LOG_LEVEL")
    env_json = os.environ.get("LWM_LOG_JSON", "").strip().lower() in _TRUE_VALUES
    env_log_file = os.environ.get("LWM_LOG_FILE")

    resolved_level = resolve_level(verbose=verbose, quiet=quiet, level=level or env_level)
    resolved_json = env_json if json is None else json
    resolved_log_file = env_log_file if log_file is None else log_file

    renderer: structlog.types.Processor
    if resolved_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    pre_chain = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=pre_chain,
    )

    root_logger = logging.getLogger()
    if root_logger.handlers and not force:
        root_logger.setLevel(resolved_level)
        _configure_structlog()
        return

    handlers: list[logging.Handler] = []
    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    handlers.append(stream_handler)

    if resolved_log_file:
        file_handler = logging.FileHandler(resolved_log_file)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if force:
        root_logger.handlers.clear()

    root_logger.setLevel(resolved_level)
    for handler in handlers:
        root_logger.addHandler(handler)

    _configure_structlog()


def _configure_structlog() -> None:
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
