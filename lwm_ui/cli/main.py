"""
Command-line interface for linux-workload-monitor.

Runs one workload (a custom shell command or the default stress-ng load)
and samples host CPU, RAM, GPU and VRAM usage into a run log until it exits.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import click
import typer

from lwm_common.api import (
    ConfigurationError,
    MissingDependencyError,
    WorkloadError,
    configure_logging,
    error_to_payload,
)
from lwm_runner.api import MonitorRunner, load_config
from lwm_runner.models.config import DEFAULT_INTERVAL_SECONDS, DEFAULT_OUTPUT_PATH
from lwm_ui.presenter import RichPresenter

logger = logging.getLogger(__name__)

EXIT_CONFIG_ERROR = 1
EXIT_MISSING_DEPENDENCY = 127
EXIT_INTERRUPTED = 130

app = typer.Typer(
    help="Run a workload while logging CPU, RAM, GPU and VRAM usage.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.command()
def monitor(
    interval: float = typer.Option(
        DEFAULT_INTERVAL_SECONDS,
        "--interval",
        "-i",
        envvar="LWM_INTERVAL",
        help="Sampling interval in seconds.",
    ),
    output: Path = typer.Option(
        DEFAULT_OUTPUT_PATH,
        "--output",
        "-o",
        envvar="LWM_OUTPUT",
        help="Run log file; appended to when it already exists.",
    ),
    command: Optional[str] = typer.Option(
        None,
        "--command",
        "-c",
        help="Shell command to run (default: stress-ng --cpu 8 --timeout 60s).",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging."),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Quiet mode (suppress info logs and warnings)."
    ),
    timeout: int = typer.Option(
        0,
        "--timeout",
        "-t",
        envvar="LWM_TIMEOUT",
        help="Kill the workload after N seconds (requires coreutils timeout; 0 disables).",
    ),
    backend: str = typer.Option(
        "cli",
        "--backend",
        envvar="LWM_BACKEND",
        help="Host metric backend: cli (mpstat/free) or psutil.",
    ),
) -> None:
    """Monitor a workload and exit with its exit status."""
    configure_logging(verbose=verbose, quiet=quiet, force=True)
    presenter = RichPresenter(verbose=verbose, quiet=quiet)

    try:
        config = load_config(
            interval_seconds=interval,
            output_path=output,
            command=command,
            timeout_seconds=timeout,
            verbose=verbose,
            quiet=quiet,
            backend=backend,
        )
        result = MonitorRunner(config).run()
    except ConfigurationError as exc:
        logger.debug("Aborting: %s", error_to_payload(exc))
        presenter.error(str(exc))
        raise typer.Exit(EXIT_CONFIG_ERROR)
    except MissingDependencyError as exc:
        logger.debug("Aborting: %s", error_to_payload(exc))
        presenter.error(str(exc))
        raise typer.Exit(EXIT_MISSING_DEPENDENCY)
    except WorkloadError as exc:
        presenter.error(f"{exc}: {exc.__cause__}")
        raise typer.Exit(EXIT_CONFIG_ERROR)
    except KeyboardInterrupt:
        presenter.error("Interrupted.")
        raise typer.Exit(EXIT_INTERRUPTED)

    for warning in result.warnings:
        logger.debug("Degraded: %s", error_to_payload(warning))
    presenter.run_summary(result)
    raise typer.Exit(result.exit_status)


def main() -> None:
    """Console script entrypoint; argument errors exit with status 1."""
    try:
        status = app(standalone_mode=False)
    except click.exceptions.ClickException as exc:
        exc.show()
        sys.exit(EXIT_CONFIG_ERROR)
    except click.exceptions.Abort:
        sys.exit(EXIT_INTERRUPTED)
    sys.exit(status or 0)


if __name__ == "__main__":
    main()
