"""Console presentation for the monitor CLI (stderr, rich markup)."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from lwm_runner.api import RunResult
from lwm_runner.engine.supervisor import describe_exit_status

_LEVEL_TEMPLATES = {
    "error": "[red]✖ {message}[/red]",
    "success": "[green]✔ {message}[/green]",
}


class RichPresenter:
    """Print user-facing messages honouring the --verbose/--quiet policy."""

    def __init__(
        self,
        console: Console | None = None,
        *,
        verbose: bool = False,
        quiet: bool = False,
    ) -> None:
        self._console = console or Console(stderr=True)
        self.show_info = verbose and not quiet

    def _emit(self, level: str, message: str) -> None:
        template = _LEVEL_TEMPLATES.get(level, "{message}")
        self._console.print(template.format(message=escape(message)), highlight=False)

    def error(self, message: str) -> None:
        self._emit("error", message)

    def run_summary(self, result: RunResult) -> None:
        if not self.show_info:
            return
        summary = result.summary
        table = Table(title="Monitor run", show_header=False)
        table.add_column("Field", style="cyan")
        table.add_column("Value")
        table.add_row("Log file", str(result.config.output_path))
        table.add_row("Samples", str(result.samples_written))
        table.add_row(
            "Exit status",
            f"{summary.exit_status} ({describe_exit_status(summary.exit_status)})",
        )
        table.add_row("Duration", f"{summary.duration_hms} ({summary.duration_seconds}s)")
        if result.warnings:
            table.add_row("Warnings", str(len(result.warnings)))
        self._console.print(table)
        if summary.exit_status == 0:
            self._emit("success", "Workload completed.")
