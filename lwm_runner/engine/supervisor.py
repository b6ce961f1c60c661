"""
Workload supervision.

The supervisor launches the monitored command as a child process and hands
back a ``WorkloadHandle`` exposing liveness and exit status. Output is not
captured; the child writes straight to the inherited terminal.
"""

from __future__ import annotations

import logging
import shutil
import signal
import subprocess
from dataclasses import dataclass, field
from typing import Optional

from lwm_common.errors import (
    EnforcementUnavailableError,
    MissingDependencyError,
    WorkloadError,
    wrap_error,
)
from lwm_runner.models.config import MonitorConfig, StressNGConfig


logger = logging.getLogger(__name__)

DEFAULT_WORKLOAD_TOOL = "stress-ng"
TIMEOUT_TOOL = "timeout"


@dataclass
class CommandSpec:
    """Resolved argv for one workload launch."""

    cmd: list[str]
    description: str
    timeout_seconds: int = 0
    warnings: list[EnforcementUnavailableError] = field(default_factory=list)


def exit_status_from_returncode(returncode: int) -> int:
    """Map Popen return codes to shell-style exit statuses (signal N -> 128+N)."""
    if returncode < 0:
        return 128 - returncode
    return returncode


class WorkloadHandle:
    """Capability object for a running workload."""

    def __init__(self, process: subprocess.Popen, spec: CommandSpec):
        self._process = process
        self.spec = spec

    @property
    def pid(self) -> int:
        return self._process.pid

    @property
    def argv(self) -> list[str]:
        return list(self.spec.cmd)

    def is_alive(self) -> bool:
        return self._process.poll() is None

    def join(self, timeout: float) -> bool:
        """Wait up to ``timeout`` seconds; return True once the workload has exited."""
        try:
            self._process.wait(timeout=max(0.0, timeout))
        except subprocess.TimeoutExpired:
            return False
        return True

    def wait(self) -> int:
        """Block until exit and return the exit status. Never raises on failure codes."""
        return exit_status_from_returncode(self._process.wait())

    def terminate(self, grace_seconds: float = 5.0) -> None:
        if not self.is_alive():
            return
        logger.info("Terminating workload (pid %s)", self.pid)
        self._process.terminate()
        try:
            self._process.wait(timeout=grace_seconds)
        except subprocess.TimeoutExpired:
            logger.warning("Force killing workload (pid %s)", self.pid)
            self._process.kill()
            self._process.wait()


class WorkloadSupervisor:
    """Launch and track the single monitored workload."""

    def __init__(self, config: MonitorConfig):
        self.config = config
        self.warnings: list[EnforcementUnavailableError] = []

    def resolve(
        self, command: Optional[str] = None, timeout: int = 0
    ) -> CommandSpec:
        """Build the argv to launch without starting anything.

        Raises MissingDependencyError when the default workload tool is absent.
        """
        if command:
            cmd = [_shell(), "-c", command]
            description = f"custom command: {command}"
        else:
            cmd = self._default_argv(self.config.default_workload)
            description = f"default workload: {' '.join(cmd)}"

        spec = CommandSpec(cmd=cmd, description=description)
        if timeout > 0:
            if shutil.which(TIMEOUT_TOOL) is not None:
                spec.cmd = [TIMEOUT_TOOL, f"{timeout}s", *cmd]
                spec.timeout_seconds = timeout
            else:
                spec.warnings.append(
                    EnforcementUnavailableError(
                        f"'{TIMEOUT_TOOL}' not found; proceeding without enforcing {timeout}s limit",
                        context={"timeout_seconds": timeout},
                    )
                )
        return spec

    def start(
        self, command: Optional[str] = None, timeout: int = 0
    ) -> WorkloadHandle:
        spec = self.resolve(command, timeout)
        return self.launch(spec)

    def launch(self, spec: CommandSpec) -> WorkloadHandle:
        for warning in spec.warnings:
            logger.warning("%s", warning)
        self.warnings.extend(spec.warnings)
        if spec.timeout_seconds:
            logger.info("Applying timeout: %ss", spec.timeout_seconds)
        logger.info("Running %s", spec.description)
        try:
            process = subprocess.Popen(spec.cmd)
        except OSError as exc:
            raise wrap_error(
                WorkloadError,
                "Failed to launch workload",
                context={"command": " ".join(spec.cmd)},
                cause=exc,
            ) from exc
        return WorkloadHandle(process, spec)

    def is_alive(self, handle: WorkloadHandle) -> bool:
        return handle.is_alive()

    def wait(self, handle: WorkloadHandle) -> int:
        return handle.wait()

    def _default_argv(self, workload: StressNGConfig) -> list[str]:
        if shutil.which(DEFAULT_WORKLOAD_TOOL) is None:
            raise MissingDependencyError(
                f"'{DEFAULT_WORKLOAD_TOOL}' not found. Install it "
                f"(e.g., 'sudo apt install {DEFAULT_WORKLOAD_TOOL}') or pass a custom command.",
                context={"tool": DEFAULT_WORKLOAD_TOOL},
            )
        return workload.build_argv()


def _shell() -> str:
    return shutil.which("bash") or "/bin/sh"


def describe_exit_status(status: int) -> str:
    """Human-readable note for an exit status, naming the signal when there is one."""
    if status == 124:
        return "terminated by timeout"
    if status > 128:
        try:
            return f"killed by {signal.Signals(status - 128).name}"
        except ValueError:
            pass
    return "success" if status == 0 else "failed"
