"""GPU sensor backed by nvidia-smi."""

from __future__ import annotations

import logging
import shutil
from typing import Optional

from lwm_common.errors import SensorUnavailableError

from ._tools import DEFAULT_TOOL_TIMEOUT, run_tool


logger = logging.getLogger(__name__)

NVIDIA_SMI = "nvidia-smi"


class NvidiaSmiSensor:
    """Query GPU utilization and VRAM from the first reported device.

    Availability is probed once at construction with a real query, so a
    tool that is installed but cannot reach a driver counts as absent.
    A later failed query also disables the sensor. Once unavailable, every
    query returns None without spawning anything.
    """

    def __init__(self, tool: str = NVIDIA_SMI, timeout: float = DEFAULT_TOOL_TIMEOUT):
        self.tool = tool
        self.timeout = timeout
        self._errors: list[SensorUnavailableError] = []
        self.available = True
        if shutil.which(tool) is None:
            self._disable(f"'{tool}' not found in PATH")
        elif self._run("utilization.gpu") is None:
            self._disable(f"'{tool}' query failed")

    def utilization_percent(self) -> Optional[float]:
        value = self._query("utilization.gpu")
        return None if value is None else float(value)

    def memory_used_mb(self) -> Optional[int]:
        value = self._query("memory.used")
        return None if value is None else int(value)

    def get_errors(self) -> list[SensorUnavailableError]:
        return list(self._errors)

    def _query(self, field: str) -> Optional[float]:
        if not self.available:
            return None
        output = self._run(field)
        if output is None:
            self._disable(f"'{self.tool}' query failed")
            return None
        return parse_first_device(output)

    def _run(self, field: str) -> Optional[str]:
        return run_tool(
            [self.tool, f"--query-gpu={field}", "--format=csv,noheader,nounits"],
            timeout=self.timeout,
        )

    def _disable(self, reason: str) -> None:
        self.available = False
        error = SensorUnavailableError(
            f"GPU sensor unavailable: {reason}",
            context={"sensor": self.tool},
        )
        self._errors.append(error)
        logger.warning("%s; GPU columns will be NA", error)


def parse_first_device(output: str) -> Optional[float]:
    """Return the numeric value reported for the first GPU, if any."""
    for line in output.splitlines():
        token = line.strip().split(",")[0].strip()
        if not token:
            continue
        try:
            return float(token)
        except ValueError:
            # "[N/A]" or "[Not Supported]" on some devices
            return None
    return None
