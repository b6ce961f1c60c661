"""
Base metric source for host telemetry.

A metric source answers four independent queries (CPU, RAM, GPU, VRAM).
Each query returns a reading or ``None`` when the backing sensor is
unavailable; queries never raise, so a missing sensor degrades one log
column instead of aborting the run.
"""

from __future__ import annotations

import logging
import shutil
from abc import ABC, abstractmethod
from typing import Optional

from lwm_common.errors import SensorUnavailableError

from .gpu import NvidiaSmiSensor


logger = logging.getLogger(__name__)


class BaseMetricSource(ABC):
    """Abstract base class for host metric sources."""

    def __init__(self, name: str, gpu: Optional[NvidiaSmiSensor] = None):
        self.name = name
        self.gpu = gpu if gpu is not None else NvidiaSmiSensor()
        self._errors: list[SensorUnavailableError] = []
        self._reported: set[str] = set()
        self._disabled: set[str] = set()

    @abstractmethod
    def cpu_percent(self) -> Optional[float]:
        """CPU utilization (100 - idle) over a short sampling window."""

    @abstractmethod
    def mem_used_mb(self) -> Optional[int]:
        """Used RAM in megabytes."""

    def gpu_util_percent(self) -> Optional[float]:
        return self.gpu.utilization_percent()

    def vram_used_mb(self) -> Optional[int]:
        return self.gpu.memory_used_mb()

    def get_errors(self) -> list[SensorUnavailableError]:
        """Return sensor degradations recorded so far (GPU included)."""
        return list(self._errors) + self.gpu.get_errors()

    def _tool_available(self, tool: str) -> bool:
        if tool in self._disabled:
            return False
        if shutil.which(tool) is not None:
            return True
        self._report_unavailable(tool, f"'{tool}' not found in PATH")
        return False

    def _disable(self, sensor: str, reason: str) -> None:
        """Stop querying a sensor whose tool runs but cannot be read."""
        self._disabled.add(sensor)
        self._report_unavailable(sensor, reason)

    def _report_unavailable(self, sensor: str, reason: str) -> None:
        """Record a degraded sensor once; later failures stay silent."""
        if sensor in self._reported:
            return
        self._reported.add(sensor)
        error = SensorUnavailableError(
            f"{sensor} unavailable: {reason}",
            context={"source": self.name, "sensor": sensor},
        )
        self._errors.append(error)
        logger.warning("%s; reporting NA for its column", error)
