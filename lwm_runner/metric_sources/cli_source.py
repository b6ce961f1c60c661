"""
CLI metric source.

CPU and RAM readings come from ``mpstat`` and ``free`` parsed with jc; GPU
readings come from the shared nvidia-smi sensor.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import jc

from ._base_source import BaseMetricSource
from ._tools import run_tool
from .gpu import NvidiaSmiSensor


logger = logging.getLogger(__name__)


class CLIMetricSource(BaseMetricSource):
    """Metric source that shells out to sysstat/procps utilities."""

    def __init__(
        self,
        name: str = "CLIMetricSource",
        gpu: Optional[NvidiaSmiSensor] = None,
        cpu_window_seconds: int = 1,
    ):
        super().__init__(name, gpu=gpu)
        self.cpu_window_seconds = cpu_window_seconds

    def cpu_percent(self) -> Optional[float]:
        if not self._tool_available("mpstat"):
            return None
        output = run_tool(
            ["mpstat", str(self.cpu_window_seconds), "1"],
            timeout=self.cpu_window_seconds + 5.0,
        )
        if output is None:
            return None
        try:
            idle = parse_mpstat_idle(output)
        except Exception as exc:  # jc parser errors are not typed; treat as non-fatal
            self._disable("mpstat", f"unparseable output ({exc})")
            return None
        if idle is None:
            logger.debug("Could not read percent_idle from mpstat output")
            return None
        return round(100.0 - idle, 1)

    def mem_used_mb(self) -> Optional[int]:
        if not self._tool_available("free"):
            return None
        output = run_tool(["free", "-m"])
        if output is None:
            return None
        try:
            return parse_free_used_mb(output)
        except Exception as exc:  # jc parser errors are not typed; treat as non-fatal
            self._disable("free", f"unparseable output ({exc})")
            return None


def parse_mpstat_idle(output: str) -> Optional[float]:
    """
    Extract ``percent_idle`` for the ``all`` CPU row of ``mpstat`` output.

    The average row wins when present; otherwise the last ``all`` row is
    used. Returns None when no usable row is found.
    """
    rows = [
        row
        for row in jc.parse("mpstat", output, quiet=True)
        if row.get("cpu") == "all" and "percent_idle" in row
    ]
    if not rows:
        return None
    averages = [row for row in rows if row.get("average")]
    row = averages[-1] if averages else rows[-1]
    return _percent(row["percent_idle"])


def parse_free_used_mb(output: str) -> Optional[int]:
    """Return ``used`` from the ``Mem`` entry of ``free -m`` output."""
    for entry in jc.parse("free", output, quiet=True):
        if entry.get("type") == "Mem":
            used = entry.get("used")
            return int(used) if isinstance(used, (int, float)) else None
    return None


def _percent(value: Any) -> Optional[float]:
    if not isinstance(value, (int, float)):
        return None
    if not 0.0 <= value <= 100.0:
        return None
    return float(value)
