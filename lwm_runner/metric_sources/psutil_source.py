"""
PSUtil metric source.

Reads CPU and RAM through psutil instead of external utilities; useful on
hosts without sysstat. GPU readings still come from nvidia-smi.
"""

from __future__ import annotations

from typing import Optional

import psutil

from ._base_source import BaseMetricSource
from .gpu import NvidiaSmiSensor

_MB = 1024 * 1024


class PSUtilMetricSource(BaseMetricSource):
    """Metric source using psutil."""

    def __init__(
        self,
        name: str = "PSUtilMetricSource",
        gpu: Optional[NvidiaSmiSensor] = None,
        cpu_window_seconds: float = 1.0,
    ):
        super().__init__(name, gpu=gpu)
        self.cpu_window_seconds = cpu_window_seconds

    def cpu_percent(self) -> Optional[float]:
        try:
            times = psutil.cpu_times_percent(interval=self.cpu_window_seconds)
        except (psutil.Error, OSError) as e:
            self._report_unavailable("psutil.cpu_times_percent", str(e))
            return None
        return round(100.0 - times.idle, 1)

    def mem_used_mb(self) -> Optional[int]:
        try:
            return int(psutil.virtual_memory().used // _MB)
        except (psutil.Error, OSError) as e:
            self._report_unavailable("psutil.virtual_memory", str(e))
            return None
