"""Test doubles for metric sources."""

from lwm_runner.metric_sources._base_source import BaseMetricSource
from lwm_runner.metric_sources.gpu import NvidiaSmiSensor


class FakeGPU(NvidiaSmiSensor):
    """GPU sensor that never touches the host."""

    def __init__(self, util=None, vram=None):
        self.tool = "nvidia-smi"
        self.timeout = 1.0
        self._errors = []
        self.available = util is not None or vram is not None
        self._util = util
        self._vram = vram

    def utilization_percent(self):
        return self._util

    def memory_used_mb(self):
        return self._vram


class FakeSource(BaseMetricSource):
    """Instant metric source with fixed readings."""

    def __init__(self, cpu=12.5, mem=2048, gpu=None, vram=None):
        super().__init__("Fake", gpu=FakeGPU(gpu, vram))
        self.cpu = cpu
        self.mem = mem
        self.calls = 0

    def cpu_percent(self):
        self.calls += 1
        return self.cpu

    def mem_used_mb(self):
        return self.mem

