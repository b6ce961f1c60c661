"""Fixed-cadence sampling loop bound to the workload's lifetime."""

from __future__ import annotations

import logging
import time
from typing import Callable

from lwm_runner.engine.supervisor import WorkloadHandle
from lwm_runner.metric_sources._base_source import BaseMetricSource
from lwm_runner.models.records import Sample
from lwm_runner.services.run_log import RunLogger


logger = logging.getLogger(__name__)


class Sampler:
    """Take one sample per interval while the workload is alive."""

    def __init__(
        self,
        source: BaseMetricSource,
        run_log: RunLogger,
        clock: Callable[[], float] = time.time,
        monotonic: Callable[[], float] = time.monotonic,
    ):
        self.source = source
        self.run_log = run_log
        self._clock = clock
        self._monotonic = monotonic

    def take_sample(self) -> Sample:
        return Sample(
            timestamp=int(self._clock()),
            cpu_percent=self.source.cpu_percent(),
            mem_used_mb=self.source.mem_used_mb(),
            gpu_util_percent=self.source.gpu_util_percent(),
            vram_used_mb=self.source.vram_used_mb(),
        )

    def run(self, handle: WorkloadHandle, interval_seconds: float) -> int:
        """Sample until the workload exits; return the number of rows written.

        Liveness is checked before each tick. A tick already in progress
        always completes, and the wait between ticks ends early once the
        workload exits.
        """
        count = 0
        while handle.is_alive():
            start = self._monotonic()
            sample = self.take_sample()
            self.run_log.append_sample(sample)
            count += 1
            logger.debug("Sample %d: %s", count, sample.to_line())

            elapsed = self._monotonic() - start
            remaining = max(0.0, interval_seconds - elapsed)
            if remaining > 0:
                handle.join(remaining)
        logger.info("Workload finished after %d sample(s)", count)
        return count
