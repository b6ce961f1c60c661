"""Wire the metric source, supervisor, sampler and run log into one run."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from lwm_common.errors import LWMError
from lwm_runner.engine.sampler import Sampler
from lwm_runner.engine.supervisor import WorkloadSupervisor, describe_exit_status
from lwm_runner.metric_sources._base_source import BaseMetricSource
from lwm_runner.metric_sources.registry import build_metric_source
from lwm_runner.models.config import MonitorConfig
from lwm_runner.models.records import RunSummary
from lwm_runner.services.run_log import RunLogger


logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Outcome of a monitoring run."""

    config: MonitorConfig
    summary: RunSummary
    samples_written: int
    warnings: list[LWMError] = field(default_factory=list)

    @property
    def exit_status(self) -> int:
        return self.summary.exit_status


class MonitorRunner:
    """Run one workload under monitoring and write its run log."""

    def __init__(
        self,
        config: MonitorConfig,
        metric_source: Optional[BaseMetricSource] = None,
        supervisor: Optional[WorkloadSupervisor] = None,
        run_log: Optional[RunLogger] = None,
        monotonic: Callable[[], float] = time.monotonic,
    ):
        self.config = config
        self._metric_source = metric_source
        self.supervisor = supervisor or WorkloadSupervisor(config)
        self.run_log = run_log or RunLogger()
        self._monotonic = monotonic

    @property
    def metric_source(self) -> BaseMetricSource:
        if self._metric_source is None:
            self._metric_source = build_metric_source(self.config)
        return self._metric_source

    def run(self) -> RunResult:
        """Execute the run.

        Dependency and configuration errors are raised before the log file
        is touched. A KeyboardInterrupt terminates the workload, still writes
        the summary row and is then re-raised.
        """
        cfg = self.config
        spec = self.supervisor.resolve(cfg.command, cfg.timeout_seconds)
        source = self.metric_source

        start = self._monotonic()
        samples = 0
        with self.run_log.open(cfg.output_path):
            handle = self.supervisor.launch(spec)
            sampler = Sampler(source, self.run_log)
            try:
                samples = sampler.run(handle, cfg.interval_seconds)
            except KeyboardInterrupt:
                logger.warning("Interrupted; stopping workload")
                handle.terminate()
                self._finish(handle, start)
                raise
            summary = self._finish(handle, start)

        warnings: list[LWMError] = [*self.supervisor.warnings, *source.get_errors()]
        return RunResult(
            config=cfg,
            summary=summary,
            samples_written=samples,
            warnings=warnings,
        )

    def _finish(self, handle, start: float) -> RunSummary:
        exit_status = self.supervisor.wait(handle)
        duration = int(self._monotonic() - start)
        summary = RunSummary(exit_status=exit_status, duration_seconds=duration)
        self.run_log.append_summary(summary)
        logger.info(
            "Workload exited with status: %s (%s)",
            exit_status,
            describe_exit_status(exit_status),
        )
        return summary
