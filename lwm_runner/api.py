"""Stable runner API surface."""

from lwm_runner.engine.runner import MonitorRunner, RunResult
from lwm_runner.engine.sampler import Sampler
from lwm_runner.engine.supervisor import (
    CommandSpec,
    WorkloadHandle,
    WorkloadSupervisor,
)
from lwm_runner.metric_sources import (
    BaseMetricSource,
    CLIMetricSource,
    NvidiaSmiSensor,
    PSUtilMetricSource,
    build_metric_source,
)
from lwm_runner.models.config import MonitorConfig, StressNGConfig, load_config
from lwm_runner.models.records import HEADER_LINE, UNAVAILABLE, RunSummary, Sample
from lwm_runner.services.run_log import RunLogger, read_run_log

__all__ = [
    "BaseMetricSource",
    "CLIMetricSource",
    "CommandSpec",
    "HEADER_LINE",
    "MonitorConfig",
    "MonitorRunner",
    "NvidiaSmiSensor",
    "PSUtilMetricSource",
    "RunLogger",
    "RunResult",
    "RunSummary",
    "Sample",
    "Sampler",
    "StressNGConfig",
    "UNAVAILABLE",
    "WorkloadHandle",
    "WorkloadSupervisor",
    "build_metric_source",
    "load_config",
    "read_run_log",
]
