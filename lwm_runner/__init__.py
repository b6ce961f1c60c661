"""Single-workload resource monitor: supervise, sample, log."""

from lwm_runner.api import MonitorConfig, MonitorRunner, RunResult, load_config

__all__ = ["MonitorConfig", "MonitorRunner", "RunResult", "load_config"]
