"""
Metric sources for host telemetry.

Sources are exposed lazily to avoid importing optional dependencies at
module import time.
"""

from __future__ import annotations

import importlib
from typing import Any, Dict

__all__ = [
    "BaseMetricSource",
    "CLIMetricSource",
    "NvidiaSmiSensor",
    "PSUtilMetricSource",
    "build_metric_source",
]

_LAZY_MODULES: Dict[str, str] = {
    "BaseMetricSource": "_base_source",
    "CLIMetricSource": "cli_source",
    "NvidiaSmiSensor": "gpu",
    "PSUtilMetricSource": "psutil_source",
    "build_metric_source": "registry",
}


def __getattr__(name: str) -> Any:
    if name in _LAZY_MODULES:
        module = importlib.import_module(f"{__name__}.{_LAZY_MODULES[name]}")
        return getattr(module, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
