"""Select a metric source backend from the monitor configuration."""

from __future__ import annotations

import logging
from typing import Callable, Dict

from lwm_common.errors import ConfigurationError
from lwm_runner.models.config import MonitorConfig

from ._base_source import BaseMetricSource

logger = logging.getLogger(__name__)


def _build_cli(_config: MonitorConfig) -> BaseMetricSource:
    from .cli_source import CLIMetricSource

    return CLIMetricSource()


def _build_psutil(_config: MonitorConfig) -> BaseMetricSource:
    from .psutil_source import PSUtilMetricSource

    return PSUtilMetricSource()


BACKENDS: Dict[str, Callable[[MonitorConfig], BaseMetricSource]] = {
    "cli": _build_cli,
    "psutil": _build_psutil,
}


def build_metric_source(config: MonitorConfig) -> BaseMetricSource:
    """Instantiate the backend named by ``config.backend``."""
    try:
        factory = BACKENDS[config.backend]
    except KeyError:
        raise ConfigurationError(
            f"Unknown metric backend: {config.backend}",
            context={"backend": config.backend, "available": sorted(BACKENDS)},
        ) from None
    source = factory(config)
    logger.info("Using %s for host metrics", source.name)
    return source
